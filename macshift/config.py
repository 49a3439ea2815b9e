from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .core.errors import InvalidAddress
from .net.hwaddr import RANDOM_MAC, HardwareAddress, is_random_sentinel


class InterfaceConfig(BaseModel):
    name: str = Field("eth0")
    hw: str | None = Field(default=None)  # None = read from the interface

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if not value or any(c.isspace() for c in value):
            raise ValueError("interface name must be a non-empty token")
        return value

    @field_validator("hw")
    @classmethod
    def _validate_hw(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            return str(HardwareAddress.parse(value))
        except InvalidAddress as exc:
            raise ValueError(str(exc)) from exc

    @property
    def hardware_address(self) -> HardwareAddress | None:
        return HardwareAddress.parse(self.hw) if self.hw else None


class MacChangerConfig(BaseModel):
    address: str = Field(RANDOM_MAC)

    @field_validator("address")
    @classmethod
    def _validate_address(cls, value: str) -> str:
        if is_random_sentinel(value):
            return RANDOM_MAC
        try:
            return str(HardwareAddress.parse(value))
        except InvalidAddress as exc:
            raise ValueError(str(exc)) from exc


class LoggingConfig(BaseModel):
    level: str = Field("INFO")
    format: str = Field("%(asctime)s | %(name)s | %(levelname)s | %(message)s")

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level: {value}")
        return value


class MacShiftConfig(BaseModel):
    interface: InterfaceConfig = Field(default_factory=InterfaceConfig)
    mac_changer: MacChangerConfig = Field(default_factory=MacChangerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: Path) -> MacShiftConfig:
    with Path(path).expanduser().open("r", encoding="utf-8") as fp:
        raw = yaml.safe_load(fp) or {}
    try:
        return MacShiftConfig.model_validate(raw)
    except ValidationError as exc:  # pragma: no cover - formatting
        raise ValueError(str(exc)) from exc


CONFIG_ENV = "MACSHIFT_CONFIG"
SEARCH_PATHS = (Path("/etc/macshift/macshift.yml"), Path("configs/macshift.yml"))


def resolve_config_path(cli_path: Path | None) -> Path:
    """
    First existing file among: CLI_PATH, $MACSHIFT_CONFIG, SEARCH_PATHS.

    When none exists the most specific candidate is returned unresolved, so
    callers report the path the user actually asked for.
    """
    explicit = [Path(p).expanduser() for p in (cli_path, os.environ.get(CONFIG_ENV)) if p]
    candidates = [*explicit, *SEARCH_PATHS]
    for candidate in candidates:
        if candidate.exists():
            return candidate.resolve()
    return candidates[0]
