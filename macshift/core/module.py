"""
macshift session modules.

A session module is a pluggable unit hosted by a Session. It exposes:
- a name and description
- configure/start/stop lifecycle calls
- CLI verbs (handlers), e.g. "mac.changer on"
- configuration parameters, e.g. "mac.changer.address"

The Session depends only on the SessionModule interface. ModuleBase is an
optional helper carrying the state, handler and parameter bookkeeping that
most modules share.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from .errors import InvalidParameter

if TYPE_CHECKING:
    from ..session import Session


class ModuleState(str, Enum):
    """Module lifecycle state."""
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass
class ModuleMetadata:
    name: str
    version: str = "1.0.0"
    author: str = "macshift"
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "author": self.author,
            "description": self.description,
        }


@dataclass
class ModuleHandler:
    """A CLI verb exposed by a module."""
    name: str
    description: str
    handler: Callable[[], Any]

    def matches(self, line: str) -> bool:
        return line.strip() == self.name

    def __call__(self) -> Any:
        return self.handler()


@dataclass
class ModuleParameter:
    """
    A named string parameter with a default and an optional validator regex.

    Values listed in ``allow`` bypass the validator (used for sentinels such
    as "random").
    """
    name: str
    default: str
    validator: str | None = None
    description: str = ""
    allow: tuple[str, ...] = field(default_factory=tuple)

    def validate(self, value: str) -> str:
        value = value.strip()
        if value.lower() in (a.lower() for a in self.allow):
            return value
        if self.validator and not re.fullmatch(self.validator, value):
            raise InvalidParameter(
                f"Parameter {self.name} value {value!r} doesn't match {self.validator}"
            )
        return value


class SessionModule(ABC):
    """Interface every module hosted by a Session must implement."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def description(self) -> str: ...

    @property
    def author(self) -> str:
        return ""

    @property
    @abstractmethod
    def running(self) -> bool: ...

    @abstractmethod
    def configure(self) -> None: ...

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def stop(self) -> None: ...

    @abstractmethod
    def handlers(self) -> list[ModuleHandler]: ...

    @abstractmethod
    def parameters(self) -> list[ModuleParameter]: ...


class ModuleBase(SessionModule):
    """
    Shared bookkeeping for modules.

    Subclasses implement metadata(), configure(), start() and stop(), and
    register their handlers and parameters in __init__.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self._state = ModuleState.STOPPED
        self._handlers: list[ModuleHandler] = []
        self._params: list[ModuleParameter] = []
        self._started_at: datetime | None = None
        self._metrics: dict[str, int] = {}

        self.log = logging.getLogger(f"macshift.modules.{self.metadata().name}")

    @staticmethod
    @abstractmethod
    def metadata() -> ModuleMetadata:
        ...

    @property
    def name(self) -> str:
        return self.metadata().name

    @property
    def description(self) -> str:
        return self.metadata().description

    @property
    def author(self) -> str:
        return self.metadata().author

    @property
    def state(self) -> ModuleState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state == ModuleState.RUNNING

    def set_running(self, running: bool) -> None:
        if running:
            self._state = ModuleState.RUNNING
            self._started_at = datetime.now(UTC)
        else:
            self._state = ModuleState.STOPPED
            self._started_at = None

    def add_handler(self, handler: ModuleHandler) -> None:
        self._handlers.append(handler)

    def add_param(self, param: ModuleParameter) -> None:
        self._params.append(param)

    def handlers(self) -> list[ModuleHandler]:
        return list(self._handlers)

    def parameters(self) -> list[ModuleParameter]:
        return list(self._params)

    def string_param(self, name: str) -> str:
        return self.session.get(name)

    def emit(self, event_name: str, data: dict[str, Any] | None = None) -> None:
        self.session.emit(self.name, event_name, data or {})

    def increment_metric(self, name: str, value: int = 1) -> None:
        key = f"macshift_{self.name.replace('.', '_')}_{name}"
        self._metrics[key] = self._metrics.get(key, 0) + value

    def get_metrics(self) -> dict[str, int]:
        return dict(self._metrics)

    def get_status(self) -> dict[str, Any]:
        meta = self.metadata()
        return {
            "name": meta.name,
            "version": meta.version,
            "state": self._state.value,
            "started_at": self._started_at.isoformat() if self._started_at else None,
            "metrics": self.get_metrics(),
        }
