"""
Hardware (link-layer) address parsing and generation.

Accepted input forms, case-insensitive:
    aa:bb:cc:dd:ee:ff
    aa-bb-cc-dd-ee-ff
    aabbccddeeff

Separators must be used consistently. Anything else, including mixed
separators, is rejected with InvalidAddress. MAC_PATTERN describes the same
grammar for parameter validation.
"""

from __future__ import annotations

import re
import secrets
from dataclasses import dataclass
from typing import Protocol

from ..core.errors import InvalidAddress

RANDOM_MAC = "random"

MAC_PATTERN = r"[a-fA-F0-9]{2}([:-]?)[a-fA-F0-9]{2}(?:\1[a-fA-F0-9]{2}){4}"

_COLON_RE = re.compile(r"^[0-9a-f]{2}(:[0-9a-f]{2}){5}$")
_BARE_RE = re.compile(r"^[0-9a-f]{12}$")

_MULTICAST_BIT = 0x01
_LOCAL_ADMIN_BIT = 0x02


class RandomSource(Protocol):
    def getrandbits(self, k: int) -> int: ...


def normalize_mac(value: str) -> str:
    """Lowercase and turn '-' into ':'. Mixed separators are left as-is."""
    value = value.strip().lower()
    if ":" in value and "-" in value:
        return value
    return value.replace("-", ":")


@dataclass(frozen=True)
class HardwareAddress:
    """Six-octet link-layer address."""

    octets: bytes

    def __post_init__(self) -> None:
        if len(self.octets) != 6:
            raise InvalidAddress(f"hardware address must have 6 octets, got {len(self.octets)}")

    @classmethod
    def parse(cls, text: str) -> HardwareAddress:
        normalized = normalize_mac(text)
        if _COLON_RE.match(normalized):
            return cls(bytes.fromhex(normalized.replace(":", "")))
        if _BARE_RE.match(normalized):
            return cls(bytes.fromhex(normalized))
        raise InvalidAddress(f"invalid hardware address: {text!r}")

    @classmethod
    def random(cls, rng: RandomSource | None = None) -> HardwareAddress:
        """Locally-administered unicast address from 6 random octets."""
        if rng is None:
            raw = bytearray(secrets.token_bytes(6))
        else:
            raw = bytearray(rng.getrandbits(8) for _ in range(6))
        raw[0] = (raw[0] | _LOCAL_ADMIN_BIT) & ~_MULTICAST_BIT & 0xFF
        return cls(bytes(raw))

    @property
    def is_multicast(self) -> bool:
        return bool(self.octets[0] & _MULTICAST_BIT)

    @property
    def is_local_admin(self) -> bool:
        return bool(self.octets[0] & _LOCAL_ADMIN_BIT)

    def __str__(self) -> str:
        return ":".join(f"{b:02x}" for b in self.octets)


def is_random_sentinel(value: str) -> bool:
    return value.strip().lower() == RANDOM_MAC


def resolve(config_value: str, rng: RandomSource | None = None) -> HardwareAddress:
    """Resolve a configured address string, generating one for the random sentinel."""
    if is_random_sentinel(config_value):
        return HardwareAddress.random(rng)
    return HardwareAddress.parse(config_value)
