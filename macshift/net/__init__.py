"""Link-layer address handling and per-platform command building."""

from .hwaddr import RANDOM_MAC, HardwareAddress, normalize_mac, resolve
from .platform import IFCONFIG, build_command

__all__ = [
    "HardwareAddress",
    "IFCONFIG",
    "RANDOM_MAC",
    "build_command",
    "normalize_mac",
    "resolve",
]
