from __future__ import annotations

from ..core.errors import UnsupportedPlatform
from .hwaddr import HardwareAddress

IFCONFIG = "ifconfig"


def build_command(
    os_identifier: str,
    interface_name: str,
    target: HardwareAddress,
) -> tuple[str, list[str]]:
    """Return (command, args) that set TARGET on INTERFACE_NAME for the given OS."""
    os_id = os_identifier.lower()
    if "bsd" in os_id or os_id == "darwin":
        args = [interface_name, "ether", str(target)]
    elif os_id == "linux":
        args = [interface_name, "hw", "ether", str(target)]
    else:
        raise UnsupportedPlatform(os_identifier)
    return IFCONFIG, args
