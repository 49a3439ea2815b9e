from __future__ import annotations

import logging
import platform
import subprocess
from typing import Protocol, Sequence

import psutil

from ..core.errors import CommandFailed, InvalidAddress
from ..net.hwaddr import HardwareAddress

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    """Runs an external command and returns its output, raising CommandFailed on error."""

    def __call__(self, command: str, args: Sequence[str]) -> str: ...


def run_command(command: str, args: Sequence[str]) -> str:
    cmd = [command, *args]
    logger.debug("exec: %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, check=True, text=True, capture_output=True)
    except subprocess.CalledProcessError as exc:
        output = (exc.stderr or "") + (exc.stdout or "")
        raise CommandFailed(command, args, exc.returncode, output) from exc
    except (FileNotFoundError, OSError) as exc:
        raise CommandFailed(command, args, None, str(exc)) from exc
    return proc.stdout


def current_os() -> str:
    return platform.system().lower()


def read_hardware_address(interface: str) -> HardwareAddress | None:
    """Current link-layer address of INTERFACE, or None if it has none."""
    for addr in psutil.net_if_addrs().get(interface, []):
        if addr.family != psutil.AF_LINK:
            continue
        try:
            return HardwareAddress.parse(addr.address)
        except InvalidAddress:
            logger.debug("ignoring link address %r on %s", addr.address, interface)
    return None


def dry_run_command(command: str, args: Sequence[str]) -> str:
    logger.info("dry-run: %s %s", command, " ".join(args))
    return ""
