"""Error types raised by session modules and the session itself."""

from __future__ import annotations

from typing import Sequence


class MacShiftError(Exception):
    """Base class for every macshift error."""


class InvalidAddress(MacShiftError, ValueError):
    """Address string does not match the six-octet hex grammar."""


class UnsupportedPlatform(MacShiftError):
    """No address-change command is known for the running OS."""

    def __init__(self, os_identifier: str) -> None:
        super().__init__(f"OS {os_identifier} not supported by mac.changer module.")
        self.os_identifier = os_identifier


class AlreadyStarted(MacShiftError):
    def __init__(self, module: str) -> None:
        super().__init__(f"Module {module} is already running.")
        self.module = module


class AlreadyStopped(MacShiftError):
    def __init__(self, module: str) -> None:
        super().__init__(f"Module {module} is not running.")
        self.module = module


class CommandFailed(MacShiftError):
    """External command exited with an error (or could not be executed)."""

    def __init__(
        self,
        command: str,
        args: Sequence[str],
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        detail = output.strip() or f"exit status {returncode}"
        super().__init__(f"{command} {' '.join(args)}: {detail}")
        self.command = command
        self.args_list = list(args)
        self.returncode = returncode
        self.output = output


class InvalidParameter(MacShiftError, ValueError):
    """Unknown parameter name or value rejected by its validator."""


class UnknownCommand(MacShiftError):
    def __init__(self, line: str) -> None:
        super().__init__(f"Unknown or invalid syntax \"{line}\", type help for the help menu.")
        self.line = line
