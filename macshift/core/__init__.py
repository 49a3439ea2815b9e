"""macshift core - module interface, errors and shared types."""

from .errors import (
    AlreadyStarted,
    AlreadyStopped,
    CommandFailed,
    InvalidAddress,
    InvalidParameter,
    MacShiftError,
    UnknownCommand,
    UnsupportedPlatform,
)
from .module import (
    ModuleBase,
    ModuleHandler,
    ModuleMetadata,
    ModuleParameter,
    ModuleState,
    SessionModule,
)

__all__ = [
    "AlreadyStarted",
    "AlreadyStopped",
    "CommandFailed",
    "InvalidAddress",
    "InvalidParameter",
    "MacShiftError",
    "ModuleBase",
    "ModuleHandler",
    "ModuleMetadata",
    "ModuleParameter",
    "ModuleState",
    "SessionModule",
    "UnknownCommand",
    "UnsupportedPlatform",
]
