"""
Session - hosts modules, their parameters and the shared interface state.

Usage:
    session = Session(InterfaceContext("eth0", HardwareAddress.parse("...")))
    session.register(MacChanger(session))
    session.run("set mac.changer.address 11:22:33:44:55:66")
    session.run("mac.changer on")
    ...
    session.run("mac.changer off")
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from .core.errors import InvalidParameter, MacShiftError, UnknownCommand
from .core.module import ModuleParameter, SessionModule
from .net.hwaddr import HardwareAddress
from .tools.iface_utils import CommandRunner, current_os, run_command

logger = logging.getLogger(__name__)


@dataclass
class InterfaceContext:
    """The active interface. ``hw`` is written by modules that change it."""
    name: str
    hw: HardwareAddress | None = None


class Session:
    def __init__(
        self,
        interface: InterfaceContext,
        runner: CommandRunner | None = None,
        os_identifier: str | None = None,
        env: dict[str, str] | None = None,
    ) -> None:
        self.interface = interface
        self.runner: CommandRunner = runner or run_command
        self.os = os_identifier or current_os()
        self.env: dict[str, str] = dict(env or {})

        self._modules: dict[str, SessionModule] = {}
        self._params: dict[str, ModuleParameter] = {}
        self._start_order: list[str] = []
        self._event_handlers: dict[str, list[Callable]] = {}
        # Reentrant so event handlers may start or stop modules
        self._lock = threading.RLock()

    @property
    def modules(self) -> list[SessionModule]:
        return list(self._modules.values())

    # ==========================================================================
    # Registration & parameters
    # ==========================================================================

    def register(self, module: SessionModule) -> None:
        if module.name in self._modules:
            logger.warning("Module already registered: %s", module.name)
            return

        params = module.parameters()
        values = {
            p.name: p.validate(self.env[p.name]) if p.name in self.env else p.default
            for p in params
        }

        self._modules[module.name] = module
        self._params.update((p.name, p) for p in params)
        self.env.update(values)
        logger.debug("Registered module: %s", module.name)

    def get_module(self, name: str) -> SessionModule | None:
        return self._modules.get(name)

    def list_modules(self) -> list[str]:
        return list(self._modules.keys())

    def set(self, name: str, value: str) -> None:
        param = self._params.get(name)
        if param is not None:
            value = param.validate(value)
        self.env[name] = value
        logger.debug("%s => %s", name, value)

    def get(self, name: str) -> str:
        if name not in self.env:
            raise InvalidParameter(f"Parameter {name} not found.")
        return self.env[name]

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    def start_module(self, name: str) -> None:
        module = self._require(name)
        with self._lock:
            module.start()
            self._track(module)

    def stop_module(self, name: str) -> None:
        module = self._require(name)
        with self._lock:
            module.stop()
            self._track(module)

    def stop_all(self) -> None:
        """Stop running modules in reverse start order, logging failures."""
        with self._lock:
            for name in reversed(self._start_order.copy()):
                module = self._modules[name]
                if not module.running:
                    self._start_order.remove(name)
                    continue
                try:
                    self.stop_module(name)
                except MacShiftError as e:
                    logger.error("Module stop error (%s): %s", name, e)

    def _require(self, name: str) -> SessionModule:
        module = self._modules.get(name)
        if module is None:
            raise UnknownCommand(name)
        return module

    # ==========================================================================
    # Command dispatch
    # ==========================================================================

    def run(self, line: str) -> Any:
        line = line.strip()
        if not line:
            return None

        parts = line.split()
        if parts[0] == "set" and len(parts) == 3:
            self.set(parts[1], parts[2])
            return None
        if parts[0] == "get" and len(parts) == 2:
            return self.get(parts[1])

        for module in self._modules.values():
            for handler in module.handlers():
                if handler.matches(line):
                    with self._lock:
                        result = handler()
                        self._track(module)
                    return result

        raise UnknownCommand(line)

    def _track(self, module: SessionModule) -> None:
        if module.running and module.name not in self._start_order:
            self._start_order.append(module.name)
        elif not module.running and module.name in self._start_order:
            self._start_order.remove(module.name)

    # ==========================================================================
    # Events
    # ==========================================================================

    def on_event(self, event_name: str, handler: Callable) -> None:
        self._event_handlers.setdefault(event_name, []).append(handler)

    def emit(self, source: str, event_name: str, data: dict[str, Any]) -> None:
        full_event = f"{source}.{event_name}"
        for handler in self._event_handlers.get(full_event, []):
            try:
                handler(data)
            except Exception as e:
                logger.error("Event handler error (%s): %s", full_event, e)

    # ==========================================================================
    # Status
    # ==========================================================================

    def get_all_status(self) -> list[dict[str, Any]]:
        status = []
        for module in self._modules.values():
            get_status = getattr(module, "get_status", None)
            if callable(get_status):
                status.append(get_status())
            else:
                status.append({"name": module.name, "state": "running" if module.running else "stopped"})
        return status
