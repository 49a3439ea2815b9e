"""
mac.changer - change the active interface hardware address.

Verbs:
    mac.changer on    set the interface address to mac.changer.address
    mac.changer off   restore the address the interface had before "on"

Parameter:
    mac.changer.address   address to apply, or "random" (default) for a
                          locally-administered unicast address
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.errors import AlreadyStarted, AlreadyStopped, InvalidAddress
from ..core.module import ModuleBase, ModuleHandler, ModuleMetadata, ModuleParameter
from ..net.hwaddr import MAC_PATTERN, RANDOM_MAC, HardwareAddress, RandomSource, resolve
from ..net.platform import build_command

if TYPE_CHECKING:
    from ..session import Session

ADDRESS_PARAM = "mac.changer.address"


class MacChanger(ModuleBase):

    @staticmethod
    def metadata() -> ModuleMetadata:
        return ModuleMetadata(
            name="mac.changer",
            version="1.0.0",
            author="macshift",
            description="Change active interface mac address.",
        )

    def __init__(self, session: Session, rng: RandomSource | None = None) -> None:
        super().__init__(session)
        self._rng = rng
        self.original_mac: HardwareAddress | None = None
        self.fake_mac: HardwareAddress | None = None

        self.add_param(ModuleParameter(
            ADDRESS_PARAM,
            RANDOM_MAC,
            MAC_PATTERN,
            "Hardware address to apply to the interface.",
            allow=(RANDOM_MAC,),
        ))

        self.add_handler(ModuleHandler(
            "mac.changer on",
            "Start mac changer module.",
            self.start,
        ))
        self.add_handler(ModuleHandler(
            "mac.changer off",
            "Stop mac changer module and restore original mac address.",
            self.stop,
        ))

    def _resolve_addresses(self) -> tuple[HardwareAddress, HardwareAddress]:
        fake_mac = resolve(self.string_param(ADDRESS_PARAM), self._rng)
        original_mac = self.session.interface.hw
        if original_mac is None:
            raise InvalidAddress(
                f"no hardware address known for {self.session.interface.name}, cannot restore it later"
            )
        return fake_mac, original_mac

    def configure(self) -> None:
        self.fake_mac, self.original_mac = self._resolve_addresses()

    def _set_mac(self, mac: HardwareAddress) -> None:
        command, args = build_command(self.session.os, self.session.interface.name, mac)
        self.session.runner(command, args)
        self.session.interface.hw = mac

    def start(self) -> None:
        if self.running:
            raise AlreadyStarted(self.name)

        fake_mac, original_mac = self._resolve_addresses()
        self.fake_mac, self.original_mac = fake_mac, original_mac
        self._set_mac(fake_mac)

        self.set_running(True)
        self.increment_metric("changes")
        self.log.info("Interface mac address set to %s", fake_mac)
        self.emit("started", {"interface": self.session.interface.name, "mac": str(fake_mac)})

    def stop(self) -> None:
        if not self.running:
            raise AlreadyStopped(self.name)
        original_mac = self.original_mac
        if original_mac is None:
            raise InvalidAddress(f"no original hardware address recorded for {self.session.interface.name}")

        self._set_mac(original_mac)

        self.set_running(False)
        self.increment_metric("restores")
        self.log.info("Interface mac address restored to %s", original_mac)
        self.emit("stopped", {"interface": self.session.interface.name, "mac": str(original_mac)})
