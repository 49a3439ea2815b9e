import pytest

from macshift.core.errors import UnsupportedPlatform
from macshift.net.hwaddr import HardwareAddress
from macshift.net.platform import build_command

TARGET = HardwareAddress.parse("AA:BB:CC:DD:EE:FF")


@pytest.mark.parametrize("os_id", ["darwin", "freebsd", "openbsd", "netbsd", "Darwin"])
def test_bsd_family_ordering(os_id):
    command, args = build_command(os_id, "eth0", TARGET)
    assert command == "ifconfig"
    assert args == ["eth0", "ether", "aa:bb:cc:dd:ee:ff"]


@pytest.mark.parametrize("os_id", ["linux", "Linux"])
def test_linux_ordering(os_id):
    command, args = build_command(os_id, "eth0", TARGET)
    assert command == "ifconfig"
    assert args == ["eth0", "hw", "ether", "aa:bb:cc:dd:ee:ff"]


@pytest.mark.parametrize("os_id", ["plan9", "windows", "", "linux2"])
def test_unsupported_platform(os_id):
    with pytest.raises(UnsupportedPlatform) as exc_info:
        build_command(os_id, "eth0", TARGET)
    assert exc_info.value.os_identifier == os_id
