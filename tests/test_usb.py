import pytest

from stratos.usb import (
    PidCode,
    UsbCoreError,
    UsbError,
    parse_pid,
    pid_byte,
    usb_core_init,
)


def test_pid_byte_carries_complement():
    assert pid_byte(PidCode.ACK) == 0xD2
    assert pid_byte(PidCode.OUT) == 0xE1


@pytest.mark.parametrize("pid", list(PidCode))
def test_pid_round_trip(pid):
    assert parse_pid(pid_byte(pid)) is pid


def test_pre_and_err_share_a_code():
    assert pid_byte(PidCode.ERR) == pid_byte(PidCode.PRE) == 0x3C
    assert parse_pid(0x3C) is PidCode.PRE
    assert parse_pid(0x3C) is PidCode.ERR


def test_parse_rejects_bad_check():
    with pytest.raises(ValueError):
        parse_pid(pid_byte(PidCode.DATA0) ^ 0x10)


def test_parse_rejects_out_of_range():
    with pytest.raises(ValueError):
        parse_pid(0x100)


def test_sim_core_init_fails_with_invalid_state():
    with pytest.raises(UsbCoreError) as info:
        usb_core_init()
    assert info.value.error is UsbError.INVLD_STATE


def test_core_init_succeeds():
    calls = []

    def power_on():
        calls.append("power")
        return True

    def hcd_init():
        calls.append("hcd")
        return UsbError.NONE

    assert usb_core_init(power_on, hcd_init) is None
    assert calls == ["power", "hcd"]


def test_power_failure_skips_hcd():
    calls = []
    with pytest.raises(UsbCoreError):
        usb_core_init(lambda: False, lambda: calls.append("hcd"))
    assert calls == []


def test_hcd_failure_raises():
    with pytest.raises(UsbCoreError) as info:
        usb_core_init(lambda: True, lambda: UsbError.INVLD_CNFG)
    assert info.value.error is UsbError.INVLD_STATE