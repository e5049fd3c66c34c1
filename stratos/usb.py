"""USB 2.0 core: packet identifiers and core initialization."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from typing import Any


class PidCode(IntEnum):
    """4-bit USB packet identifier codes (USB 2.0, table 8-1)."""

    # Token
    OUT = 0x1
    IN = 0x9
    SOF = 0x5
    SETUP = 0xD
    # Data
    DATA0 = 0x3
    DATA1 = 0xB
    DATA2 = 0x7
    MDATA = 0xF
    # Handshake
    ACK = 0x2
    NAK = 0xA
    STALL = 0xE
    NYET = 0x6
    # Special; PRE (token) and ERR (handshake) share a code
    PRE = 0x0C
    ERR = 0x0C
    SPLIT = 0x08
    PING = 0x04
    RESERVED = 0x00


class UsbError(IntEnum):
    """USB error codes."""

    NONE = 0
    CORE_FAULT = 1
    MEM = 2
    INVLD_STATE = 3
    INVLD_CNFG = 4


class UsbCoreError(Exception):
    """Raised when the USB core cannot be brought up."""

    def __init__(self, error: UsbError, message: str = "") -> None:
        super().__init__(message or f"USB core error: {error.name}")
        self.error = error


def pid_byte(pid: int) -> int:
    """Return the PID byte: the code in the low nibble, its complement in the high."""
    code = PidCode(pid)
    return int(code) | ((~int(code) & 0xF) << 4)


def parse_pid(byte: int) -> PidCode:
    """Decode a PID byte, checking its complement nibble."""
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"PID byte must fit in 8 bits, got {byte}")
    code = byte & 0xF
    check = (byte >> 4) & 0xF
    if check != (~code & 0xF):
        raise ValueError(f"PID check field mismatch in byte 0x{byte:02X}")
    return PidCode(code)


def _sim_power_on_usb() -> bool:
    return False


def _sim_hcd_init() -> UsbError:
    return UsbError.INVLD_STATE


def usb_core_init(
    power_on: Callable[[], Any] = _sim_power_on_usb,
    hcd_init: Callable[[], Any] = _sim_hcd_init,
) -> None:
    """Power the USB hardware and initialize the host controller driver."""
    if not power_on():
        raise UsbCoreError(UsbError.INVLD_STATE, "failed to power on USB")
    result = hcd_init()
    if result is not None and UsbError(result) is not UsbError.NONE:
        raise UsbCoreError(
            UsbError.INVLD_STATE,
            f"host controller driver failed to initialize: {UsbError(result).name}",
        )