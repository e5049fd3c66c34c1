"""Kernel socket API and the UDP transmit/receive procedures behind it."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

MAX_CONCURRENT_SOCKETS = 10
MAX_PACKET_SIZE = 1500


class AddressFamily(IntEnum):
    """Address families a socket may use."""

    IPV4 = 0
    IPV6 = 1  # unsupported
    BLUETOOTH = 2  # unsupported


class SocketType(IntEnum):
    """Kinds of socket."""

    STREAM = 0  # TCP, Bluetooth
    DGRAM = 1  # UDP
    RAW = 2


class NetError(Exception):
    """Raised when a socket request is invalid or cannot be served."""


@dataclass(frozen=True)
class SocketDef:
    """Definition of a socket: family, type, timeout and destination."""

    family: int = AddressFamily.IPV4
    type: int = SocketType.DGRAM
    timeout_ms: int = 0
    address: Any = None
    port: int = 0


_packet_data = bytearray()


def udp_tx(data: bytes) -> int:
    """Place ``data`` in the UDP packet buffer and return its length."""
    payload = bytes(data)
    if len(payload) > MAX_PACKET_SIZE:
        raise NetError(
            f"UDP packet of {len(payload)} bytes exceeds {MAX_PACKET_SIZE} bytes"
        )
    _packet_data[:] = payload
    return len(payload)


def udp_rx(data: bytearray) -> int:
    """Copy the pending UDP packet into ``data`` and return the bytes copied."""
    count = min(len(data), len(_packet_data))
    data[:count] = _packet_data[:count]
    del _packet_data[:]
    return count


_TxProc = Callable[[bytes], int]
_RxProc = Callable[[bytearray], int]

_PROCS: dict[int, tuple[_TxProc, _RxProc]] = {
    SocketType.DGRAM: (udp_tx, udp_rx),
}


class SocketApi:
    """Table of open sockets and the procedures that move their data."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Forget every socket."""
        self._sockets: list[SocketDef] = []
        self._procs: list[tuple[_TxProc, _RxProc]] = []

    @property
    def count(self) -> int:
        return len(self._sockets)

    @property
    def sockets(self) -> tuple[SocketDef, ...]:
        return tuple(self._sockets)

    def socket(self, definition: SocketDef) -> int:
        """Create a socket from ``definition`` and return its descriptor."""
        if not 0 <= int(definition.family) < len(AddressFamily):
            raise NetError(f"invalid address family {definition.family}")
        if not 0 <= int(definition.type) < len(SocketType):
            raise NetError(f"invalid socket type {definition.type}")
        if len(self._sockets) >= MAX_CONCURRENT_SOCKETS:
            raise NetError(
                f"no resources: at most {MAX_CONCURRENT_SOCKETS} sockets may be open"
            )
        procs = _PROCS.get(int(definition.type))
        if procs is None:
            raise NetError(f"unsupported socket type {definition.type}")

        self._sockets.append(definition)
        self._procs.append(procs)
        return len(self._sockets) - 1

    def _procs_for(self, descriptor: int) -> tuple[_TxProc, _RxProc]:
        if not 0 <= descriptor < len(self._procs):
            raise NetError(f"unknown socket descriptor {descriptor}")
        return self._procs[descriptor]

    def transmit(self, descriptor: int, data: bytes) -> int:
        """Send ``data`` on the socket; return the number of bytes sent."""
        tx, _ = self._procs_for(descriptor)
        return tx(data)

    def receive(self, descriptor: int, size: int) -> bytes:
        """Receive at most ``size`` bytes from the socket."""
        _, rx = self._procs_for(descriptor)
        buffer = bytearray(size)
        count = rx(buffer)
        return bytes(buffer[:count])