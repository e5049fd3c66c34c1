"""Simulated network interface and the network processing task."""

from __future__ import annotations

import logging
import socket
import sys
from typing import Any, Optional

from stratos.printf import format_printf

log = logging.getLogger(__name__)

DEFAULT_ADDRESS = "192.168.1.100"
DEFAULT_PORT = 8000
IN_DATA_BUFF_SIZE = 1200
_BASE_TIMEOUT_S = 2
_US_PER_SECOND = 1_000_000


class SimNetwork:
    """A UDP socket bound to the device's address, used as its network link."""

    def __init__(self, address: str = DEFAULT_ADDRESS, port: int = DEFAULT_PORT) -> None:
        self.address = address
        self.port = port
        self._sock: Optional[socket.socket] = None

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    @property
    def bound_address(self) -> tuple[str, int]:
        if self._sock is None:
            raise RuntimeError("socket is not initialized")
        return self._sock.getsockname()

    def open(self) -> None:
        """Create the UDP socket and bind it to the configured address and port."""
        self.close()
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((self.address, self.port))
        except OSError:
            sock.close()
            raise
        self._sock = sock

    def get_packet(self, buffer_size: int, timeout_us: int) -> bytes:
        """Wait for one packet of at most ``buffer_size`` bytes and return it.

        The wait lasts two seconds plus ``timeout_us`` microseconds.
        """
        if self._sock is None:
            raise RuntimeError("socket is not initialized")
        self._sock.settimeout(_BASE_TIMEOUT_S + timeout_us / _US_PER_SECOND)
        data, _ = self._sock.recvfrom(buffer_size)
        return data

    def process(self) -> Optional[bytes]:
        """Network task: receive one packet and print its contents."""
        try:
            data = self.get_packet(IN_DATA_BUFF_SIZE, 1)
        except (RuntimeError, OSError) as exc:
            log.warning("Packet receive failed: %s", exc)
            return None
        text = data.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        sys.stdout.write(format_printf("packet_data=%s", text))
        return data

    def close(self) -> None:
        """Close the socket if it is open."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> "SimNetwork":
        self.open()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()