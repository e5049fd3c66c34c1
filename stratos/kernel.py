"""Simulated kernel: boot procedure and entry point."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Any, Callable, Optional, TextIO

from stratos.net import SimNetwork
from stratos.printf import Printer
from stratos.scheduler import Scheduler, UserTask
from stratos.timer import SimTimer

log = logging.getLogger(__name__)

STRATOS_VERSION = "0.1"
TTY_TASK_PERIOD_MS = 2000
NET_TASK_PERIOD_MS = 1000
SCHED_TICK_US = 1000
_EXECUTION_LEVEL = 0


class SimKernel:
    """Boots the simulated hardware modules and hands control to the scheduler."""

    def __init__(self, output: Optional[TextIO] = None) -> None:
        self._output = output if output is not None else sys.stdout
        self._printer = Printer(self._output.write)
        self.cpu_initialized = False
        self.uart_initialized = False
        self.irqs_enabled = False
        self.timer = SimTimer()
        self.network = SimNetwork()
        self.scheduler = Scheduler(self.timer.alloc, SCHED_TICK_US)
        self.tasks = [
            UserTask(TTY_TASK_PERIOD_MS, self._tty_task),
            UserTask(NET_TASK_PERIOD_MS, self.network.process),
        ]

    def _tty_task(self) -> None:
        self._printer.printf("\nTTY task is alive...\n")

    def _setup_drivers(self) -> None:
        """No hardware drivers exist in the simulator."""

    def init(self) -> None:
        """Initialize hardware modules, the network and the scheduler."""
        self.cpu_initialized = True
        self.uart_initialized = True
        self.irqs_enabled = False

        self._setup_drivers()

        try:
            self.network.open()
        except OSError as exc:
            log.warning("Bind failed: %s", exc)

        self.scheduler.init(self.tasks)
        self.irqs_enabled = True

    def run(self, stop: Callable[[], Any]) -> None:
        """Print the boot banner and run the scheduler until ``stop()`` is true."""
        self._printer.printf(
            "\nKernel initialized\n\rExecuting in EL%d\n", _EXECUTION_LEVEL
        )
        self._printer.printf("Version %s", STRATOS_VERSION)
        try:
            self.scheduler.run(stop)
        finally:
            self.timer.stop()
            self.network.close()


def main(argv: Optional[list[str]] = None) -> int:
    """Boot the simulated kernel and run it."""
    parser = argparse.ArgumentParser(prog="stratos", description="Run the simulated kernel.")
    parser.add_argument(
        "--seconds",
        type=float,
        default=None,
        help="stop after this many seconds (default: run until interrupted)",
    )
    args = parser.parse_args(argv)

    kernel = SimKernel(sys.stdout)
    kernel.init()

    if args.seconds is None:
        def stop() -> bool:
            return False
    else:
        deadline = time.monotonic() + args.seconds

        def stop() -> bool:
            return time.monotonic() >= deadline

    try:
        kernel.run(stop)
    except KeyboardInterrupt:
        pass
    return 0