"""A simulated embedded kernel: task scheduler, timer, sensors, GPIO model, sockets, USB PIDs and printf."""

__version__ = "0.1.0"