"""System configuration types and the system configuration source."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

MAX_SENSOR_CONFIGS = 100
MAX_DISTANCE_SENSORS = 10


class SensorHardware(IntEnum):
    """Sensor hardware kinds that can be configured."""

    NONE = 0
    HCSR04 = 1


class ConfigError(Exception):
    """Raised when a configuration is invalid."""


def _check_pin(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} pin must fit in one byte, got {value}")


@dataclass(frozen=True)
class Hcsr04Config:
    """Pin configuration of an HC-SR04 ultrasonic distance sensor."""

    trig: int
    echo: int

    def __post_init__(self) -> None:
        _check_pin("trig", self.trig)
        _check_pin("echo", self.echo)


@dataclass(frozen=True)
class SensorConfig:
    """Configuration of one sensor: its hardware kind and hardware settings."""

    hw_type: SensorHardware = SensorHardware.NONE
    hw_config: Optional[Hcsr04Config] = None


@dataclass
class KernelConfig:
    """Kernel configuration holding the configured sensors."""

    sensors: list[SensorConfig] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.sensors) > MAX_SENSOR_CONFIGS:
            raise ConfigError(
                f"at most {MAX_SENSOR_CONFIGS} sensors may be configured, "
                f"got {len(self.sensors)}"
            )

    @property
    def num_sensors(self) -> int:
        return len(self.sensors)


def get_system_config() -> KernelConfig:
    """Return a fresh copy of the system configuration."""
    return KernelConfig(
        sensors=[
            SensorConfig(
                hw_type=SensorHardware.HCSR04,
                hw_config=Hcsr04Config(trig=25, echo=24),
            )
        ]
    )