"""Sensor types and the sensor manager that loads configured sensors."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from stratos.config import (
    MAX_SENSOR_CONFIGS,
    ConfigError,
    KernelConfig,
    SensorConfig,
    SensorHardware,
    get_system_config,
)

log = logging.getLogger(__name__)

MAX_SENSORS_PER_TYPE = 25
_HW_COUNT = 2


class SensorType(IntEnum):
    """Kinds of sensor the system manages."""

    DIST = 0
    INVALID = 1


class SensorError(Exception):
    """Raised when a sensor cannot be configured or registered."""


@dataclass
class SensorControlBlock:
    """State kept for one configured sensor."""

    config: SensorConfig
    registered: bool = False
    sid: int = 0


_HW_TYPE_MAP = {SensorHardware.HCSR04: SensorType.DIST}


def get_sensor_type(hw_type: int) -> SensorType:
    """Return the sensor type of the given hardware type."""
    if hw_type >= _HW_COUNT:
        return SensorType.INVALID
    try:
        return _HW_TYPE_MAP[SensorHardware(hw_type)]
    except (KeyError, ValueError):
        return SensorType.INVALID


class SensorManager:
    """Loads the configured sensors and registers them with their sub-managers."""

    def __init__(
        self,
        register_distance: Callable[[SensorControlBlock], Any],
        config_source: Callable[[], KernelConfig] = get_system_config,
    ) -> None:
        self._register_distance = register_distance
        self._config_source = config_source
        self.distance_sensors: list[SensorControlBlock] = []
        self.active_count = 0

    def init(self) -> None:
        """Load every configured sensor; raise SensorError on a bad configuration."""
        self.distance_sensors = []
        self.active_count = 0

        try:
            config = self._config_source()
        except ConfigError as exc:
            raise SensorError(f"invalid sensor configuration: {exc}") from exc
        if config.num_sensors > MAX_SENSOR_CONFIGS:
            raise SensorError(
                f"too many sensors configured: {config.num_sensors}"
            )

        for sensor in config.sensors:
            if get_sensor_type(sensor.hw_type) is SensorType.DIST:
                self._add_distance_sensor(sensor)
            else:
                log.warning("Invalid sensor configuration")

    def _add_distance_sensor(self, sensor: SensorConfig) -> None:
        if len(self.distance_sensors) >= MAX_SENSORS_PER_TYPE:
            raise SensorError(
                f"at most {MAX_SENSORS_PER_TYPE} distance sensors are supported"
            )
        block = SensorControlBlock(config=sensor, registered=False)
        self.distance_sensors.append(block)
        try:
            self._register_distance(block)
        except SensorError as exc:
            log.warning("Failed to register distance sensor: %s", exc)
            return
        block.registered = True
        self.active_count += 1