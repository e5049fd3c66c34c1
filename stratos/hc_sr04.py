"""HC-SR04 ultrasonic distance sensor driver."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from stratos.config import MAX_DISTANCE_SENSORS, Hcsr04Config, SensorConfig, SensorHardware
from stratos.gpio import GpioController
from stratos.sensors import SensorError

log = logging.getLogger(__name__)

TRIGGER_PULSE_US = 10


@dataclass(frozen=True)
class Hcsr04Instance:
    """One registered HC-SR04 sensor."""

    inst_id: int
    pin_cfg: Hcsr04Config


class Hcsr04Driver:
    """Manages HC-SR04 sensor instances on a GPIO controller."""

    def __init__(self, gpio: GpioController, delay_us: Callable[[int], Any]) -> None:
        self._gpio = gpio
        self._delay_us = delay_us
        self.instances: list[Hcsr04Instance] = []

    def init(self) -> None:
        """Forget every registered instance."""
        self.instances = []

    def register_sensor(self, config: SensorConfig) -> Hcsr04Instance:
        """Register a new sensor and set up its pins."""
        if config.hw_type != SensorHardware.HCSR04 or config.hw_config is None:
            raise SensorError("invalid configuration for an HC-SR04 sensor")
        if len(self.instances) >= MAX_DISTANCE_SENSORS:
            raise SensorError(
                f"sensor limit reached, count is {len(self.instances)}"
            )

        pins = config.hw_config
        instance = Hcsr04Instance(inst_id=len(self.instances), pin_cfg=pins)
        self.instances.append(instance)

        self._gpio.set_input(pins.echo)
        self._gpio.set_output(pins.trig)
        self._gpio.enable(pins.echo)
        self._gpio.enable(pins.trig)

        log.debug("New HC_SR04 sensor trig_pin=%d, echo_pin=%d", pins.trig, pins.echo)
        return instance

    def measure(self, instance: Hcsr04Instance) -> int:
        """Trigger a reading and return the echo pulse width in microseconds."""
        trig = instance.pin_cfg.trig
        echo = instance.pin_cfg.echo

        self._gpio.set(trig)
        self._delay_us(TRIGGER_PULSE_US)
        self._gpio.clear(trig)

        while not self._gpio.get(echo):
            pass

        width = 0
        while self._gpio.get(echo):
            self._delay_us(1)
            width += 1

        log.debug("Delay was %d microseconds.", width)
        return width