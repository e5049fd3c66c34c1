import pytest

from stratos.config import Hcsr04Config, SensorConfig, SensorHardware
from stratos.gpio import GpioController, GpioFunction
from stratos.hc_sr04 import Hcsr04Driver, Hcsr04Instance
from stratos.sensors import SensorError


def _config(trig, echo):
    return SensorConfig(hw_type=SensorHardware.HCSR04, hw_config=Hcsr04Config(trig, echo))


class FakeEcho:
    """Raises the echo pin during the trigger pulse and drops it after ``width`` us."""

    def __init__(self, gpio, echo, width):
        self.gpio = gpio
        self.echo = echo
        self.remaining = width
        self.calls = []

    def __call__(self, us):
        self.calls.append(us)
        if us == 10:
            self.gpio.drive_level(self.echo, True)
        else:
            self.remaining -= 1
            if self.remaining == 0:
                self.gpio.drive_level(self.echo, False)


def test_register_sets_pin_functions():
    gpio = GpioController()
    driver = Hcsr04Driver(gpio, lambda us: None)
    instance = driver.register_sensor(_config(25, 24))
    assert instance == Hcsr04Instance(inst_id=0, pin_cfg=Hcsr04Config(25, 24))
    assert gpio.function_of(25) is GpioFunction.OUTPUT
    assert gpio.function_of(24) is GpioFunction.INPUT


def test_register_rejects_wrong_hardware():
    driver = Hcsr04Driver(GpioController(), lambda us: None)
    with pytest.raises(SensorError):
        driver.register_sensor(SensorConfig())
    assert driver.instances == []


def test_register_limit():
    driver = Hcsr04Driver(GpioController(), lambda us: None)
    for index in range(10):
        driver.register_sensor(_config(2 * index, 2 * index + 1))
    assert [inst.inst_id for inst in driver.instances] == list(range(10))
    with pytest.raises(SensorError):
        driver.register_sensor(_config(30, 31))


def test_init_clears_instances():
    driver = Hcsr04Driver(GpioController(), lambda us: None)
    driver.register_sensor(_config(25, 24))
    driver.init()
    assert driver.instances == []
    assert driver.register_sensor(_config(25, 24)).inst_id == 0


@pytest.mark.parametrize("width", [1, 5, 58])
def test_measure_returns_echo_width(width):
    gpio = GpioController()
    delay = FakeEcho(gpio, echo=24, width=width)
    driver = Hcsr04Driver(gpio, delay)
    instance = driver.register_sensor(_config(25, 24))
    assert driver.measure(instance) == width
    assert delay.calls[0] == 10
    assert gpio.get(25) is False
    assert gpio.get(24) is False


def test_measure_uses_given_instance():
    gpio = GpioController()
    delay = FakeEcho(gpio, echo=7, width=3)
    driver = Hcsr04Driver(gpio, delay)
    driver.register_sensor(_config(25, 24))
    second = driver.register_sensor(_config(8, 7))
    assert driver.measure(second) == 3