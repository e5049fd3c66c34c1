"""GPIO controller with an in-memory register model of the BCM2xxx GPIO block."""

from __future__ import annotations

from enum import IntEnum

MAX_PIN = 53
_REG_BITS = 32
_FUNC_BITS = 3
_FUNC_MASK = 0b111
_PINS_PER_FUNC_REG = 10
_FUNC_REG_COUNT = 6
_DATA_REG_COUNT = 2


class GpioFunction(IntEnum):
    """Function-select codes of a GPIO pin."""

    INPUT = 0
    OUTPUT = 1
    ALT0 = 4
    ALT1 = 5
    ALT2 = 6
    ALT3 = 7
    ALT4 = 3
    ALT5 = 2


def _check_pin(pin: int) -> None:
    if not 0 <= pin <= MAX_PIN:
        raise ValueError(f"GPIO pin must be between 0 and {MAX_PIN}, got {pin}")


def _word_and_mask(pin: int) -> tuple[int, int]:
    return pin // _REG_BITS, 1 << (pin % _REG_BITS)


class GpioController:
    """Pin function selection, output control and level reading."""

    def __init__(self) -> None:
        self._function_select = [0] * _FUNC_REG_COUNT
        self._level = [0] * _DATA_REG_COUNT
        self._pull_up_down = 0
        self._pull_clocks = [0] * _DATA_REG_COUNT

    def set_function(self, pin: int, function: GpioFunction) -> None:
        """Select the function of ``pin``."""
        _check_pin(pin)
        code = GpioFunction(function)
        start_bit = (pin * _FUNC_BITS) % (_FUNC_BITS * _PINS_PER_FUNC_REG)
        index = pin // _PINS_PER_FUNC_REG
        value = self._function_select[index]
        value &= ~(_FUNC_MASK << start_bit)
        value |= int(code) << start_bit
        self._function_select[index] = value

    def function_of(self, pin: int) -> GpioFunction:
        """Return the function currently selected for ``pin``."""
        _check_pin(pin)
        start_bit = (pin * _FUNC_BITS) % (_FUNC_BITS * _PINS_PER_FUNC_REG)
        index = pin // _PINS_PER_FUNC_REG
        return GpioFunction((self._function_select[index] >> start_bit) & _FUNC_MASK)

    def set_output(self, pin: int) -> None:
        """Make ``pin`` an output."""
        self.set_function(pin, GpioFunction.OUTPUT)

    def set_input(self, pin: int) -> None:
        """Make ``pin`` an input."""
        self.set_function(pin, GpioFunction.INPUT)

    def enable(self, pin: int) -> None:
        """Disable pull-up/down on ``pin`` by clocking the pull control."""
        _check_pin(pin)
        self._pull_up_down = 0
        index, mask = _word_and_mask(pin)
        self._pull_clocks[index] = mask
        self._pull_clocks[index] = 0

    def set(self, pin: int) -> None:
        """Drive ``pin`` high."""
        self.drive_level(pin, True)

    def clear(self, pin: int) -> None:
        """Drive ``pin`` low."""
        self.drive_level(pin, False)

    def get(self, pin: int) -> bool:
        """Return the current level of ``pin``."""
        _check_pin(pin)
        index, mask = _word_and_mask(pin)
        return bool(self._level[index] & mask)

    def drive_level(self, pin: int, high: bool) -> None:
        """Put ``pin`` at the given level, as an external signal would."""
        _check_pin(pin)
        index, mask = _word_and_mask(pin)
        if high:
            self._level[index] |= mask
        else:
            self._level[index] &= ~mask