"""Small printf-style formatter supporting %d, %u, %c, %s, %x, %X and %%.

Zero padding and field width are supported. Integers are treated as
32-bit values, exactly as an ``int``/``unsigned int`` argument would be.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterator
from typing import Any

_MASK32 = 0xFFFFFFFF
_SIGN32 = 0x80000000
_WIDTH_BASE = 10


def _digit_value(ch: str) -> int:
    """Return the value of a hexadecimal digit, or -1 if ``ch`` is not one."""
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "a" <= ch <= "f":
        return ord(ch) - ord("a") + 10
    if "A" <= ch <= "F":
        return ord(ch) - ord("A") + 10
    return -1


def _pad(text: str, width: int, zero: bool) -> str:
    fill = "0" if zero else " "
    return fill * (width - len(text)) + text


def _as_unsigned(value: Any) -> int:
    return operator.index(value) & _MASK32


def _as_signed(value: Any) -> int:
    number = _as_unsigned(value)
    return number - (1 << 32) if number & _SIGN32 else number


def _format_chars(fmt: str, args: tuple[Any, ...]) -> Iterator[str]:
    chars = iter(fmt)
    values = iter(args)

    def next_arg() -> Any:
        try:
            return next(values)
        except StopIteration:
            raise ValueError(f"not enough arguments for format {fmt!r}") from None

    for ch in chars:
        if ch != "%":
            yield ch
            continue

        ch = next(chars, "")
        zero = False
        if ch == "0":
            ch = next(chars, "")
            zero = True

        width = 0
        if "0" <= ch <= "9":
            while (digit := _digit_value(ch)) >= 0 and digit <= _WIDTH_BASE:
                width = width * _WIDTH_BASE + digit
                ch = next(chars, "")

        if ch == "":
            return
        if ch == "u":
            yield from _pad(str(_as_unsigned(next_arg())), width, zero)
        elif ch == "d":
            yield from _pad(str(_as_signed(next_arg())), width, zero)
        elif ch in ("x", "X"):
            text = format(_as_unsigned(next_arg()), ch)
            yield from _pad(text, width, zero)
        elif ch == "c":
            yield chr(operator.index(next_arg()) & 0xFF)
        elif ch == "s":
            yield from _pad(str(next_arg()), width, False)
        elif ch == "%":
            yield "%"
        # Any other conversion character is dropped without consuming an argument.


def format_printf(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the resulting text."""
    return "".join(_format_chars(fmt, args))


def sprintf(fmt: str, *args: Any) -> str:
    """Return the formatted string, as a string-buffer printf would produce."""
    return format_printf(fmt, *args)


class Printer:
    """Formats text and hands it, one character at a time, to an output function."""

    def __init__(self, putc: Callable[[str], Any]) -> None:
        self._putc = putc

    def printf(self, fmt: str, *args: Any) -> None:
        """Format ``args`` with ``fmt`` and emit every character through ``putc``."""
        for ch in format_printf(fmt, *args):
            self._putc(ch)