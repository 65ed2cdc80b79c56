"""Q16.16 fixed-point helpers on raw signed 32-bit integers.

A fix16 value is a plain ``int`` in the signed 32-bit range holding
``value * 65536``.  The helpers here convert to and from other number types
and provide the simple min/max/rounding operations of the format.
"""

from __future__ import annotations

import math
import struct

__all__ = [
    "ONE",
    "PI",
    "E",
    "MAXIMUM",
    "MINIMUM",
    "OVERFLOW",
    "FOUR_DIV_PI",
    "NEG_FOUR_DIV_PI2",
    "X4_CORRECTION_COMPONENT",
    "PI_DIV_4",
    "THREE_PI_DIV_4",
    "RAD_TO_DEG_MULT",
    "DEG_TO_RAD_MULT",
    "from_int",
    "to_float",
    "to_double",
    "to_int",
    "from_float",
    "from_double",
    "f16",
    "absolute",
    "floor",
    "ceil",
    "minimum",
    "maximum",
    "clamp",
    "f16c",
]


def _wrap32(value: int) -> int:
    return ((value + 0x80000000) % 0x100000000) - 0x80000000


FOUR_DIV_PI = 0x145F3
NEG_FOUR_DIV_PI2 = _wrap32(0xFFFF9840)
X4_CORRECTION_COMPONENT = 0x399A
PI_DIV_4 = 0x0000C90F
THREE_PI_DIV_4 = 0x00025B2F

MAXIMUM = 0x7FFFFFFF
MINIMUM = _wrap32(0x80000000)
OVERFLOW = _wrap32(0x80000000)

PI = 205887
E = 178145
ONE = 0x00010000

RAD_TO_DEG_MULT = 3754936
DEG_TO_RAD_MULT = 1144

_INTEGER_LIMIT = 32768
_MAX_MANTISSA_DIGITS = 5


def _single(value: float) -> float:
    """Round a float to single precision."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as exc:
        raise ValueError(f"{value!r} is out of single-precision range") from exc


def _to_fix(value: float) -> int:
    """Truncate a scaled value into the fix16 range."""
    if not math.isfinite(value):
        raise ValueError(f"cannot represent {value!r} as fix16")
    result = math.trunc(value)
    if not MINIMUM <= result <= MAXIMUM:
        raise ValueError(f"{value!r} is outside the fix16 range")
    return result


def _c_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def from_int(a: int) -> int:
    """Fix16 value of an integer (wraps like a 32-bit multiply)."""
    return _wrap32(a * ONE)


def to_float(a: int) -> float:
    """Single-precision value of a fix16 number."""
    return _single(_single(float(a)) / ONE)


def to_double(a: int) -> float:
    """Double-precision value of a fix16 number."""
    return a / ONE


def to_int(a: int, rounding: bool = True) -> int:
    """Integer value of a fix16 number, rounded half away from zero or floored."""
    if not rounding:
        return a >> 16
    if a >= 0:
        return _c_div(a + (ONE >> 1), ONE)
    return _c_div(a - (ONE >> 1), ONE)


def from_float(a: float, rounding: bool = True) -> int:
    """Fix16 value of a number converted through single precision."""
    temp = _single(_single(a) * ONE)
    if rounding:
        temp = _single(temp + (0.5 if temp >= 0 else -0.5))
    return _to_fix(temp)


def from_double(a: float, rounding: bool = True) -> int:
    """Fix16 value of a double."""
    temp = a * ONE
    if rounding:
        temp += 0.5 if temp >= 0 else -0.5
    return _to_fix(temp)


def f16(x: float) -> int:
    """Fix16 constant of a number, rounded half away from zero."""
    return _to_fix(x * 65536.0 + 0.5 if x >= 0 else x * 65536.0 - 0.5)


def absolute(x: int) -> int:
    """Absolute value; the minimum value maps to itself."""
    return _wrap32(-x if x < 0 else x)


def floor(x: int) -> int:
    return _wrap32(x & 0xFFFF0000)


def ceil(x: int) -> int:
    return _wrap32((x & 0xFFFF0000) + (ONE if x & 0x0000FFFF else 0))


def minimum(x: int, y: int) -> int:
    return x if x < y else y


def maximum(x: int, y: int) -> int:
    return x if x > y else y


def clamp(x: int, lo: int, hi: int) -> int:
    return minimum(maximum(x, lo), hi)


def _convert_mantissa(digits: str) -> int:
    length = len(digits)
    scaled = (int("1" + digits) - 10**length) * 10 ** (_MAX_MANTISSA_DIGITS - length)
    return (scaled * 100000 * 65536 + 5000000000) // 10000000000


def _combine(integer: int, digits: str) -> int:
    return (integer << 16) | (_convert_mantissa(digits) & 0xFFFF)


def f16c(integer: int | str, mantissa: int | str) -> int:
    """Fix16 constant from an integer part and the decimal digits after the point.

    ``mantissa`` is the digit string written after the decimal point, so
    ``f16c(123, "1234")`` is 123.1234 and ``f16c(0, "05")`` is 0.05.  A
    negative integer part (or the string ``"-0"``) makes the whole value
    negative.
    """
    if isinstance(integer, str):
        text = integer.strip()
        negative = text.startswith("-")
        try:
            value = int(text)
        except ValueError as exc:
            raise ValueError(f"invalid integer part {integer!r}") from exc
    elif isinstance(integer, int) and not isinstance(integer, bool):
        value = integer
        negative = integer < 0
    else:
        raise TypeError("integer part must be an int or a string")
    if not -_INTEGER_LIMIT < value < _INTEGER_LIMIT:
        raise ValueError(f"integer part {value} is outside ]-32768:32767[")

    digits = str(mantissa) if not isinstance(mantissa, str) else mantissa
    if isinstance(mantissa, bool) or not digits.isdigit() or not digits.isascii():
        raise ValueError(f"mantissa must be decimal digits, got {mantissa!r}")
    if len(digits) > _MAX_MANTISSA_DIGITS:
        raise ValueError(f"mantissa {digits!r} has more than {_MAX_MANTISSA_DIGITS} digits")

    if negative:
        return _wrap32(-_combine(-value, digits))
    return _wrap32(_combine(value, digits))