"""Binary fixed-point numbers with a configurable base width and fraction size.

A value is stored as a signed integer ``raw`` of ``width`` bits that
represents ``raw / 2**frac_bits``.  Arithmetic follows two's-complement
wrap-around at the base width, truncating division and a double-width
intermediate for multiplication and division.
"""

from __future__ import annotations

import math
import struct
from fractions import Fraction

__all__ = [
    "FixedPoint",
    "fixed_multiply",
    "float_to_raw_fix32",
    "double_to_raw_fix32",
    "fp8",
    "fp16",
    "fp32",
    "fp64",
    "q24_8",
]

# Base width -> width of the intermediate type used for multiply and divide.
_OVERFLOW_WIDTH = {8: 16, 16: 32, 32: 64, 64: 64}
# Plain integer arguments and integer promotion both work at this width.
_INT_WIDTH = 32


def _wrap(value: int, width: int) -> int:
    """Reduce ``value`` to a signed two's-complement integer of ``width`` bits."""
    half = 1 << (width - 1)
    return ((value + half) % (1 << width)) - half


def _promoted(width: int) -> int:
    return max(width, _INT_WIDTH)


def _c_div(a: int, b: int) -> int:
    """Integer division truncating towards zero."""
    if b == 0:
        raise ZeroDivisionError("fixed-point division by zero")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _c_mod(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * _c_div(a, b)


def _truncate(value: float) -> int:
    if not math.isfinite(value):
        raise ValueError(f"cannot represent {value!r} as a fixed-point number")
    return math.trunc(value)


def _single(value: float) -> float:
    """Round a float to single precision."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as exc:
        raise ValueError(f"{value!r} is out of single-precision range") from exc


def _check_format(frac_bits: int, width: int) -> None:
    if isinstance(width, bool) or width not in _OVERFLOW_WIDTH:
        raise ValueError(f"unsupported width {width!r}; expected one of 8, 16, 32, 64")
    if isinstance(frac_bits, bool) or not isinstance(frac_bits, int):
        raise ValueError(f"frac_bits must be an integer, not {frac_bits!r}")
    if not 0 <= frac_bits < width:
        raise ValueError(f"frac_bits must be in [0, {width}), got {frac_bits}")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def fixed_multiply(a: int, b: int, frac_bits: int, width: int) -> int:
    """Multiply two raw values through the wide intermediate type and rescale."""
    _check_format(frac_bits, width)
    overflow = _OVERFLOW_WIDTH[width]
    a32 = _wrap(a, _INT_WIDTH)
    b32 = _wrap(b, _INT_WIDTH)
    product = _wrap(_wrap(a32, overflow) * b32, _promoted(overflow))
    return _wrap(product >> frac_bits, width)


def float_to_raw_fix32(value: float, q: int) -> int:
    """Raw 32-bit fixed-point value of a single-precision float with ``q`` fraction bits."""
    _check_format(q, 32)
    scaled = _single(_single(value) * (1 << q))
    return _wrap(_truncate(scaled), 32)


def double_to_raw_fix32(value: float, q: int) -> int:
    """Raw 32-bit fixed-point value of a double with ``q`` fraction bits."""
    _check_format(q, 32)
    return _wrap(_truncate(value * (1 << q)), 32)


class FixedPoint:
    """An immutable signed fixed-point number."""

    __slots__ = ("_raw", "_frac_bits", "_width")

    def __init__(self, value: int | float = 0, frac_bits: int = 8, width: int = 32) -> None:
        _check_format(frac_bits, width)
        if _is_int(value):
            raw = _wrap(_wrap(value, _INT_WIDTH) << frac_bits, _INT_WIDTH)
        elif isinstance(value, float):
            raw = _truncate(value * (1 << frac_bits))
        else:
            raise TypeError(f"cannot build a fixed-point number from {type(value).__name__}")
        self._raw = _wrap(raw, width)
        self._frac_bits = frac_bits
        self._width = width

    @classmethod
    def from_raw(cls, raw: int, frac_bits: int = 8, width: int = 32) -> FixedPoint:
        """Build a number directly from its stored integer representation."""
        _check_format(frac_bits, width)
        if not _is_int(raw):
            raise TypeError("raw value must be an integer")
        obj = cls.__new__(cls)
        obj._raw = _wrap(raw, width)
        obj._frac_bits = frac_bits
        obj._width = width
        return obj

    @property
    def raw(self) -> int:
        return self._raw

    @property
    def frac_bits(self) -> int:
        return self._frac_bits

    @property
    def width(self) -> int:
        return self._width

    def _with_raw(self, raw: int) -> FixedPoint:
        return FixedPoint.from_raw(raw, self._frac_bits, self._width)

    def _same_format(self, other: FixedPoint) -> bool:
        return other._frac_bits == self._frac_bits and other._width == self._width

    def _coerce(self, other: object) -> FixedPoint | None:
        if isinstance(other, FixedPoint):
            if not self._same_format(other):
                raise TypeError(
                    "fixed-point arithmetic needs operands of the same format: "
                    f"Q{self._width}.{self._frac_bits} and Q{other._width}.{other._frac_bits}"
                )
            return other
        if _is_int(other):
            return FixedPoint(other, self._frac_bits, self._width)
        return None

    def _compare_raw(self, other: object) -> int | None:
        if isinstance(other, FixedPoint):
            if not self._same_format(other):
                raise TypeError("cannot order fixed-point numbers of different formats")
            return other._raw
        if _is_int(other):
            shifted = _wrap(other, self._width) << self._frac_bits
            return _wrap(shifted, _promoted(self._width))
        return None

    def to_int(self) -> int:
        """Integer part, rounded towards negative infinity."""
        return self._raw >> self._frac_bits

    def to_float(self) -> float:
        return self._raw / (1 << self._frac_bits)

    def __int__(self) -> int:
        return self.to_int()

    def __float__(self) -> float:
        return self.to_float()

    def __neg__(self) -> FixedPoint:
        return self._with_raw(-self._raw)

    def __add__(self, other: object) -> FixedPoint:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._with_raw(self._raw + operand._raw)

    def __sub__(self, other: object) -> FixedPoint:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._with_raw(self._raw - operand._raw)

    def __mul__(self, other: object) -> FixedPoint:
        if _is_int(other):
            return self._with_raw(self._raw * _wrap(other, _INT_WIDTH))
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._with_raw(
            fixed_multiply(self._raw, operand._raw, self._frac_bits, self._width)
        )

    def __truediv__(self, other: object) -> FixedPoint:
        if _is_int(other):
            return self._with_raw(_c_div(self._raw, _wrap(other, _INT_WIDTH)))
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        overflow = _OVERFLOW_WIDTH[self._width]
        numerator = _wrap(_wrap(self._raw, overflow) << self._frac_bits, _promoted(overflow))
        denominator = _wrap(operand._raw, overflow)
        return self._with_raw(_c_div(numerator, denominator))

    def __mod__(self, other: object) -> FixedPoint:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._with_raw(_c_mod(self._raw, operand._raw))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FixedPoint):
            return self._same_format(other) and self._raw == other._raw
        raw = self._compare_raw(other)
        if raw is None:
            return NotImplemented
        return self._raw == raw

    def __lt__(self, other: object) -> bool:
        raw = self._compare_raw(other)
        if raw is None:
            return NotImplemented
        return self._raw < raw

    def __le__(self, other: object) -> bool:
        raw = self._compare_raw(other)
        if raw is None:
            return NotImplemented
        return self._raw <= raw

    def __gt__(self, other: object) -> bool:
        raw = self._compare_raw(other)
        if raw is None:
            return NotImplemented
        return self._raw > raw

    def __ge__(self, other: object) -> bool:
        raw = self._compare_raw(other)
        if raw is None:
            return NotImplemented
        return self._raw >= raw

    def __hash__(self) -> int:
        return hash(Fraction(self._raw, 1 << self._frac_bits))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}.from_raw({self._raw}, "
            f"frac_bits={self._frac_bits}, width={self._width})"
        )


def fp8(value: int | float = 0, frac_bits: int = 4) -> FixedPoint:
    """Fixed-point number on an 8-bit base."""
    return FixedPoint(value, frac_bits, 8)


def fp16(value: int | float = 0, frac_bits: int = 8) -> FixedPoint:
    """Fixed-point number on a 16-bit base."""
    return FixedPoint(value, frac_bits, 16)


def fp32(value: int | float = 0, frac_bits: int = 8) -> FixedPoint:
    """Fixed-point number on a 32-bit base."""
    return FixedPoint(value, frac_bits, 32)


def fp64(value: int | float = 0, frac_bits: int = 16) -> FixedPoint:
    """Fixed-point number on a 64-bit base."""
    return FixedPoint(value, frac_bits, 64)


def q24_8(value: int | float = 0) -> FixedPoint:
    """Q24.8 number, the format used throughout the motor controller."""
    return FixedPoint(value, 8, 32)