"""PID controller working in Q24.8 fixed point.

The controller reads :attr:`PID.input` and :attr:`PID.setpoint` and writes
:attr:`PID.output`.  A new output is computed at most once per sample period
and only while the controller is in automatic mode.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from enum import IntEnum

from motorcarrier.fixedpoint import FixedPoint, q24_8

__all__ = [
    "Direction",
    "ProportionalOn",
    "PID",
    "DEFAULT_SAMPLE_TIME",
    "DEFAULT_OUTPUT_LIMITS",
]

DEFAULT_SAMPLE_TIME = 10
DEFAULT_OUTPUT_LIMITS = (0.0, 255.0)

_TIME_MODULUS = 1 << 32

Clock = Callable[[], int]
Number = int | float | FixedPoint


class Direction(IntEnum):
    """Whether a larger output raises (DIRECT) or lowers (REVERSE) the input."""

    DIRECT = 0
    REVERSE = 1


class ProportionalOn(IntEnum):
    """What the proportional term acts on."""

    MEASUREMENT = 0
    ERROR = 1


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


def _fix(value: Number) -> FixedPoint:
    if isinstance(value, FixedPoint):
        if value.frac_bits != 8 or value.width != 32:
            raise TypeError("PID values must be Q24.8 fixed-point numbers")
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"cannot use {value!r} as a PID value")
    return q24_8(value)


_ZERO = q24_8(0.0)


class PID:
    """A fixed-point PID controller sampled against a millisecond clock."""

    def __init__(
        self,
        kp: Number,
        ki: Number,
        kd: Number,
        direction: Direction = Direction.DIRECT,
        proportional_on: ProportionalOn = ProportionalOn.ERROR,
        clock: Clock = _monotonic_ms,
    ) -> None:
        self._clock = clock
        self._input = q24_8(0)
        self._output = q24_8(0)
        self._setpoint = q24_8(0)
        self._in_auto = False

        self._kp = q24_8(0)
        self._ki = q24_8(0)
        self._kd = q24_8(0)
        self._disp_kp = q24_8(0)
        self._disp_ki = q24_8(0)
        self._disp_kd = q24_8(0)
        self._proportional_on = ProportionalOn.ERROR
        self._direction = Direction(direction)

        self._output_sum = q24_8(0)
        self._last_input = q24_8(0)
        self._last_error = q24_8(0)
        self._i_error = q24_8(0)

        self._out_min = q24_8(0)
        self._out_max = q24_8(0)
        self.set_output_limits(*DEFAULT_OUTPUT_LIMITS)

        self._sample_time = DEFAULT_SAMPLE_TIME
        self.set_controller_direction(direction)
        self.set_tunings(kp, ki, kd, proportional_on)

        self._last_time = self._clock() - self._sample_time

    # Linked process variables.

    @property
    def input(self) -> FixedPoint:
        return self._input

    @input.setter
    def input(self, value: Number) -> None:
        self._input = _fix(value)

    @property
    def output(self) -> FixedPoint:
        return self._output

    @output.setter
    def output(self, value: Number) -> None:
        self._output = _fix(value)

    @property
    def setpoint(self) -> FixedPoint:
        return self._setpoint

    @setpoint.setter
    def setpoint(self, value: Number) -> None:
        self._setpoint = _fix(value)

    # State queried for display.

    @property
    def kp(self) -> FixedPoint:
        return self._disp_kp

    @property
    def ki(self) -> FixedPoint:
        return self._disp_ki

    @property
    def kd(self) -> FixedPoint:
        return self._disp_kd

    @property
    def automatic(self) -> bool:
        return self._in_auto

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def proportional_on(self) -> ProportionalOn:
        return self._proportional_on

    @property
    def sample_time(self) -> int:
        return self._sample_time

    @property
    def output_limits(self) -> tuple[FixedPoint, FixedPoint]:
        return self._out_min, self._out_max

    # Control.

    def _clamp(self, value: FixedPoint) -> FixedPoint:
        if value > self._out_max:
            return self._out_max
        if value < self._out_min:
            return self._out_min
        return value

    def compute(self) -> bool:
        """Compute a new output if the controller is automatic and a sample is due."""
        if not self._in_auto:
            return False
        now = self._clock()
        time_change = (now - self._last_time) % _TIME_MODULUS
        if time_change < self._sample_time:
            return False

        current = self._input
        error = self._setpoint - current
        d_error = error - self._last_error
        self._i_error = self._i_error + error

        p_out = self._kp * error
        i_out = self._ki * self._i_error
        d_out = self._kd * d_error

        self._output = self._clamp(p_out + i_out + d_out)

        self._last_input = current
        self._last_time = now
        self._last_error = error
        return True

    def set_tunings(
        self,
        kp: Number,
        ki: Number,
        kd: Number,
        proportional_on: ProportionalOn | None = None,
    ) -> None:
        """Set the gains; negative gains are ignored."""
        kp, ki, kd = _fix(kp), _fix(ki), _fix(kd)
        if kp < _ZERO or ki < _ZERO or kd < _ZERO:
            return
        if proportional_on is not None:
            self._proportional_on = ProportionalOn(proportional_on)

        self._disp_kp, self._disp_ki, self._disp_kd = kp, ki, kd

        sample_time_in_sec = q24_8(float(self._sample_time)) / q24_8(1000.0)
        self._kp = kp
        self._ki = ki * sample_time_in_sec
        self._kd = kd / sample_time_in_sec

        if self._direction is Direction.REVERSE:
            self._negate_gains()

    def set_sample_time(self, sample_time: int) -> None:
        """Set the period in milliseconds; non-positive values are ignored."""
        if sample_time <= 0:
            return
        ratio = q24_8(float(sample_time)) / q24_8(float(self._sample_time))
        self._ki = self._ki * ratio
        self._kd = self._kd / ratio
        self._sample_time = int(sample_time)

    def set_output_limits(self, minimum: Number, maximum: Number) -> None:
        """Clamp the output to [minimum, maximum]; ignored unless minimum < maximum."""
        minimum, maximum = _fix(minimum), _fix(maximum)
        if minimum >= maximum:
            return
        self._out_min = minimum
        self._out_max = maximum
        if self._in_auto:
            self._output = self._clamp(self._output)
            self._output_sum = self._clamp(self._output_sum)

    def set_mode(self, automatic: bool) -> None:
        """Switch between automatic and manual; entering automatic re-initialises."""
        new_auto = bool(automatic)
        if new_auto and not self._in_auto:
            self._initialize()
        self._in_auto = new_auto

    def _initialize(self) -> None:
        self._last_input = self._input
        self._output_sum = self._clamp(self._output)

    def set_controller_direction(self, direction: Direction) -> None:
        direction = Direction(direction)
        if self._in_auto and direction is not self._direction:
            self._negate_gains()
        self._direction = direction

    def _negate_gains(self) -> None:
        self._kp = _ZERO - self._kp
        self._ki = _ZERO - self._ki
        self._kd = _ZERO - self._kd