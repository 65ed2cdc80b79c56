"""Quadrature encoder channels and the periodic monitor that derives their state."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from motorcarrier.commands import IRQCause
from motorcarrier.events import EventScheduler
from motorcarrier.fixedpoint import FixedPoint, q24_8

__all__ = [
    "EncoderChannel",
    "EncoderMonitor",
    "UPDATE_PERIOD",
    "COUNT_TOLERANCE",
    "WRAP_THRESHOLD",
]

UPDATE_PERIOD = 10
COUNT_TOLERANCE = 10
WRAP_THRESHOLD = 30000


def _wrap(value: int, width: int) -> int:
    half = 1 << (width - 1)
    return ((value + half) % (1 << width)) - half


class EncoderChannel:
    """One encoder's counter together with the registers the host can query."""

    def __init__(self) -> None:
        self._count = 0
        self.overflow = False
        self.underflow = False
        self.velocity: FixedPoint = q24_8(0)
        self.position: FixedPoint = q24_8(0)
        self.irq_count_enabled = False
        self.target_count = 0
        self.irq_velocity_enabled = False
        self.target_velocity: FixedPoint = q24_8(0)
        self.irq_ratio: FixedPoint = q24_8(0)

    def move(self, delta: int) -> None:
        """Advance the counter by ``delta`` steps, as the encoder pins would."""
        self._count = _wrap(self._count + delta, 32)

    def read(self) -> int:
        """Current count."""
        return self._count

    def reset_counter(self, value: int = 0) -> None:
        self._count = _wrap(value, 32)

    def overflow_underflow(self) -> tuple[bool, bool]:
        return self.overflow, self.underflow

    def count_per_second(self) -> int:
        """Counts seen during the last update period."""
        return _wrap(self.velocity.to_int(), 32)


class EncoderMonitor:
    """Updates velocity, position and wrap flags of encoder channels and raises interrupts."""

    def __init__(
        self,
        channels: Sequence[EncoderChannel],
        request_attention: Callable[[IRQCause], object],
        scheduler: EventScheduler | None = None,
    ) -> None:
        self.channels = list(channels)
        self.request_attention = request_attention
        self._last_values = [0] * len(self.channels)
        self._last_timestamped = [0] * len(self.channels)
        if scheduler is not None:
            scheduler.register(self.update, UPDATE_PERIOD)

    def update(self) -> None:
        """Refresh every channel's derived registers."""
        for i, channel in enumerate(self.channels):
            value = channel.read()

            if channel.irq_count_enabled and abs(value - channel.target_count) < COUNT_TOLERANCE:
                self.request_attention(IRQCause.ENCODER_COUNTER_REACHED)
            if value - self._last_values[i] < -WRAP_THRESHOLD:
                channel.underflow = True
            if value - self._last_values[i] > WRAP_THRESHOLD:
                channel.overflow = True

            diff = _wrap(value - self._last_timestamped[i], 16)
            channel.velocity = q24_8(diff)
            self._last_timestamped[i] = value
            channel.position = q24_8(float(value))

            target = channel.target_velocity
            if channel.irq_velocity_enabled and target != 0:
                ratio = ((channel.velocity - target) * q24_8(100.0)) / target
                if -channel.irq_ratio < ratio < channel.irq_ratio:
                    self.request_attention(IRQCause.ENCODER_VELOCITY_REACHED)

            self._last_values[i] = value