"""Battery voltage monitor with a ten-sample ring buffer."""

from __future__ import annotations

from motorcarrier.board import Board
from motorcarrier.commands import ADC_BATTERY, Carrier
from motorcarrier.events import EventScheduler

__all__ = ["Battery", "SAMPLES", "READ_PERIOD", "SCALE_FACTORS"]

SAMPLES = 10
READ_PERIOD = 1000
SCALE_FACTORS = {Carrier.NANO: 236, Carrier.MKR: 77}


class Battery:
    """Samples the battery ADC once a second and reports raw, scaled and averaged values."""

    def __init__(
        self,
        board: Board,
        pin: int | str = ADC_BATTERY,
        scheduler: EventScheduler | None = None,
        carrier: Carrier | None = None,
    ) -> None:
        self.board = board
        self.pin = pin
        self.carrier = board.carrier if carrier is None else carrier
        if not isinstance(self.carrier, Carrier):
            raise TypeError(f"expected a Carrier, not {self.carrier!r}")
        self.scale = SCALE_FACTORS[self.carrier]
        self._readings = [0] * SAMPLES
        self._index = 0
        if scheduler is not None:
            scheduler.register(self.read, READ_PERIOD)
        self._readings[0] = board.analog_read(pin)

    @property
    def readings(self) -> tuple[int, ...]:
        return tuple(self._readings)

    def read(self) -> None:
        """Take a new sample into the next slot of the ring buffer."""
        self._index = (self._index + 1) % SAMPLES
        self._readings[self._index] = self.board.analog_read(self.pin)

    def raw(self) -> int:
        """The latest ADC reading."""
        return self._readings[self._index]

    def converted(self) -> int:
        """The latest reading scaled to volts."""
        return self.raw() // self.scale

    def filtered(self) -> int:
        """The mean of the buffered readings scaled to volts."""
        return sum(self._readings) // (SAMPLES * self.scale)