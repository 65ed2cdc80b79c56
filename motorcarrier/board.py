"""A simulated microcontroller: millisecond clock, pins, and an I2C reply buffer."""

from __future__ import annotations

import struct
from enum import Enum

from motorcarrier.commands import Carrier

__all__ = ["DEFAULT_CARRIER", "ADC_MAX", "PinMode", "Board", "Reply"]

DEFAULT_CARRIER = Carrier.MKR
ADC_MAX = 1023

Pin = int | str


class PinMode(Enum):
    INPUT = "input"
    OUTPUT = "output"


class Board:
    """Clock and pin state of one carrier's co-processor."""

    def __init__(self, carrier: Carrier = DEFAULT_CARRIER) -> None:
        if not isinstance(carrier, Carrier):
            raise TypeError(f"expected a Carrier, not {carrier!r}")
        self.carrier = carrier
        self._now = 0
        self._modes: dict[Pin, PinMode] = {}
        self._outputs: dict[Pin, int] = {}
        self._inputs: dict[Pin, int] = {}

    @property
    def modes(self) -> dict[Pin, PinMode]:
        return dict(self._modes)

    @property
    def outputs(self) -> dict[Pin, int]:
        return dict(self._outputs)

    def millis(self) -> int:
        """Milliseconds since the board started."""
        return self._now

    def advance(self, ms: int) -> int:
        """Move the clock forward by ``ms`` milliseconds and return the new time."""
        if ms < 0:
            raise ValueError("time cannot go backwards")
        self._now += ms
        return self._now

    def pin_mode(self, pin: Pin, mode: PinMode) -> None:
        if not isinstance(mode, PinMode):
            raise TypeError(f"expected a PinMode, not {mode!r}")
        self._modes[pin] = mode

    def analog_write(self, pin: Pin, value: int) -> None:
        self._outputs[pin] = value

    def analog_read(self, pin: Pin) -> int:
        return self._inputs.get(pin, 0)

    def set_analog_input(self, pin: Pin, value: int) -> None:
        """Set the level the ADC reports on ``pin`` (0 to 1023)."""
        if not 0 <= value <= ADC_MAX:
            raise ValueError(f"ADC value {value} is outside 0..{ADC_MAX}")
        self._inputs[pin] = value


class Reply:
    """Bytes queued for the host's next I2C read.

    Integers are written as four little-endian bytes (wrapping like a 32-bit
    cast), booleans as one byte, and bytes-like values as they are.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write(self, value: bool | int | bytes) -> int:
        """Append ``value`` and return the number of bytes written."""
        if isinstance(value, bool):
            data = bytes([int(value)])
        elif isinstance(value, int):
            data = struct.pack("<I", value & 0xFFFFFFFF)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            data = bytes(value)
        else:
            raise TypeError(f"cannot write {type(value).__name__} to the reply")
        self._buffer += data
        return len(data)

    def clear(self) -> None:
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)

    def __bytes__(self) -> bytes:
        return bytes(self._buffer)