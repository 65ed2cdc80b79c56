"""DC motor and servo outputs driven by PWM pins of the board."""

from __future__ import annotations

from typing import TYPE_CHECKING

from motorcarrier.board import Board, PinMode

if TYPE_CHECKING:
    from motorcarrier.controller import ClosedLoopMotor

__all__ = ["DCMotor", "ServoMotor", "PWM_PERIOD", "DC_DEFAULT_FREQUENCY", "SERVO_DEFAULT_FREQUENCY"]

PWM_PERIOD = 255
DC_DEFAULT_FREQUENCY = 100
SERVO_DEFAULT_FREQUENCY = 50


def _scale_duty(duty: int) -> int:
    """Scale a percentage to the PWM period, truncating towards zero."""
    magnitude = abs(duty) * PWM_PERIOD // 100
    return magnitude if duty >= 0 else -magnitude


class DCMotor:
    """A brushed DC motor on an H-bridge controlled by two PWM pins."""

    def __init__(self, board: Board, pin_a: int, pin_b: int) -> None:
        self.board = board
        self.pin_a = pin_a
        self.pin_b = pin_b
        self.duty = 0
        self.frequency = DC_DEFAULT_FREQUENCY
        self.pid: ClosedLoopMotor | None = None
        board.pin_mode(pin_a, PinMode.OUTPUT)
        board.pin_mode(pin_b, PinMode.OUTPUT)

    def set_duty(self, duty: int) -> None:
        """Drive the motor at ``duty`` percent; the sign selects the direction."""
        self.duty = duty
        if duty == 0:
            self.board.analog_write(self.pin_a, 0)
            self.board.analog_write(self.pin_b, 0)
            return
        scaled = _scale_duty(duty)
        if scaled > 0:
            self.board.analog_write(self.pin_a, 0)
            self.board.analog_write(self.pin_b, scaled)
        else:
            self.board.analog_write(self.pin_b, 0)
            self.board.analog_write(self.pin_a, -scaled)

    def set_frequency(self, frequency: int) -> None:
        """Record the requested PWM frequency; the timer keeps its fixed rate."""
        self.requested_frequency = frequency


class ServoMotor:
    """A hobby servo on one PWM pin."""

    def __init__(self, board: Board, pin: int) -> None:
        self.board = board
        self.pin = pin
        self.duty = 0
        self.frequency = SERVO_DEFAULT_FREQUENCY
        board.pin_mode(pin, PinMode.OUTPUT)

    def set_duty(self, duty: int) -> None:
        """Write ``duty`` to the pin; a negative duty releases the pin as an input."""
        self.duty = duty
        if duty < 0:
            self.board.pin_mode(self.pin, PinMode.INPUT)
        else:
            self.board.analog_write(self.pin, duty)

    def set_frequency(self, frequency: int) -> None:
        """Record the requested PWM frequency; the timer keeps its fixed rate."""
        self.requested_frequency = frequency