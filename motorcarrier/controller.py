"""Closed-loop position and velocity control of a DC motor."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import IntEnum

from motorcarrier.encoder import EncoderChannel
from motorcarrier.events import EventScheduler, TimedEvent
from motorcarrier.fixedpoint import FixedPoint, q24_8
from motorcarrier.motors import DCMotor
from motorcarrier.pid import DEFAULT_SAMPLE_TIME, PID, Direction

__all__ = [
    "ControlMode",
    "Target",
    "ClosedLoopMotor",
    "register_controllers",
    "DEFAULT_GAINS",
    "POSITION_OUTPUT_LIMITS",
    "VELOCITY_OUTPUT_LIMITS",
]

DEFAULT_GAINS = (2.0, 2.0, 0.0)
POSITION_OUTPUT_LIMITS = (-30.0, 30.0)
VELOCITY_OUTPUT_LIMITS = (-90.0, 90.0)

Clock = Callable[[], int]
Number = int | float | FixedPoint


def _wrap(value: int, width: int) -> int:
    half = 1 << (width - 1)
    return ((value + half) % (1 << width)) - half


class ControlMode(IntEnum):
    OPEN_LOOP = 0
    POSITION = 1
    VELOCITY = 2


class Target(IntEnum):
    VELOCITY = 0
    POSITION = 1


class ClosedLoopMotor:
    """A DC motor driven by a cascaded position and velocity PID pair."""

    def __init__(
        self,
        motor: DCMotor,
        encoder: EncoderChannel,
        clock: Clock,
        velocity_period: int = DEFAULT_SAMPLE_TIME,
        position_period: int = DEFAULT_SAMPLE_TIME,
    ) -> None:
        self.motor = motor
        self.encoder = encoder
        self.mode = ControlMode.VELOCITY
        self.max_acceleration: FixedPoint = q24_8(0)
        self.max_velocity: FixedPoint = q24_8(0)
        self.max_duty = 100
        self.min_duty = 0
        self.disabled = True

        kp, ki, kd = DEFAULT_GAINS
        self.pid_position = PID(kp, ki, kd, Direction.DIRECT, clock=clock)
        self.pid_velocity = PID(kp, ki, kd, Direction.DIRECT, clock=clock)
        self.pid_position.set_sample_time(position_period)
        self.pid_velocity.set_sample_time(velocity_period)
        self.pid_position.set_output_limits(*POSITION_OUTPUT_LIMITS)
        self.pid_velocity.set_output_limits(*VELOCITY_OUTPUT_LIMITS)

        self.stop()
        motor.pid = self

    @property
    def target_position(self) -> FixedPoint:
        return self.pid_position.setpoint

    @property
    def target_velocity(self) -> FixedPoint:
        return self.pid_velocity.setpoint

    @property
    def velocity_command(self) -> FixedPoint:
        return self.pid_position.output

    @property
    def actual_duty(self) -> FixedPoint:
        return self.pid_velocity.output

    def _active_pid(self) -> PID | None:
        if self.mode is ControlMode.VELOCITY:
            return self.pid_velocity
        if self.mode is ControlMode.POSITION:
            return self.pid_position
        return None

    def _sync_inputs(self) -> None:
        self.pid_position.input = self.encoder.position
        self.pid_velocity.input = self.encoder.velocity

    def set_gains(self, kp: Number, ki: Number, kd: Number) -> None:
        """Set the gains of the loop selected by the current mode."""
        pid = self._active_pid()
        if pid is not None:
            pid.set_tunings(kp, ki, kd)
        self.run()

    def reset_gains(self) -> None:
        """Restore the default gains of both loops, keeping the current mode."""
        previous = self.mode
        self.mode = ControlMode.VELOCITY
        self.set_gains(*DEFAULT_GAINS)
        self.mode = ControlMode.POSITION
        self.set_gains(*DEFAULT_GAINS)
        self.mode = previous
        self.run()

    def gains(self) -> tuple[FixedPoint, FixedPoint, FixedPoint] | None:
        """Gains of the loop selected by the mode, or None in open loop."""
        pid = self._active_pid()
        if pid is None:
            return None
        return pid.kp, pid.ki, pid.kd

    def set_control_mode(self, mode: ControlMode) -> None:
        self.mode = ControlMode(mode)
        self.run()

    def set_setpoint(self, target: Target, value: Number) -> None:
        target = Target(target)
        if target is Target.VELOCITY:
            self.pid_velocity.setpoint = value
        else:
            self.pid_position.setpoint = value
        self.run()

    def set_max_acceleration(self, value: Number) -> None:
        self.max_acceleration = value if isinstance(value, FixedPoint) else q24_8(value)
        self.run()

    def set_max_velocity(self, value: Number) -> None:
        self.max_velocity = value if isinstance(value, FixedPoint) else q24_8(value)
        self.run()

    def set_limits(self, min_duty: int, max_duty: int) -> None:
        """Limit the output of the loop selected by the current mode."""
        low, high = _wrap(int(min_duty), 16), _wrap(int(max_duty), 16)
        pid = self._active_pid()
        if pid is not None:
            pid.set_output_limits(low, high)
        self.run()

    def run(self) -> None:
        self._sync_inputs()
        self.pid_velocity.set_mode(True)
        self.pid_position.set_mode(True)

    def stop(self) -> None:
        self.pid_velocity.set_mode(False)
        self.pid_position.set_mode(False)

    def step(self) -> bool:
        """Run one control iteration; return whether a new duty was applied."""
        self._sync_inputs()
        if self.mode is ControlMode.POSITION:
            if not self.pid_position.compute():
                return False
            command = self.pid_position.output
            self.pid_velocity.setpoint = command
            self.motor.set_duty(_wrap(command.to_int(), 16))
            return True
        if not self.pid_velocity.compute():
            return False
        self.motor.set_duty(_wrap(self.pid_velocity.output.to_int(), 32))
        return True


def register_controllers(
    controllers: Iterable[ClosedLoopMotor], scheduler: EventScheduler
) -> TimedEvent:
    """Schedule all controllers to step on every scheduler pass."""
    members = list(controllers)

    def step_all() -> None:
        for controller in members:
            controller.step()

    return scheduler.register(step_all, 0)