"""Simulated motor carrier co-processor: fixed-point maths, timed events, PID control, motors, encoders and battery."""

__version__ = "0.1.0"

__all__ = [
    "battery",
    "board",
    "commands",
    "controller",
    "encoder",
    "events",
    "fix16",
    "fixedpoint",
    "motors",
    "pid",
]