"""I2C command set, interrupt causes and pin assignments of the motor carriers."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import NamedTuple

__all__ = [
    "Command",
    "IRQCause",
    "Carrier",
    "PinPair",
    "I2C_ADDRESS",
    "HOST_IRQ_PIN",
    "FIRMWARE_IRQ_PIN",
    "LED_BUILTIN",
    "ADC_BATTERY",
    "MOTOR_1_PINS",
    "MOTOR_2_PINS",
    "SERVO_PINS",
    "encoder_pins",
    "host_motor_pins",
    "host_analog_inputs",
]


class Command(IntEnum):
    """Commands a host sends to the carrier's co-processor."""

    GET_VERSION = 0x01
    RESET = 0x02
    SET_PWM_DUTY_CYCLE_SERVO = 0x03
    SET_PWM_FREQUENCY_SERVO = 0x04
    SET_PWM_DUTY_CYCLE_DC_MOTOR = 0x05
    SET_PWM_FREQUENCY_DC_MOTOR = 0x06
    GET_RAW_COUNT_ENCODER = 0x07
    RESET_COUNT_ENCODER = 0x08
    GET_OVERFLOW_UNDERFLOW_STATUS_ENCODER = 0x09
    GET_COUNT_PER_SECOND_ENCODER = 0x0A
    SET_INTERRUPT_ON_COUNT_ENCODER = 0x0B
    SET_INTERRUPT_ON_VELOCITY_ENCODER = 0x0C
    GET_RAW_ADC_BATTERY = 0x0D
    GET_CONVERTED_ADC_BATTERY = 0x0E
    GET_FILTERED_ADC_BATTERY = 0x0F
    SET_PID_GAIN_CL_MOTOR = 0x10
    RESET_PID_GAIN_CL_MOTOR = 0x11
    SET_CONTROL_MODE_CL_MOTOR = 0x12
    SET_POSITION_SETPOINT_CL_MOTOR = 0x13
    SET_VELOCITY_SETPOINT_CL_MOTOR = 0x14
    SET_MAX_ACCELERATION_CL_MOTOR = 0x15
    SET_MAX_VELOCITY_CL_MOTOR = 0x16
    SET_MIN_MAX_DUTY_CYCLE_CL_MOTOR = 0x17
    PING = 0x18
    GET_INTERNAL_TEMP = 0x19
    CLEAR_IRQ = 0x1A
    GET_FREE_RAM = 0x1B
    GET_PID_VAL = 0x1C


class IRQCause(IntEnum):
    """Reasons the co-processor raises its interrupt line."""

    ENCODER_COUNTER_REACHED = 1
    ENCODER_VELOCITY_REACHED = 2


class Carrier(Enum):
    """Carrier board variants, which differ in pin wiring."""

    MKR = "mkr"
    NANO = "nano"


class PinPair(NamedTuple):
    a: int
    b: int


I2C_ADDRESS = 0x66
HOST_IRQ_PIN = 6
FIRMWARE_IRQ_PIN = 27
LED_BUILTIN = 3
ADC_BATTERY = "A2"

MOTOR_1_PINS = PinPair(7, 6)
MOTOR_2_PINS = PinPair(4, 5)
SERVO_PINS = (17, 23, 16, 22)

_ENCODER_PINS = {
    Carrier.NANO: (PinPair(8, 9), PinPair(11, 10)),
    Carrier.MKR: (PinPair(9, 8), PinPair(10, 11)),
}

_HOST_MOTOR_PINS = {
    Carrier.NANO: (PinPair(2, 3), PinPair(5, 4)),
    Carrier.MKR: (PinPair(3, 2), PinPair(4, 5)),
}

_HOST_ANALOG_INPUTS = {
    Carrier.NANO: ("A7", "A2", "A6", "A3"),
    Carrier.MKR: ("A6", "A1", "A5", "A2"),
}


def _carrier(carrier: Carrier) -> Carrier:
    if not isinstance(carrier, Carrier):
        raise TypeError(f"expected a Carrier, not {carrier!r}")
    return carrier


def encoder_pins(carrier: Carrier) -> tuple[PinPair, PinPair]:
    """Pins of encoders 1 and 2 on the co-processor."""
    return _ENCODER_PINS[_carrier(carrier)]


def host_motor_pins(carrier: Carrier) -> tuple[PinPair, PinPair]:
    """Host-driven pins of motors 3 and 4."""
    return _HOST_MOTOR_PINS[_carrier(carrier)]


def host_analog_inputs(carrier: Carrier) -> tuple[str, str, str, str]:
    """Host analog pins behind inputs IN1 to IN4."""
    return _HOST_ANALOG_INPUTS[_carrier(carrier)]