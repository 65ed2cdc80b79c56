import pytest

from motorcarrier.commands import (
    Carrier,
    Command,
    IRQCause,
    PinPair,
    encoder_pins,
    host_analog_inputs,
    host_motor_pins,
)


def test_command_numbering_is_consecutive_from_one():
    count = len(Command)
    assert [Command(value) for value in range(1, count + 1)] == list(Command)
    with pytest.raises(ValueError):
        Command(0)
    with pytest.raises(ValueError):
        Command(count + 1)


def test_command_endpoints():
    assert Command(0x01) is Command.GET_VERSION
    assert Command(0x02) is Command.RESET
    assert Command(28) is Command.GET_PID_VAL


def test_irq_causes():
    assert IRQCause(1) is IRQCause.ENCODER_COUNTER_REACHED
    assert IRQCause(2) is IRQCause.ENCODER_VELOCITY_REACHED
    with pytest.raises(ValueError):
        IRQCause(3)


def test_encoder_pins_per_carrier():
    assert encoder_pins(Carrier.NANO) == (PinPair(8, 9), PinPair(11, 10))
    assert encoder_pins(Carrier.MKR) == (PinPair(9, 8), PinPair(10, 11))


def test_host_motor_pins_per_carrier():
    assert host_motor_pins(Carrier.NANO) == (PinPair(2, 3), PinPair(5, 4))
    assert host_motor_pins(Carrier.MKR) == (PinPair(3, 2), PinPair(4, 5))


def test_host_analog_inputs_per_carrier():
    assert host_analog_inputs(Carrier.NANO) == ("A7", "A2", "A6", "A3")
    assert host_analog_inputs(Carrier.MKR) == ("A6", "A1", "A5", "A2")


def test_pins_use_same_set_on_both_carriers():
    nano = {pin for pair in encoder_pins(Carrier.NANO) for pin in pair}
    mkr = {pin for pair in encoder_pins(Carrier.MKR) for pin in pair}
    assert nano == mkr


def test_rejects_non_carrier():
    with pytest.raises(TypeError):
        encoder_pins("nano")