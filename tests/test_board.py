import struct

import pytest

from motorcarrier.board import DEFAULT_CARRIER, Board, PinMode, Reply
from motorcarrier.commands import Carrier


def test_default_carrier_is_mkr():
    assert DEFAULT_CARRIER is Carrier.MKR
    assert Board().carrier is Carrier.MKR


def test_clock_advances():
    board = Board()
    assert board.millis() == 0
    assert board.advance(15) == 15
    board.advance(5)
    assert board.millis() == 20


def test_clock_rejects_negative_step():
    board = Board()
    with pytest.raises(ValueError):
        board.advance(-1)


def test_pin_mode_recorded():
    board = Board(Carrier.NANO)
    board.pin_mode(7, PinMode.OUTPUT)
    board.pin_mode(7, PinMode.INPUT)
    assert board.modes == {7: PinMode.INPUT}


def test_pin_mode_type_checked():
    with pytest.raises(TypeError):
        Board().pin_mode(7, "output")


def test_analog_write_recorded():
    board = Board()
    board.analog_write(4, 127)
    assert board.outputs[4] == 127


def test_analog_read_defaults_to_zero_then_follows_input():
    board = Board()
    assert board.analog_read("A2") == 0
    board.set_analog_input("A2", 512)
    assert board.analog_read("A2") == 512


@pytest.mark.parametrize("value", [-1, 1024])
def test_analog_input_range(value):
    with pytest.raises(ValueError):
        Board().set_analog_input("A2", value)


def test_reply_int_is_four_little_endian_bytes():
    reply = Reply()
    assert reply.write(-2) == 4
    assert struct.unpack("<i", bytes(reply)) == (-2,)


def test_reply_bool_is_one_byte_and_concatenates():
    reply = Reply()
    reply.write(True)
    reply.write(False)
    reply.write(b"\x07")
    assert bytes(reply) == b"\x01\x00\x07"
    assert len(reply) == 3


def test_reply_wraps_like_a_cast():
    reply = Reply()
    reply.write(2**32 + 5)
    assert struct.unpack("<i", bytes(reply)) == (5,)


def test_reply_clear():
    reply = Reply()
    reply.write(1)
    reply.clear()
    assert bytes(reply) == b""


def test_reply_rejects_other_types():
    with pytest.raises(TypeError):
        Reply().write(1.5)