import pytest

from motorcarrier.fixedpoint import q24_8
from motorcarrier.pid import PID, Direction, ProportionalOn


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock(1000)


def make_pid(clock, kp=1, ki=0, kd=0, direction=Direction.DIRECT):
    return PID(kp, ki, kd, direction, ProportionalOn.ERROR, clock)


def test_manual_mode_does_not_compute(clock):
    pid = make_pid(clock)
    pid.setpoint = 10
    assert pid.compute() is False
    assert pid.output == q24_8(0)
    assert pid.automatic is False


def test_proportional_output_follows_error(clock):
    pid = make_pid(clock)
    pid.set_mode(True)
    pid.setpoint = 10
    pid.input = 0
    assert pid.compute() is True
    assert pid.output == q24_8(10)


def test_output_clamped_to_default_maximum(clock):
    pid = make_pid(clock)
    pid.set_mode(True)
    pid.setpoint = 1000
    pid.compute()
    assert pid.output == q24_8(255)


def test_output_clamped_to_custom_minimum(clock):
    pid = make_pid(clock)
    pid.set_output_limits(-30, 30)
    pid.set_mode(True)
    pid.setpoint = -500
    pid.compute()
    assert pid.output == q24_8(-30)


def test_invalid_output_limits_ignored(clock):
    pid = make_pid(clock)
    before = pid.output_limits
    pid.set_output_limits(5, 5)
    pid.set_output_limits(10, -10)
    assert pid.output_limits == before


def test_limits_clamp_output_while_automatic(clock):
    pid = make_pid(clock)
    pid.set_mode(True)
    pid.output = 200
    pid.set_output_limits(-90, 90)
    assert pid.output == q24_8(90)


def test_limits_do_not_touch_output_in_manual(clock):
    pid = make_pid(clock)
    pid.output = 200
    pid.set_output_limits(-90, 90)
    assert pid.output == q24_8(200)


def test_negative_tunings_ignored(clock):
    pid = make_pid(clock, kp=2, ki=1, kd=0)
    pid.set_tunings(-1, 1, 1)
    assert pid.kp == q24_8(2)
    assert pid.ki == q24_8(1)
    assert pid.kd == q24_8(0)


def test_display_gains_are_user_values(clock):
    pid = make_pid(clock, kp=2.5, ki=3, kd=0.5)
    assert (pid.kp, pid.ki, pid.kd) == (q24_8(2.5), q24_8(3), q24_8(0.5))


def test_sample_time_gates_compute(clock):
    pid = make_pid(clock)
    pid.set_mode(True)
    assert pid.compute() is True
    assert pid.compute() is False
    clock.now += pid.sample_time - 1
    assert pid.compute() is False
    clock.now += 1
    assert pid.compute() is True


def test_non_positive_sample_time_ignored(clock):
    pid = make_pid(clock)
    original = pid.sample_time
    pid.set_sample_time(0)
    pid.set_sample_time(-5)
    assert pid.sample_time == original
    pid.set_sample_time(20)
    assert pid.sample_time == 20


def test_reverse_direction_negates_output(clock):
    pid = make_pid(clock, direction=Direction.REVERSE)
    pid.set_output_limits(-100, 100)
    pid.set_mode(True)
    pid.setpoint = 10
    pid.compute()
    assert pid.output == -q24_8(10)
    assert pid.direction is Direction.REVERSE


def test_direction_change_in_auto_flips_gains(clock):
    direct = make_pid(clock)
    direct.set_output_limits(-100, 100)
    direct.set_mode(True)
    direct.set_controller_direction(Direction.REVERSE)
    direct.setpoint = 10
    direct.compute()

    reverse = make_pid(clock, direction=Direction.REVERSE)
    reverse.set_output_limits(-100, 100)
    reverse.set_mode(True)
    reverse.setpoint = 10
    reverse.compute()

    assert direct.output == reverse.output
    assert direct.output < q24_8(0)


def test_integral_term_accumulates(clock):
    pid = make_pid(clock, kp=0, ki=50, kd=0)
    pid.set_output_limits(-1000, 1000)
    pid.set_mode(True)
    pid.setpoint = 10
    outputs = []
    for _ in range(3):
        assert pid.compute() is True
        outputs.append(pid.output)
        clock.now += pid.sample_time
    assert outputs[0] < outputs[1] < outputs[2]


def test_mode_switch_roundtrip(clock):
    pid = make_pid(clock)
    pid.set_mode(True)
    assert pid.automatic is True
    pid.set_mode(False)
    assert pid.automatic is False
    assert pid.compute() is False


def test_rejects_non_numeric_setpoint(clock):
    pid = make_pid(clock)
    pid.setpoint = 3
    with pytest.raises(TypeError):
        pid.setpoint = "ten"
    assert pid.setpoint == q24_8(3)


def test_rejects_other_fixed_point_format(clock):
    from motorcarrier.fixedpoint import fp16

    pid = make_pid(clock)
    with pytest.raises(TypeError):
        pid.input = fp16(1)