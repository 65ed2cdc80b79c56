import pytest

from motorcarrier.fixedpoint import (
    FixedPoint,
    double_to_raw_fix32,
    fixed_multiply,
    float_to_raw_fix32,
    fp8,
    fp16,
    fp32,
    fp64,
    q24_8,
)


def test_to_int_rounds_towards_negative_infinity():
    assert q24_8(66.3).to_int() == 66
    assert q24_8(-66.3).to_int() == -67
    assert int(q24_8(-66.3)) == -67


@pytest.mark.parametrize("value", [0.0, 1.5, -2.25, 100.125, -0.00390625])
def test_exact_float_round_trip(value):
    assert q24_8(value).to_float() == value
    assert float(q24_8(value)) == value


@pytest.mark.parametrize("value", [0, 1, -1, 1234, -8000])
def test_int_round_trip(value):
    assert q24_8(value).to_int() == value
    assert q24_8(value) == value


def test_integer_constructor_shifts_by_fraction_bits():
    assert q24_8(1).raw == 1 << 8
    assert fp16(3, 4).raw == 3 << 4


def test_from_raw_round_trip():
    x = q24_8(-12.75)
    assert FixedPoint.from_raw(x.raw, x.frac_bits, x.width) == x


def test_float_constructor_truncates_towards_zero():
    one_lsb = 1 / 256
    assert q24_8(one_lsb * 0.9).raw == 0
    assert q24_8(-one_lsb * 0.9).raw == 0


def test_eight_bit_wraps_around():
    assert fp8(8, 4) == FixedPoint.from_raw(-128, 4, 8)
    x = fp8(7, 4)
    assert -128 <= x.raw <= 127


def test_add_sub_neg_invariants():
    a = q24_8(3.5)
    b = q24_8(-1.25)
    assert a + b == b + a
    assert (a + b) - b == a
    assert a + (-a) == 0
    assert -(-a) == a


def test_add_and_sub_with_int():
    a = q24_8(2.5)
    assert (a + 3) == q24_8(2.5) + q24_8(3)
    assert (a - 3) == q24_8(2.5) - q24_8(3)


def test_multiply_identity_and_commutativity():
    a = q24_8(7.75)
    b = q24_8(-3.5)
    assert a * q24_8(1) == a
    assert a * b == b * a
    assert (a * b).to_float() == 7.75 * -3.5


def test_multiply_uses_wide_intermediate():
    a = q24_8(30000)
    b = q24_8(2)
    assert (a * b).to_int() == 30000 * 2


def test_fixed_multiply_raw():
    assert fixed_multiply(1 << 8, 1 << 8, 8, 32) == 1 << 8
    assert fixed_multiply(-(1 << 8), 1 << 8, 8, 32) == -(1 << 8)


def test_multiply_by_int_scales_raw():
    a = q24_8(1.5)
    assert (a * 4).raw == a.raw * 4


def test_divide_identity_and_inverse():
    a = q24_8(10.5)
    assert a / q24_8(1) == a
    assert (a * q24_8(2)) / q24_8(2) == a
    assert (q24_8(9) / q24_8(3)).to_int() == 9 // 3


def test_divide_by_int_truncates_towards_zero():
    assert (FixedPoint.from_raw(-1, 8, 32) / 2).raw == 0
    assert (FixedPoint.from_raw(7, 8, 32) / 2).raw == 7 // 2


def test_division_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        q24_8(1) / q24_8(0)
    with pytest.raises(ZeroDivisionError):
        q24_8(1) / 0
    with pytest.raises(ZeroDivisionError):
        q24_8(1) % q24_8(0)


def test_modulo_follows_dividend_sign():
    a = q24_8(-5)
    b = q24_8(3)
    r = a % b
    assert r < 0
    assert r > -b
    assert ((a - r).raw % b.raw) == 0
    assert q24_8(6) % 3 == 0


def test_comparisons_with_fixed_and_int():
    a = q24_8(1.5)
    b = q24_8(2)
    assert a < b and b > a
    assert a <= a and a >= a
    assert a > 1 and a < 2
    assert b >= 2 and b <= 2
    assert not (a == 1)


def test_hash_consistent_with_equality():
    assert hash(q24_8(2.5)) == hash(q24_8(2.5))
    assert hash(q24_8(4)) == hash(4)
    assert len({q24_8(1.0), q24_8(1)}) == 1


def test_mismatched_formats_raise():
    with pytest.raises(TypeError):
        q24_8(1) + fp16(1, 8)
    with pytest.raises(TypeError):
        q24_8(1) * fp32(1, 4)
    with pytest.raises(TypeError):
        q24_8(1) < fp32(1, 4)
    assert (q24_8(1) == fp32(1, 4)) is False


def test_unsupported_operand_type_raises():
    with pytest.raises(TypeError):
        q24_8(1) + "x"
    with pytest.raises(TypeError):
        FixedPoint("1.0")


@pytest.mark.parametrize(
    "frac_bits,width", [(8, 12), (32, 32), (-1, 32), (8, 128)]
)
def test_invalid_format_raises(frac_bits, width):
    with pytest.raises(ValueError):
        FixedPoint(1, frac_bits, width)


def test_non_finite_float_raises():
    with pytest.raises(ValueError):
        q24_8(float("inf"))
    with pytest.raises(ValueError):
        q24_8(float("nan"))


def test_raw_conversion_helpers_match_constructor():
    for value in (0.5, -3.75, 123.0):
        assert float_to_raw_fix32(value, 8) == q24_8(value).raw
        assert double_to_raw_fix32(value, 8) == q24_8(value).raw
    assert float_to_raw_fix32(1.0, 8) == 1 << 8


def test_float_helper_uses_single_precision():
    assert float_to_raw_fix32(1 / 3, 30) > double_to_raw_fix32(1 / 3, 30)


def test_repr_round_trip_information():
    x = q24_8(-2.5)
    text = repr(x)
    assert str(x.raw) in text
    assert "frac_bits=8" in text and "width=32" in text