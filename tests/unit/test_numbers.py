import math

import pytest

import pyliteral as pl
from pyliteral.numeric import decimal_to_int, int_to_decimal, read_number


def test_radix_literals():
    assert pl.parse("0x1A") == pl.Value.Integer(26)
    assert pl.parse("0b101") == pl.Value.Integer(5)
    assert pl.parse("0o17") == pl.Value.Integer(15)
    assert pl.parse("0XfF") == pl.Value.Integer(255)


def test_underscore_grouping_in_every_radix():
    for text in ("0b_1001_0010_1010", "0o44_52", "0x9_2a", "2_346"):
        assert pl.parse(text).as_integer() == 2346


def test_big_integer_is_exact():
    digits = "123456789012345678901234567890"
    value = pl.parse(digits)
    assert value.as_integer() == 123456789012345678901234567890
    assert pl.format(value) == digits


def test_integer_beyond_str_conversion_limit():
    digits = "9" * 5000
    value = pl.parse(digits)
    assert value.as_integer() == 10 ** 5000 - 1
    assert pl.format(value) == digits
    assert pl.format(pl.parse("-" + digits)) == "-" + digits


def test_duplicate_huge_integers_in_sets_and_dicts():
    digits = "1" * 5000
    value = pl.parse("{" + digits + ", " + digits + "}")
    assert value.as_set() == (pl.parse(digits),)
    value = pl.parse("{" + digits + ": 1, " + digits + ": 2}")
    assert value.as_dict() == ((pl.parse(digits), pl.Value.Integer(2)),)


def test_chunked_decimal_helpers_agree():
    number = 7 ** 3000
    text = int_to_decimal(number)
    assert decimal_to_int(text) == number
    assert int_to_decimal(-number) == "-" + text
    assert int_to_decimal(0) == "0"


def test_zero_spellings():
    assert pl.parse("0").as_integer() == 0
    assert pl.parse("00").as_integer() == 0
    assert pl.parse("0_0").as_integer() == 0


def test_leading_zero_decimal_rejected():
    with pytest.raises(pl.MalformedNumber) as ei:
        pl.parse("012")
    assert "leading zeros" in str(ei.value)


def test_float_forms():
    assert pl.parse("1.5").as_float() == 1.5
    assert pl.parse("1.").as_float() == 1.0
    assert pl.parse(".5").as_float() == 0.5
    assert pl.parse("1e3").as_float() == 1000.0
    assert pl.parse("1E-2").as_float() == 0.01
    assert pl.parse("2.5e+2").as_float() == 250.0
    assert pl.parse("3_51.4_6e-2_7").as_float() == 351.46e-27
    assert pl.parse("012.5").as_float() == 12.5


def test_float_overflow_reads_as_infinity():
    assert math.isinf(pl.parse("1e999").as_float())


def test_imaginary_literal():
    value = pl.parse("5j")
    assert value.is_complex()
    assert value.as_complex() == complex(0.0, 5.0)
    assert pl.parse("1.5J").as_complex() == 1.5j
    assert pl.parse("1e2j").as_complex() == 100j


def test_sign_is_applied():
    assert pl.parse("-5").as_integer() == -5
    assert pl.parse("+5").as_integer() == 5
    assert pl.parse("- 2.5").as_float() == -2.5
    negative_zero = pl.parse("-0.0").as_float()
    assert negative_zero == 0.0 and math.copysign(1.0, negative_zero) < 0


def test_complex_composition():
    assert pl.parse("1 + 2j").as_complex() == complex(1.0, 2.0)
    assert pl.parse("1-2j").as_complex() == complex(1.0, -2.0)
    assert pl.parse("-1.5 - 0.5j").as_complex() == complex(-1.5, -0.5)
    assert pl.parse("[2+7j]") == pl.Value.List([pl.Value.Complex(2 + 7j)])


def test_complex_needs_imaginary_right_operand():
    with pytest.raises(pl.MalformedNumber) as ei:
        pl.parse("1 + 2")
    assert "imaginary literal expected" in str(ei.value)
    assert ei.value.pos == 4


def test_complex_real_part_too_large():
    with pytest.raises(pl.MalformedNumber):
        pl.parse("1" + "0" * 400 + " + 1j")


def test_sign_without_number():
    with pytest.raises(pl.UnexpectedToken):
        pl.parse("-'x'")
    with pytest.raises(pl.UnexpectedEndOfInput):
        pl.parse("-")


@pytest.mark.parametrize("text", ["1_", "1__0", "0x_", "1._5", "1e_5", "0x"])
def test_bad_underscores_and_prefixes(text):
    with pytest.raises(pl.MalformedNumber):
        pl.parse(text)


@pytest.mark.parametrize("text", ["1e", "1e+", "2.5E-"])
def test_missing_exponent_digits(text):
    with pytest.raises(pl.MalformedNumber) as ei:
        pl.parse(text)
    assert "exponent" in str(ei.value)


def test_number_running_into_identifier():
    with pytest.raises(pl.MalformedNumber) as ei:
        pl.parse("123abc")
    assert ei.value.pos == 3
    with pytest.raises(pl.MalformedNumber):
        pl.parse("0b102")
    with pytest.raises(pl.MalformedNumber):
        pl.parse("0x1j")


def test_read_number_reports_end_offset():
    value, end = read_number("[12_3, 4]", 1)
    assert value == pl.Value.Integer(123)
    assert end == 5
