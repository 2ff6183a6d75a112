import math

import pyliteral as pl
from pyliteral import Value

SAMPLES = [
    "None",
    "[True, False]",
    "-0.0",
    "1e-310",
    "1e999",
    "-1e999",
    "(-0.0-0.0j)",
    "-5j",
    "1e999 - 1e999j",
    "'quote \" and \\' and \\\\'",
    "'\\x00\\x7f\\u2028\\U000f0000'",
    "b'\\x00\\xff\"\\''",
    "((1,),)",
    "{(1, 2): {'a': [b'', set()]}}",
    "{1.5, -2, 'x', (None,)}",
]


def test_canonical_output_reparses_to_equal_value():
    for text in SAMPLES:
        value = pl.parse(text)
        assert pl.parse(pl.format(value)) == value, text


def test_reformatting_is_idempotent():
    for text in SAMPLES:
        once = pl.format(pl.parse(text))
        assert pl.format(pl.parse(once)) == once, text


def test_complex_signed_zeros_survive():
    value = pl.parse(pl.format(Value.Complex(complex(-0.0, -0.0))))
    z = value.as_complex()
    assert math.copysign(1.0, z.real) < 0
    assert math.copysign(1.0, z.imag) < 0


def test_empty_set_round_trips():
    assert pl.parse(pl.format(Value.Set())) == Value.Set()


def test_string_escape_round_trip():
    value = pl.parse("'a\\nb'")
    assert value.as_string() == "a\nb"
    assert pl.parse(pl.format(value)) == value


def test_ascii_only_output_round_trips():
    value = Value.String("caf\xe9 " + chr(0x1F600))
    text = pl.format(value, ascii_only=True)
    assert text.isascii()
    assert pl.parse(text) == value
