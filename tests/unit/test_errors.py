import pickle

import pytest
from loguru import logger

import pyliteral as pl


def test_all_errors_are_syntax_errors():
    for cls in (pl.MalformedNumber, pl.MalformedString, pl.MalformedCollection,
                pl.DepthLimitExceeded, pl.UnexpectedToken, pl.TrailingInput,
                pl.UnexpectedEndOfInput):
        assert issubclass(cls, pl.ParseError)
        assert issubclass(cls, SyntaxError)


def test_error_reports_offset_line_and_column():
    text = "[\n  1,\n  2 3]"
    with pytest.raises(pl.ParseError) as ei:
        pl.parse(text)
    err = ei.value
    assert isinstance(err, pl.MalformedCollection)
    assert err.pos == 11
    assert (err.lineno, err.colno) == (3, 5)
    assert err.doc == text
    assert err.text == "  2 3]"
    assert str(err) == "unexpected token NUMBER 3 - expected ',' or ']' at offset 11 (line 3, column 5)"


def test_end_of_input_points_past_the_text():
    with pytest.raises(pl.UnexpectedEndOfInput) as ei:
        pl.parse("{'a': [1,")
    assert ei.value.pos == 9
    assert "unexpected end of input" in str(ei.value)


def test_trailing_input_message():
    with pytest.raises(pl.TrailingInput) as ei:
        pl.parse("[1] 2")
    assert "extra data after literal" in str(ei.value)
    assert ei.value.pos == 4


def test_error_pickles():
    with pytest.raises(pl.ParseError) as ei:
        pl.parse("'open")
    clone = pickle.loads(pickle.dumps(ei.value))
    assert type(clone) is pl.MalformedString
    assert (clone.msg, clone.pos) == (ei.value.msg, ei.value.pos)


def _capture(fn, *args):
    messages = []
    handle = logger.add(messages.append, format="{message}", level="DEBUG")
    try:
        fn(*args)
    except pl.ParseError:
        pass
    finally:
        logger.remove(handle)
    return messages


def test_rejections_are_logged():
    messages = _capture(pl.parse, "[1, 2")
    assert any("Rejected literal: unexpected end of input" in m for m in messages)


def test_duplicate_keys_are_logged():
    messages = _capture(pl.parse, "{'a': 1, 'a': 2}")
    assert any("Duplicate dict key" in m for m in messages)


def test_duplicate_set_members_are_logged():
    messages = _capture(pl.parse, "{1, 1}")
    assert any("Dropping duplicate set member" in m for m in messages)
