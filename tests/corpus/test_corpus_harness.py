import os

import pytest

import pyliteral as pl

TEST_DIR = os.path.dirname(__file__)

# Every literal file in corpus/
literal_files = sorted(f for f in os.listdir(TEST_DIR) if f.endswith(".txt"))

VALID_FILES = [f for f in literal_files if f.startswith("pass")]
INVALID_FILES = [f for f in literal_files if f.startswith("fail")]

# Hard fail if test files are missing
if not VALID_FILES:
    raise RuntimeError("No pass*.txt files found in corpus directory")
if not INVALID_FILES:
    raise RuntimeError("No fail*.txt files found in corpus directory")


def _read(filename):
    with open(os.path.join(TEST_DIR, filename), encoding="utf-8") as f:
        return f.read()


@pytest.mark.parametrize("filename", VALID_FILES)
def test_valid_literal_parses_and_round_trips(filename):
    value = pl.parse(_read(filename))
    canonical = pl.format(value)
    assert pl.parse(canonical) == value, f"{filename} did not survive format/parse"
    assert pl.format(pl.parse(canonical)) == canonical


@pytest.mark.parametrize("filename", INVALID_FILES)
def test_invalid_literal_is_rejected(filename):
    with pytest.raises(pl.ParseError):
        pl.parse(_read(filename))
