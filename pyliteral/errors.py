# errors.py
# Failure taxonomy shared by the lexer, the scalar readers and the parser.
#
# Every error records the source text and the absolute character offset at
# which the problem was detected. Line and column are derived from the offset
# so callers can point at the exact spot in multi-line input.

from typing import Tuple


def _line_and_column(doc: str, pos: int) -> Tuple[int, int]:
    lineno = doc.count("\n", 0, pos) + 1
    colno = pos - doc.rfind("\n", 0, pos)
    return lineno, colno


class ParseError(SyntaxError):
    """
    Base class for every parse failure.

    Attributes:
        msg:    human readable description, without position
        doc:    the text being parsed
        pos:    0-based character offset of the failure
        lineno: 1-based line of ``pos``
        colno:  1-based column of ``pos``
    """

    def __init__(self, msg: str, doc: str, pos: int):
        super().__init__(msg)
        self.msg = msg
        self.doc = doc
        self.pos = pos
        self.lineno, self.colno = _line_and_column(doc, pos)
        # Keep SyntaxError's own fields consistent for traceback rendering.
        self.offset = self.colno
        start = doc.rfind("\n", 0, pos) + 1
        end = doc.find("\n", pos)
        self.text = doc[start:] if end < 0 else doc[start:end]

    def __str__(self):
        return f"{self.msg} at offset {self.pos} (line {self.lineno}, column {self.colno})"

    def __reduce__(self):
        return self.__class__, (self.msg, self.doc, self.pos)


class MalformedNumber(ParseError):
    """Bad digits, radix prefix, underscore placement, exponent or imaginary suffix."""


class MalformedString(ParseError):
    """Unterminated literal, bad escape or prefix, or str/bytes concatenation."""


class MalformedCollection(ParseError):
    """Mismatched delimiter, mixed set/dict entries or a misplaced separator."""


class DepthLimitExceeded(MalformedCollection):
    """Collections nested deeper than the configured limit."""


class UnexpectedToken(ParseError):
    """A character or token that cannot begin a literal."""


class TrailingInput(ParseError):
    """A complete literal was read but more non-blank input follows."""


class UnexpectedEndOfInput(ParseError):
    """The text ended in the middle of a token or collection."""
