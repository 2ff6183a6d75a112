# lexer.py
# Tokenizer for Python literal text.
#
# A single compiled regex classifies the token that starts at the cursor.
# Punctuation and names are taken straight from the match; numeric and
# string tokens only have their first characters recognised by the regex
# and are then read in full by the numeric and text readers, which know
# where those literals end.
#
# Whitespace, backslash line continuations and comments are skipped between
# tokens. The stream always ends with a single END token whose offset is the
# length of the input.

import re
from typing import Iterator, List, Tuple

from .errors import UnexpectedToken
from .numeric import read_number
from .text import read_text

# ---------------------------------------------------------------------------
# REGEX BLUEPRINT
# ---------------------------------------------------------------------------
_SKIP          = r"(?:[ \t\f\r\n]+|\\\r?\n|#[^\r\n]*)+"
_STRING_START  = r"""(?:[^\W\d]\w*)?['"]"""     # optional prefix, then a quote
_NUMBER_START  = r"\.?[0-9]"
_NAME          = r"[^\W\d]\w*"

_TOKEN_RE = re.compile(
    rf"(?P<SKIP>{_SKIP})|"
    rf"(?P<STRING>{_STRING_START})|"
    rf"(?P<NUMBER>{_NUMBER_START})|"
    rf"(?P<NAME>{_NAME})|"
    r"(?P<PAREN>[()])|"          # ( or )
    r"(?P<BRACKET>[\[\]])|"      # [ or ]
    r"(?P<BRACE>[{}])|"          # { or }
    r"(?P<SIGN>[+-])|"
    r"(?P<COMMA>,)|"
    r"(?P<COLON>:)",
)

OPENERS = {"(": ")", "[": "]", "{": "}"}

# ---------------------------------------------------------------------------
# TOKEN RECORD
# ---------------------------------------------------------------------------
class Token(Tuple[str, object, int]):
    """
    Immutable token record: (kind, value, absolute_offset).

    NUMBER and STRING tokens carry a ready Value; the others carry their
    source text, and END carries None.
    """
    pass

# ---------------------------------------------------------------------------
# LOOKAHEAD RING
# ---------------------------------------------------------------------------
class LookAhead:
    """
    One-slot pushback iterator over tokens.

    Also keeps the source text so parse errors can be attached to it.
    """
    def __init__(self, iterable: Iterator[Token], doc: str):
        self._iter = iter(iterable)
        self._buf: List[Token] = []
        self.doc = doc

    def __iter__(self):
        return self

    def __next__(self) -> Token:
        if self._buf:
            return self._buf.pop()
        return next(self._iter)

    def peek(self) -> Token:
        if not self._buf:
            self._buf.append(next(self._iter))
        return self._buf[-1]

# ---------------------------------------------------------------------------
# LEXER
# ---------------------------------------------------------------------------
def lex(text: str) -> Iterator[Token]:
    """
    Lazily produce tokens for ``text``.

    Errors surface when the offending token is reached, so a parser that
    stops early never sees problems further along.
    """
    pos = 0
    n = len(text)
    while pos < n:
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise UnexpectedToken(f"invalid character {text[pos]!r}", text, pos)
        kind = m.lastgroup
        start = pos

        if kind == "SKIP":
            pos = m.end()
            continue
        if kind == "STRING":
            value, pos = read_text(text, start)
        elif kind == "NUMBER":
            value, pos = read_number(text, start)
        else:
            value = m.group()
            pos = m.end()

        yield Token((kind, value, start))

    yield Token(("END", None, n))
