# parser.py
# Recursive-descent parser for Python literal text.
#
# =============================================================================
#  GRAMMAR
# =============================================================================
#
#   literal   := atom END
#   atom      := "None" | "True" | "False" | "set" "(" ")"
#              | number | STRING+ | tuple | list | braces
#   number    := [SIGN] NUMBER [SIGN imaginary]      (real +/- imaginary only)
#   tuple     := "(" ")" | "(" atom ")"              (grouping, not a tuple)
#              | "(" atom "," [atom ("," atom)* [","]] ")"
#   list      := "[" [atom ("," atom)* [","]] "]"
#   braces    := "{" "}"                             (empty dict)
#              | "{" atom ":" atom ("," atom ":" atom)* [","] "}"
#              | "{" atom ("," atom)* [","] "}"      (set)
#
# Each production maps to one function below. Tokens come from lexer.lex(),
# which already turned numeric and string tokens into Values.
# =============================================================================

from typing import List, Tuple

from loguru import logger

from .errors import (
    DepthLimitExceeded,
    MalformedCollection,
    MalformedNumber,
    ParseError,
    TrailingInput,
    UnexpectedEndOfInput,
    UnexpectedToken,
)
from .lexer import OPENERS, LookAhead, lex
from .text import concatenate
from .value import COMPLEX, FLOAT, INTEGER, Value

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 100    # nesting levels; keeps deep input away from the recursion limit

_KEYWORDS = {
    "None":  Value.Null(),
    "True":  Value.Boolean(True),
    "False": Value.Boolean(False),
}

_CLOSERS = set(OPENERS.values())

# ---------------------------------------------------------------------------
# PARSER UTILITY
# ---------------------------------------------------------------------------
def _describe(kind: str, value) -> str:
    if kind in ("NUMBER", "STRING"):
        return f"{kind} {value}"
    return f"{kind} '{value}'"


def _is(token, kind: str, value: str) -> bool:
    return token[0] == kind and token[1] == value


def _unexpected(tokens: LookAhead, token, expected: str) -> ParseError:
    """
    Build the error for a token that breaks a collection.

    Running out of input is reported as such; anything else is a malformed
    collection with the expected and actual tokens spelled out.
    """
    kind, value, pos = token
    if kind == "END":
        return UnexpectedEndOfInput(f"unexpected end of input - expected {expected}", tokens.doc, pos)
    return MalformedCollection(
        f"unexpected token {_describe(kind, value)} - expected {expected}", tokens.doc, pos
    )


def _closer_kind(closer: str) -> str:
    return {")": "PAREN", "]": "BRACKET", "}": "BRACE"}[closer]

# ---------------------------------------------------------------------------
# CORE VALUE PARSER
# ---------------------------------------------------------------------------
def _parse_value(tokens: LookAhead, depth: int, max_depth: int) -> Value:
    """Dispatch on the next token to the matching production."""
    kind, value, pos = next(tokens)

    if kind == "NUMBER":
        return _parse_number(tokens, None, value)
    if kind == "SIGN":
        return _parse_signed(tokens, value)
    if kind == "STRING":
        return _parse_text(tokens, value, pos)
    if kind == "NAME":
        return _parse_name(tokens, value, pos)
    if value in OPENERS and kind in ("PAREN", "BRACKET", "BRACE"):
        if depth >= max_depth:
            raise DepthLimitExceeded(f"depth limit of {max_depth} exceeded", tokens.doc, pos)
        if value == "(":
            return _parse_paren(tokens, depth + 1, max_depth)
        if value == "[":
            return _parse_list(tokens, depth + 1, max_depth)
        return _parse_braces(tokens, depth + 1, max_depth)

    if kind == "END":
        raise UnexpectedEndOfInput("unexpected end of input - value expected", tokens.doc, pos)
    if depth > 0 and (kind in ("COMMA", "COLON") or value in _CLOSERS):
        raise MalformedCollection(f"unexpected token {_describe(kind, value)} - value expected", tokens.doc, pos)
    raise UnexpectedToken(f"unexpected token {_describe(kind, value)} - value expected", tokens.doc, pos)

# ---------------------------------------------------------------------------
# SCALARS
# ---------------------------------------------------------------------------
def _parse_name(tokens: LookAhead, name: str, pos: int) -> Value:
    if name in _KEYWORDS:
        return _KEYWORDS[name]
    if name == "set":
        # set() is the only spelling of an empty set
        token = next(tokens)
        if _is(token, "PAREN", "("):
            token = next(tokens)
            if _is(token, "PAREN", ")"):
                return Value.Set()
        if token[0] == "END":
            raise UnexpectedEndOfInput("unexpected end of input in set()", tokens.doc, token[2])
        raise UnexpectedToken("only the empty call set() is allowed", tokens.doc, pos)
    raise UnexpectedToken(f"unexpected name '{name}' - value expected", tokens.doc, pos)


def _parse_signed(tokens: LookAhead, sign: str) -> Value:
    kind, value, num_pos = next(tokens)
    if kind != "NUMBER":
        if kind == "END":
            raise UnexpectedEndOfInput(f"unexpected end of input after '{sign}'", tokens.doc, num_pos)
        raise UnexpectedToken(f"numeric literal expected after '{sign}'", tokens.doc, num_pos)
    return _parse_number(tokens, sign, value)


def _negate(number: Value) -> Value:
    if number.kind == INTEGER:
        return Value.Integer(-number.data)
    if number.kind == FLOAT:
        return Value.Float(-number.data)
    return Value.Complex(-number.data)


def _parse_number(tokens: LookAhead, sign, number: Value) -> Value:
    """
    Apply the optional leading sign, then fold a trailing ``+ imag`` or
    ``- imag`` into a complex value when a real part precedes it.
    """
    if sign == "-":
        number = _negate(number)
    if number.kind == COMPLEX:
        return number

    kind, op, op_pos = tokens.peek()
    if kind != "SIGN":
        return number
    next(tokens)

    kind, imag, imag_pos = next(tokens)
    if kind == "END":
        raise UnexpectedEndOfInput(f"unexpected end of input after '{op}'", tokens.doc, imag_pos)
    if kind != "NUMBER" or imag.kind != COMPLEX:
        raise MalformedNumber(f"imaginary literal expected after '{op}'", tokens.doc, imag_pos)
    try:
        real = float(number.data)
    except OverflowError:
        raise MalformedNumber("integer too large for the real part of a complex number",
                              tokens.doc, op_pos) from None
    part = imag.data.imag
    return Value.Complex(complex(real, part if op == "+" else -part))


def _parse_text(tokens: LookAhead, first: Value, pos: int) -> Value:
    parts: List[Tuple[Value, int]] = [(first, pos)]
    while tokens.peek()[0] == "STRING":
        _, value, next_pos = next(tokens)
        parts.append((value, next_pos))
    if len(parts) == 1:
        return first
    return concatenate(parts, tokens.doc)

# ---------------------------------------------------------------------------
# SEQUENCE PARSERS
# ---------------------------------------------------------------------------
def _parse_items(tokens: LookAhead, closer: str, depth: int, max_depth: int, items: List[Value]) -> List[Value]:
    """
    Parse ``[atom ("," atom)* [","]] closer`` and append to ``items``.

    Called just after an opener or after a comma that followed an item.
    """
    closer_kind = _closer_kind(closer)
    while True:
        if _is(tokens.peek(), closer_kind, closer):
            next(tokens)
            return items
        items.append(_parse_value(tokens, depth, max_depth))
        token = next(tokens)
        if _is(token, closer_kind, closer):
            return items
        if token[0] != "COMMA":
            raise _unexpected(tokens, token, f"',' or '{closer}'")


def _parse_paren(tokens: LookAhead, depth: int, max_depth: int) -> Value:
    """
    ``()`` is the empty tuple, ``(x)`` is just x, ``(x,)`` and longer
    comma-separated forms are tuples.
    """
    if _is(tokens.peek(), "PAREN", ")"):
        next(tokens)
        return Value.Tuple()
    first = _parse_value(tokens, depth, max_depth)
    token = next(tokens)
    if _is(token, "PAREN", ")"):
        return first
    if token[0] != "COMMA":
        raise _unexpected(tokens, token, "',' or ')'")
    return Value.Tuple(_parse_items(tokens, ")", depth, max_depth, [first]))


def _parse_list(tokens: LookAhead, depth: int, max_depth: int) -> Value:
    return Value.List(_parse_items(tokens, "]", depth, max_depth, []))

# ---------------------------------------------------------------------------
# SET / DICT PARSER
# ---------------------------------------------------------------------------
def _parse_braces(tokens: LookAhead, depth: int, max_depth: int) -> Value:
    """
    The separator after the first entry decides: ':' makes a dict, ','
    or '}' a set. ``{}`` is the empty dict.
    """
    if _is(tokens.peek(), "BRACE", "}"):
        next(tokens)
        return Value.Dict()
    first = _parse_value(tokens, depth, max_depth)
    token = next(tokens)
    if token[0] == "COLON":
        return _parse_dict(tokens, first, depth, max_depth)

    members = [first]
    while True:
        if _is(token, "BRACE", "}"):
            return Value.Set(members)
        if token[0] == "COLON":
            raise MalformedCollection("cannot mix set members and dict entries", tokens.doc, token[2])
        if token[0] != "COMMA":
            raise _unexpected(tokens, token, "',' or '}'")
        if _is(tokens.peek(), "BRACE", "}"):
            next(tokens)
            return Value.Set(members)
        members.append(_parse_value(tokens, depth, max_depth))
        token = next(tokens)


def _parse_dict(tokens: LookAhead, first_key: Value, depth: int, max_depth: int) -> Value:
    """Parse the rest of a dict display; the first key and its colon are consumed."""
    pairs: List[Tuple[Value, Value]] = []
    key = first_key
    while True:
        pairs.append((key, _parse_value(tokens, depth, max_depth)))
        token = next(tokens)
        if _is(token, "BRACE", "}"):
            break
        if token[0] != "COMMA":
            raise _unexpected(tokens, token, "',' or '}'")
        if _is(tokens.peek(), "BRACE", "}"):
            next(tokens)
            break
        key = _parse_value(tokens, depth, max_depth)
        token = next(tokens)
        if token[0] != "COLON":
            if token[0] in ("COMMA", "BRACE"):
                raise MalformedCollection("cannot mix set members and dict entries", tokens.doc, token[2])
            raise _unexpected(tokens, token, "':'")
    return Value.Dict(pairs)

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(text: str, *, max_depth: int = DEPTH_LIMIT_DEFAULT) -> Value:
    """
    Parse one Python literal from ``text``.

    The whole input must be consumed: surrounding whitespace and comments
    are fine, anything else after the literal raises TrailingInput. Any
    failure raises a ParseError subclass carrying the offset, line and
    column of the problem.
    """
    tokens = LookAhead(lex(text), text)
    try:
        result = _parse_value(tokens, 0, max_depth)
        kind, value, pos = next(tokens)
        if kind != "END":
            raise TrailingInput(f"extra data after literal: {_describe(kind, value)}", text, pos)
    except ParseError as exc:
        logger.debug("Rejected literal: {}", exc)
        raise
    return result
