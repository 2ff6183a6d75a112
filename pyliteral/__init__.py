"""
pyliteral - read and write Python literal syntax without evaluating it.

    >>> from pyliteral import parse, format
    >>> value = parse("{'size': (3, 4), 'tags': {b'a', b'b'}}")
    >>> format(value)
    '{"size": (3, 4), "tags": {b"a", b"b"}}'

Logging goes through loguru and is disabled by default; call
``logger.enable("pyliteral")`` to see debug output.
"""

from loguru import logger

from .errors import (
    DepthLimitExceeded,
    MalformedCollection,
    MalformedNumber,
    MalformedString,
    ParseError,
    TrailingInput,
    UnexpectedEndOfInput,
    UnexpectedToken,
)
from .formatter import format
from .lexer import Token, lex
from .parser import DEPTH_LIMIT_DEFAULT, parse
from .value import (
    BOOLEAN,
    BYTES,
    COMPLEX,
    DICT,
    FLOAT,
    INTEGER,
    KINDS,
    LIST,
    NULL,
    SET,
    STRING,
    TUPLE,
    Value,
)

__version__ = "0.1.0"

__all__ = [
    "parse", "format", "lex", "Token", "Value", "DEPTH_LIMIT_DEFAULT",
    "NULL", "BOOLEAN", "INTEGER", "FLOAT", "COMPLEX", "BYTES", "STRING",
    "TUPLE", "LIST", "SET", "DICT", "KINDS",
    "ParseError", "MalformedNumber", "MalformedString", "MalformedCollection",
    "DepthLimitExceeded", "UnexpectedToken", "TrailingInput", "UnexpectedEndOfInput",
]

logger.disable(__name__)
