# formatter.py
# Canonical literal text for a Value tree.
#
# Output always parses back to an equal Value (NaN floats excepted, which
# have no literal spelling). Strings are double-quoted with minimal escapes,
# floats use the shortest round-tripping repr, and complex numbers always
# spell out both parts.

import math

from .numeric import int_to_decimal
from .value import (
    BOOLEAN,
    BYTES,
    COMPLEX,
    CONTAINERS,
    DICT,
    FLOAT,
    INTEGER,
    LIST,
    NULL,
    SET,
    STRING,
    TUPLE,
    Value,
)

# ---------------------------------------------------------------------------
# ESCAPE TABLES
# ---------------------------------------------------------------------------
_STRING_ESCAPES = {
    "\\": "\\\\",
    '"':  '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_BYTES_ESCAPES = {ord(k): v for k, v in _STRING_ESCAPES.items()}

# ---------------------------------------------------------------------------
# SCALARS
# ---------------------------------------------------------------------------
def _format_float(x: float) -> str:
    if math.isinf(x):
        # overflows to infinity when read back
        return "1e999" if x > 0 else "-1e999"
    return repr(x)


def _format_complex(z: complex) -> str:
    imag = _format_float(z.imag)
    if not imag.startswith("-"):
        imag = "+" + imag
    return f"{_format_float(z.real)}{imag}j"


def _escape_code_point(code: int) -> str:
    if code <= 0xFF:
        return f"\\x{code:02x}"
    if code <= 0xFFFF:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def _format_string(s: str, ascii_only: bool) -> str:
    out = ['"']
    for ch in s:
        esc = _STRING_ESCAPES.get(ch)
        if esc is not None:
            out.append(esc)
        elif ch.isprintable() and (not ascii_only or ord(ch) < 0x80):
            out.append(ch)
        else:
            out.append(_escape_code_point(ord(ch)))
    out.append('"')
    return "".join(out)


def _format_bytes(b: bytes) -> str:
    out = ['b"']
    for byte in b:
        esc = _BYTES_ESCAPES.get(byte)
        if esc is not None:
            out.append(esc)
        elif 0x20 <= byte < 0x7F:
            out.append(chr(byte))
        else:
            out.append(f"\\x{byte:02x}")
    out.append('"')
    return "".join(out)

# ---------------------------------------------------------------------------
# RENDERING
# ---------------------------------------------------------------------------
def _format_scalar(kind: str, data, ascii_only: bool) -> str:
    if kind == NULL:
        return "None"
    if kind == BOOLEAN:
        return "True" if data else "False"
    if kind == INTEGER:
        return int_to_decimal(data)
    if kind == FLOAT:
        return _format_float(data)
    if kind == COMPLEX:
        return _format_complex(data)
    if kind == STRING:
        return _format_string(data, ascii_only)
    if kind == BYTES:
        return _format_bytes(data)
    raise TypeError(f"unknown value kind {kind!r}")


def _layout(kind: str, data) -> list:
    """Split a container into its punctuation and member Values, in output order."""
    if kind == SET and not data:
        # {} would read back as a dict
        return ["set()"]
    if kind == TUPLE and len(data) == 1:
        return ["(", data[0], ",)"]
    if kind == DICT:
        parts = ["{"]
        for i, (key, val) in enumerate(data):
            if i:
                parts.append(", ")
            parts.extend((key, ": ", val))
        parts.append("}")
        return parts

    opener, closer = {TUPLE: "()", LIST: "[]", SET: "{}"}[kind]
    parts = [opener]
    for i, item in enumerate(data):
        if i:
            parts.append(", ")
        parts.append(item)
    parts.append(closer)
    return parts


def _format(value: Value, ascii_only: bool) -> str:
    # work holds pending text and Values, next item on top
    out = []
    work = [value]
    while work:
        item = work.pop()
        if isinstance(item, str):
            out.append(item)
            continue
        kind, data = item
        if kind in CONTAINERS:
            work.extend(reversed(_layout(kind, data)))
        else:
            out.append(_format_scalar(kind, data, ascii_only))
    return "".join(out)

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def format(value: Value, *, ascii_only: bool = False) -> str:
    """
    Render ``value`` as canonical Python literal text.

    With ``ascii_only`` every non-ASCII character in strings is written as
    an escape, so the output is pure ASCII.
    """
    if not isinstance(value, Value):
        raise TypeError(f"expected a Value, got {type(value).__name__}")
    return _format(value, ascii_only)
