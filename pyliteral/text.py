# text.py
# Cursor-based reader for string and bytes literals.
#
# Covers the stringliteral / bytesliteral productions of the Python Language
# Reference (section 2.4.1): r/u/b prefixes, single and triple quoting,
# escape decoding and raw literals. Escapes that Python would pass through
# with a warning are rejected here.

import unicodedata
from typing import List, Sequence, Tuple

from .errors import MalformedString
from .value import BYTES, Value

# ---------------------------------------------------------------------------
# CONSTANTS
# ---------------------------------------------------------------------------
# prefix -> (raw, bytes)
_PREFIXES = {
    "":   (False, False),
    "u":  (False, False),
    "r":  (True, False),
    "b":  (False, True),
    "rb": (True, True),
    "br": (True, True),
}

_SIMPLE_ESCAPES = {
    "\\": "\\",
    "'":  "'",
    '"':  '"',
    "a":  "\a",
    "b":  "\b",
    "f":  "\f",
    "n":  "\n",
    "r":  "\r",
    "t":  "\t",
    "v":  "\v",
    "\n": "",
}

_OCT = "01234567"
_HEX = "0123456789abcdefABCDEF"

# escape letter -> number of hex digits; bytes only know \x
_HEX_ESCAPES = {"x": 2, "u": 4, "U": 8}


# ---------------------------------------------------------------------------
# ESCAPES
# ---------------------------------------------------------------------------
def _read_escape(text: str, pos: int, is_bytes: bool, start: int) -> Tuple[str, int]:
    """
    Decode the escape sequence whose backslash sits at ``pos``.

    Returns the decoded characters (code points 0-255 stand for bytes) and
    the offset just past the sequence.
    """
    n = len(text)
    if pos + 1 >= n:
        raise MalformedString("unterminated string literal", text, start)
    esc = text[pos + 1]

    if esc in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[esc], pos + 2
    if esc == "\r":
        # backslash followed by a CRLF or a lone CR is a line continuation
        end = pos + 3 if text.startswith("\r\n", pos + 1) else pos + 2
        return "", end

    if esc in _OCT:
        end = pos + 1
        while end < n and end < pos + 4 and text[end] in _OCT:
            end += 1
        code = int(text[pos + 1:end], 8)
        if is_bytes and code > 0xFF:
            raise MalformedString(f"octal escape {text[pos:end]!r} out of range for bytes", text, pos)
        return chr(code), end

    width = _HEX_ESCAPES.get(esc)
    if width is not None and (esc == "x" or not is_bytes):
        digits = text[pos + 2:pos + 2 + width]
        if len(digits) < width or any(c not in _HEX for c in digits):
            raise MalformedString(f"truncated \\{esc} escape, {width} hex digits required", text, pos)
        code = int(digits, 16)
        if code > 0x10FFFF:
            raise MalformedString(f"escape {text[pos:pos + 2 + width]!r} is not a valid code point", text, pos)
        return chr(code), pos + 2 + width

    if esc == "N" and not is_bytes:
        if not text.startswith("{", pos + 2):
            raise MalformedString("malformed \\N character escape", text, pos)
        close = text.find("}", pos + 3)
        if close < 0:
            raise MalformedString("malformed \\N character escape", text, pos)
        name = text[pos + 3:close]
        try:
            return unicodedata.lookup(name), close + 1
        except KeyError:
            raise MalformedString(f"unknown Unicode character name {name!r}", text, pos) from None

    raise MalformedString(f"invalid escape sequence '\\{esc}'", text, pos)


# ---------------------------------------------------------------------------
# PUBLIC READER
# ---------------------------------------------------------------------------
def read_text(text: str, pos: int) -> Tuple[Value, int]:
    """
    Read the string or bytes literal (prefix included) starting at ``pos``.

    Returns a STRING or BYTES Value and the offset just past the closing
    quote. Raises MalformedString for unknown prefixes, bad escapes,
    non-ASCII characters in bytes, or a literal that never terminates.
    """
    start = pos
    n = len(text)

    quote_pos = pos
    while quote_pos < n and (text[quote_pos].isalnum() or text[quote_pos] == "_"):
        quote_pos += 1
    if quote_pos >= n or text[quote_pos] not in "'\"":
        raise MalformedString("string literal expected", text, start)
    prefix = text[pos:quote_pos]
    try:
        raw, is_bytes = _PREFIXES[prefix.lower()]
    except KeyError:
        raise MalformedString(f"invalid string prefix {prefix!r}", text, start) from None

    quote = text[quote_pos]
    delim = quote * 3 if text.startswith(quote * 3, quote_pos) else quote
    i = quote_pos + len(delim)
    out: List[str] = []

    while True:
        if i >= n:
            raise MalformedString("unterminated string literal", text, start)
        ch = text[i]
        if ch == "\\":
            if raw:
                # the backslash stays, but keeps the next character from closing the literal
                if i + 1 >= n:
                    raise MalformedString("unterminated string literal", text, start)
                if is_bytes and ord(text[i + 1]) > 0x7F:
                    raise MalformedString("bytes can only contain ASCII literal characters", text, i + 1)
                out.append(text[i:i + 2])
                i += 2
                continue
            decoded, i = _read_escape(text, i, is_bytes, start)
            out.append(decoded)
            continue
        if text.startswith(delim, i):
            i += len(delim)
            break
        if ch in "\r\n" and len(delim) == 1:
            raise MalformedString("unterminated string literal (line break inside quotes)", text, start)
        if is_bytes and ord(ch) > 0x7F:
            raise MalformedString("bytes can only contain ASCII literal characters", text, i)
        out.append(ch)
        i += 1

    body = "".join(out)
    if is_bytes:
        return Value.Bytes(body.encode("latin-1")), i
    return Value.String(body), i


def concatenate(parts: Sequence[Tuple[Value, int]], doc: str) -> Value:
    """
    Join adjacent literals, given as (value, offset) pairs, into one Value.

    All parts must share the kind of the first; mixing str and bytes is
    reported at the first offending literal.
    """
    first, _ = parts[0]
    for value, pos in parts[1:]:
        if value.kind != first.kind:
            raise MalformedString("cannot mix bytes and nonbytes literals", doc, pos)
    if first.kind == BYTES:
        return Value.Bytes(b"".join(value.data for value, _ in parts))
    return Value.String("".join(value.data for value, _ in parts))
