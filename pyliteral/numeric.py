# numeric.py
# Cursor-based reader for integer, float and imaginary literals.
#
# Follows the numeric grammar of the Python Language Reference
# (section 2.4.5 - 2.4.7): radix prefixes, underscore digit grouping,
# optional fraction and exponent, and the j/J imaginary suffix. Signs are
# not part of a numeric literal; the parser applies them.

from typing import Tuple

from .errors import MalformedNumber
from .value import Value

# ---------------------------------------------------------------------------
# CONSTANTS
# ---------------------------------------------------------------------------
_DEC_DIGITS = "0123456789"
_DIGITS = {
    2:  "01",
    8:  "01234567",
    10: _DEC_DIGITS,
    16: "0123456789abcdefABCDEF",
}
_RADIX_PREFIX = {"x": 16, "o": 8, "b": 2}

# Decimal conversion is done in chunks so that arbitrarily long literals stay
# below the interpreter's int/str conversion limit (4300 digits by default).
_CHUNK_DIGITS = 1000
_CHUNK_BASE = 10 ** _CHUNK_DIGITS


# ---------------------------------------------------------------------------
# ARBITRARY PRECISION DECIMAL CONVERSION
# ---------------------------------------------------------------------------
def decimal_to_int(digits: str) -> int:
    """Convert an unsigned decimal digit string of any length to int."""
    result = 0
    for i in range(0, len(digits), _CHUNK_DIGITS):
        chunk = digits[i:i + _CHUNK_DIGITS]
        result = result * 10 ** len(chunk) + int(chunk)
    return result


def int_to_decimal(number: int) -> str:
    """Render an int of any magnitude as decimal digits."""
    if -_CHUNK_BASE < number < _CHUNK_BASE:
        return str(number)
    sign = "-" if number < 0 else ""
    number = abs(number)
    chunks = []
    while number:
        number, rem = divmod(number, _CHUNK_BASE)
        chunks.append(rem)
    head = str(chunks.pop())
    return sign + head + "".join(str(chunk).zfill(_CHUNK_DIGITS) for chunk in reversed(chunks))


# ---------------------------------------------------------------------------
# SCANNING HELPERS
# ---------------------------------------------------------------------------
def _scan_digits(text: str, pos: int, base: int, after_prefix: bool = False) -> Tuple[str, int]:
    """
    Consume digits of ``base`` starting at ``pos`` with underscore grouping.

    An underscore must sit between two digits; directly after a radix prefix
    it may also precede the first digit. Returns the digits with underscores
    stripped and the offset just past them.
    """
    allowed = _DIGITS[base]
    end = pos
    n = len(text)
    while end < n:
        ch = text[end]
        if ch == "_":
            if end == pos and not after_prefix:
                raise MalformedNumber("invalid underscore placement in numeric literal", text, end)
            if end + 1 >= n or text[end + 1] not in allowed:
                raise MalformedNumber("invalid underscore placement in numeric literal", text, end)
            end += 1
            continue
        if ch not in allowed:
            break
        end += 1
    return text[pos:end].replace("_", ""), end


def _check_boundary(text: str, pos: int) -> None:
    """A literal may not run straight into an identifier or another digit."""
    if pos < len(text):
        ch = text[pos]
        if ch.isalnum() or ch == "_":
            raise MalformedNumber(f"invalid character {ch!r} in numeric literal", text, pos)


# ---------------------------------------------------------------------------
# PUBLIC READER
# ---------------------------------------------------------------------------
def read_number(text: str, pos: int) -> Tuple[Value, int]:
    """
    Read the numeric literal starting at ``pos``.

    Returns the INTEGER, FLOAT or COMPLEX Value and the offset just past the
    literal. Raises MalformedNumber when no valid literal starts at ``pos``.
    """
    start = pos
    n = len(text)

    # Radix-prefixed integers: 0x.., 0o.., 0b..
    if text.startswith("0", pos) and pos + 1 < n and text[pos + 1].lower() in _RADIX_PREFIX:
        base = _RADIX_PREFIX[text[pos + 1].lower()]
        digits, pos = _scan_digits(text, pos + 2, base, after_prefix=True)
        if not digits:
            raise MalformedNumber(f"missing digits after {text[start:start + 2]!r} prefix", text, pos)
        _check_boundary(text, pos)
        return Value.Integer(int(digits, base)), pos

    int_part, pos = _scan_digits(text, pos, 10)
    is_float = False
    literal = int_part

    if pos < n and text[pos] == ".":
        is_float = True
        frac_part, pos = _scan_digits(text, pos + 1, 10)
        if not int_part and not frac_part:
            raise MalformedNumber("numeric literal expected", text, start)
        literal += "." + frac_part
    elif not int_part:
        raise MalformedNumber("numeric literal expected", text, start)

    if pos < n and text[pos] in "eE":
        is_float = True
        exp_pos = pos + 1
        sign = ""
        if exp_pos < n and text[exp_pos] in "+-":
            sign = text[exp_pos]
            exp_pos += 1
        exp_digits, pos = _scan_digits(text, exp_pos, 10)
        if not exp_digits:
            raise MalformedNumber("missing digits in exponent", text, exp_pos)
        literal += "e" + sign + exp_digits

    if pos < n and text[pos] in "jJ":
        pos += 1
        _check_boundary(text, pos)
        return Value.Complex(complex(0.0, float(literal))), pos

    _check_boundary(text, pos)
    if is_float:
        return Value.Float(float(literal)), pos

    if len(int_part) > 1 and int_part[0] == "0" and int_part.strip("0"):
        raise MalformedNumber(
            "leading zeros in decimal integer literals are not permitted; "
            "use an 0o prefix for octal integers",
            text,
            start,
        )
    return Value.Integer(decimal_to_int(int_part)), pos
