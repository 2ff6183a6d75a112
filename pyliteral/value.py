# value.py
# The Value model: a closed, immutable, tagged variant for Python literals.
#
# A Value is a (kind, data) pair. The kind is one of the constants below and
# data is the matching Python payload. Containers hold Values only, stored in
# tuples so that a tree can never be mutated after construction.

import struct
from typing import Iterable, Tuple

from loguru import logger

# ---------------------------------------------------------------------------
# VARIANT TAGS
# ---------------------------------------------------------------------------
NULL    = "NULL"
BOOLEAN = "BOOLEAN"
INTEGER = "INTEGER"
FLOAT   = "FLOAT"
COMPLEX = "COMPLEX"
BYTES   = "BYTES"
STRING  = "STRING"
TUPLE   = "TUPLE"
LIST    = "LIST"
SET     = "SET"
DICT    = "DICT"

KINDS = (NULL, BOOLEAN, INTEGER, FLOAT, COMPLEX, BYTES, STRING, TUPLE, LIST, SET, DICT)
CONTAINERS = (TUPLE, LIST, SET, DICT)

# ---------------------------------------------------------------------------
# STRUCTURAL EQUALITY
# ---------------------------------------------------------------------------
def _float_bits(x: float) -> bytes:
    return struct.pack(">d", x)


def _scalar_key(kind: str, data) -> tuple:
    if kind == FLOAT:
        return kind, _float_bits(data)
    if kind == COMPLEX:
        return kind, _float_bits(data.real), _float_bits(data.imag)
    return kind, data


def _children(kind: str, data) -> tuple:
    if kind == DICT:
        return tuple(member for pair in data for member in pair)
    return data


# work-stack markers around the members of a set
_BEGIN_MEMBER = object()
_END_MEMBER = object()
_END_SET = object()


def _structural_key(value: "Value") -> tuple:
    """
    Reduce a Value tree to a flat, hashable key.

    Floats compare by IEEE-754 bit pattern so NaN equals NaN and 0.0 differs
    from -0.0. A container contributes its kind and length followed by its
    members' keys in pre-order; set members are sorted by key first, so sets
    ignore member order while everything else keeps it. The key holds only
    scalars, which keeps hashing and comparing deep trees off the recursion
    limit.
    """
    buffers = [[]]
    set_members = []
    work = [value]
    while work:
        item = work.pop()
        if item is _BEGIN_MEMBER:
            buffers.append([])
        elif item is _END_MEMBER:
            set_members[-1].append(tuple(buffers.pop()))
        elif item is _END_SET:
            keys = sorted(set_members.pop())
            out = buffers[-1]
            out.extend((SET, len(keys)))
            for key in keys:
                out.extend(key)
        else:
            kind, data = item
            if kind == SET:
                set_members.append([])
                work.append(_END_SET)
                for member in reversed(data):
                    work.extend((_END_MEMBER, member, _BEGIN_MEMBER))
            elif kind in CONTAINERS:
                buffers[-1].extend((kind, len(data)))
                work.extend(reversed(_children(kind, data)))
            else:
                buffers[-1].extend(_scalar_key(kind, data))
    return tuple(buffers[0])


def _require(data, expected: type, kind: str):
    if not isinstance(data, expected) or (kind != BOOLEAN and isinstance(data, bool)):
        raise TypeError(f"{kind} value expects {expected.__name__}, got {type(data).__name__}")
    return data


def _require_values(items) -> tuple:
    items = tuple(items)
    for item in items:
        if not isinstance(item, Value):
            raise TypeError(f"container members must be Value instances, got {type(item).__name__}")
    return items


# ---------------------------------------------------------------------------
# VALUE RECORD
# ---------------------------------------------------------------------------
class Value(Tuple[str, object]):
    """
    Immutable literal value: (kind, data).

    Build instances with the variant constructors (``Value.Integer(5)``,
    ``Value.List([...])``) or ``Value.from_python``; inspect them with the
    ``is_*`` predicates and ``as_*`` accessors. Equality and hashing are
    structural over the whole tree.
    """
    __slots__ = ()

    def __new__(cls, kind: str, data):
        if kind not in KINDS:
            raise ValueError(f"unknown value kind {kind!r}")
        return super().__new__(cls, (kind, data))

    def __getnewargs__(self):
        return tuple(self)

    @property
    def kind(self) -> str:
        return self[0]

    @property
    def data(self):
        return self[1]

    # a Value never equals a plain tuple and has no ordering
    def __eq__(self, other):
        if not isinstance(other, Value):
            return False
        return _structural_key(self) == _structural_key(other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(_structural_key(self))

    def _unordered(self, other, op: str):
        raise TypeError(
            f"'{op}' not supported between instances of "
            f"'{type(self).__name__}' and '{type(other).__name__}'"
        )

    def __lt__(self, other):
        self._unordered(other, "<")

    def __le__(self, other):
        self._unordered(other, "<=")

    def __gt__(self, other):
        self._unordered(other, ">")

    def __ge__(self, other):
        self._unordered(other, ">=")

    def __repr__(self):
        if self.kind == INTEGER:
            from .numeric import int_to_decimal
            return f"Value({self.kind}, {int_to_decimal(self.data)})"
        return f"Value({self.kind}, {self.data!r})"

    def __str__(self):
        from .formatter import format as format_value
        return format_value(self)

    # -- predicates --------------------------------------------------------
    def is_null(self) -> bool:
        return self.kind == NULL

    def is_boolean(self) -> bool:
        return self.kind == BOOLEAN

    def is_integer(self) -> bool:
        return self.kind == INTEGER

    def is_float(self) -> bool:
        return self.kind == FLOAT

    def is_complex(self) -> bool:
        return self.kind == COMPLEX

    def is_bytes(self) -> bool:
        return self.kind == BYTES

    def is_string(self) -> bool:
        return self.kind == STRING

    def is_tuple(self) -> bool:
        return self.kind == TUPLE

    def is_list(self) -> bool:
        return self.kind == LIST

    def is_set(self) -> bool:
        return self.kind == SET

    def is_dict(self) -> bool:
        return self.kind == DICT

    def is_number(self) -> bool:
        return self.kind in (INTEGER, FLOAT, COMPLEX)

    # -- accessors ---------------------------------------------------------
    def _expect(self, kind: str):
        if self.kind != kind:
            raise TypeError(f"expected {kind} value, got {self.kind}")
        return self.data

    def as_boolean(self) -> bool:
        return self._expect(BOOLEAN)

    def as_integer(self) -> int:
        return self._expect(INTEGER)

    def as_float(self) -> float:
        return self._expect(FLOAT)

    def as_complex(self) -> complex:
        return self._expect(COMPLEX)

    def as_bytes(self) -> bytes:
        return self._expect(BYTES)

    def as_string(self) -> str:
        return self._expect(STRING)

    def as_tuple(self) -> tuple:
        return self._expect(TUPLE)

    def as_list(self) -> tuple:
        return self._expect(LIST)

    def as_set(self) -> tuple:
        return self._expect(SET)

    def as_dict(self) -> tuple:
        """Return the (key, value) pairs in insertion order."""
        return self._expect(DICT)

    # -- python interop ----------------------------------------------------
    @classmethod
    def from_python(cls, obj) -> "Value":
        """
        Convert native Python data into a Value tree.

        Raises TypeError for anything that has no literal spelling.
        """
        if obj is None:
            return cls.Null()
        if isinstance(obj, bool):
            return cls.Boolean(obj)
        if isinstance(obj, int):
            return cls.Integer(obj)
        if isinstance(obj, float):
            return cls.Float(obj)
        if isinstance(obj, complex):
            return cls.Complex(obj)
        if isinstance(obj, (bytes, bytearray)):
            return cls.Bytes(bytes(obj))
        if isinstance(obj, str):
            return cls.String(obj)
        if isinstance(obj, tuple):
            return cls.Tuple(cls.from_python(item) for item in obj)
        if isinstance(obj, list):
            return cls.List(cls.from_python(item) for item in obj)
        if isinstance(obj, (set, frozenset)):
            return cls.Set(cls.from_python(item) for item in obj)
        if isinstance(obj, dict):
            return cls.Dict((cls.from_python(k), cls.from_python(v)) for k, v in obj.items())
        raise TypeError(f"{type(obj).__name__} has no literal representation")

    def to_python(self, _hashable: bool = False):
        """
        Convert back to native Python data.

        Sets used as set members or dict keys become frozensets; a list or
        dict in such a position raises TypeError, as it would in Python.
        """
        kind, data = self
        if kind == TUPLE:
            return tuple(item.to_python(_hashable) for item in data)
        if kind == LIST:
            if _hashable:
                raise TypeError("unhashable type: 'list'")
            return [item.to_python() for item in data]
        if kind == SET:
            members = (item.to_python(True) for item in data)
            return frozenset(members) if _hashable else set(members)
        if kind == DICT:
            if _hashable:
                raise TypeError("unhashable type: 'dict'")
            return {k.to_python(True): v.to_python() for k, v in data}
        return data

    # -- variant constructors ----------------------------------------------
    @classmethod
    def Null(cls) -> "Value":
        return cls(NULL, None)

    @classmethod
    def Boolean(cls, data: bool) -> "Value":
        return cls(BOOLEAN, _require(data, bool, BOOLEAN))

    @classmethod
    def Integer(cls, data: int) -> "Value":
        return cls(INTEGER, _require(data, int, INTEGER))

    @classmethod
    def Float(cls, data: float) -> "Value":
        return cls(FLOAT, _require(data, float, FLOAT))

    @classmethod
    def Complex(cls, data: complex) -> "Value":
        return cls(COMPLEX, _require(data, complex, COMPLEX))

    @classmethod
    def Bytes(cls, data: bytes) -> "Value":
        return cls(BYTES, _require(data, bytes, BYTES))

    @classmethod
    def String(cls, data: str) -> "Value":
        return cls(STRING, _require(data, str, STRING))

    @classmethod
    def Tuple(cls, items: Iterable["Value"] = ()) -> "Value":
        return cls(TUPLE, _require_values(items))

    @classmethod
    def List(cls, items: Iterable["Value"] = ()) -> "Value":
        return cls(LIST, _require_values(items))

    @classmethod
    def Set(cls, items: Iterable["Value"] = ()) -> "Value":
        """Distinct members in first-occurrence order."""
        members = {}
        for item in _require_values(items):
            if item in members:
                logger.debug("Dropping duplicate set member {!r}", item)
                continue
            members[item] = None
        return cls(SET, tuple(members))

    @classmethod
    def Dict(cls, pairs: Iterable = ()) -> "Value":
        """First-seen key position, last-seen value."""
        entries = {}
        for pair in pairs:
            pair = tuple(pair)
            if len(pair) != 2:
                raise TypeError("dict entries must be (key, value) pairs")
            key, val = _require_values(pair)
            if key in entries:
                logger.debug("Duplicate dict key {!r}: replacing {!r} with {!r}", key, entries[key], val)
            entries[key] = val
        return cls(DICT, tuple(entries.items()))
