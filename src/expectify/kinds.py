"""Classification of runtime values into comparable kinds.

Every directional comparison first classifies both operands into a
:class:`Comparable`, a tagged value whose ``kind`` decides which comparator
branch applies.  Integers are widened to plain Python ``int`` so that, for
example, ``numpy.int8(5)`` and ``numpy.int32(5)`` compare equal.
"""

from __future__ import annotations

from collections.abc import Mapping, Set
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np


class Kind(str, Enum):
    NONE = "none"
    BOOL = "bool"
    SIGNED = "int"
    UNSIGNED = "uint"
    FLOAT = "float"
    COMPLEX = "complex"
    STRING = "str"
    BYTES = "bytes"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OTHER = "object"


NUMERIC_KINDS = frozenset({Kind.SIGNED, Kind.UNSIGNED, Kind.FLOAT})
ORDERED_KINDS = NUMERIC_KINDS | {Kind.STRING, Kind.BYTES}


@dataclass(frozen=True)
class Comparable:
    kind: Kind
    value: Any


def kind_of(value: Any) -> Kind:
    """Return the kind family ``value`` belongs to."""
    if value is None:
        return Kind.NONE
    # bool subclasses int, so it has to be checked first
    if isinstance(value, (bool, np.bool_)):
        return Kind.BOOL
    if isinstance(value, np.unsignedinteger):
        return Kind.UNSIGNED
    if isinstance(value, (int, np.signedinteger)):
        return Kind.SIGNED
    if isinstance(value, (float, np.floating)):
        return Kind.FLOAT
    if isinstance(value, (complex, np.complexfloating)):
        return Kind.COMPLEX
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Kind.BYTES
    if isinstance(value, Mapping):
        return Kind.MAPPING
    if isinstance(value, (list, tuple, range, Set, np.ndarray)):
        return Kind.SEQUENCE
    return Kind.OTHER


def classify(value: Any) -> Comparable:
    """Tag ``value`` with its kind and widen it to the canonical form."""
    kind = kind_of(value)
    if kind in (Kind.SIGNED, Kind.UNSIGNED):
        return Comparable(kind, int(value))
    if kind is Kind.FLOAT:
        return Comparable(kind, float(value))
    if kind is Kind.BOOL:
        return Comparable(kind, bool(value))
    if kind is Kind.BYTES:
        return Comparable(kind, bytes(value))
    return Comparable(kind, value)


def same_kind(actual: Any, expected: Any) -> tuple[Kind, bool]:
    """Return the shared kind of both values and whether they match."""
    kind = kind_of(actual)
    return kind, kind is kind_of(expected)


def is_numeric(value: Any) -> bool:
    return kind_of(value) in NUMERIC_KINDS


def is_nil(value: Any) -> bool:
    """Report whether ``value`` stands for an absent value."""
    return value is None


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality used for containment and non-scalar kinds."""
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return bool(np.array_equal(a, b))
    if isinstance(a, (bool, np.bool_)) != isinstance(b, (bool, np.bool_)):
        return False
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        return a.keys() == b.keys() and all(deep_equal(a[key], b[key]) for key in a)
    # nested arrays only compare element-wise
    if isinstance(a, (list, tuple)) and type(a) is type(b):
        return len(a) == len(b) and all(deep_equal(x, y) for x, y in zip(a, b))
    return bool(a == b)
