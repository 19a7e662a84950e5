"""The five relations an assertion can check between two classified values."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from expectify.kinds import ORDERED_KINDS, Kind, deep_equal

Comparator = Callable[[Kind, Any, Any], bool]


def greater_than(kind: Kind, actual: Any, expected: Any) -> bool:
    if kind not in ORDERED_KINDS:
        return False
    return actual > expected


def greater_or_equal_to(kind: Kind, actual: Any, expected: Any) -> bool:
    if kind not in ORDERED_KINDS:
        return False
    return actual >= expected


def less_than(kind: Kind, actual: Any, expected: Any) -> bool:
    if kind not in ORDERED_KINDS:
        return False
    return actual < expected


def less_or_equal_to(kind: Kind, actual: Any, expected: Any) -> bool:
    if kind not in ORDERED_KINDS:
        return False
    return actual <= expected


def equals(kind: Kind, actual: Any, expected: Any) -> bool:
    if kind in (Kind.SEQUENCE, Kind.MAPPING, Kind.OTHER):
        return deep_equal(actual, expected)
    return actual == expected


COMPARATORS: dict[str, Comparator] = {
    "greater_than": greater_than,
    "greater_or_equal_to": greater_or_equal_to,
    "less_than": less_than,
    "less_or_equal_to": less_or_equal_to,
    "equals": equals,
}
