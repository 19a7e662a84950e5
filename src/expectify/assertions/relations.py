"""Directional, relational, equality and containment checks."""

from __future__ import annotations

from typing import Any

from expectify import sink
from expectify.assertions.base import Failed, Outcome, Passed, show_error
from expectify.comparators import Comparator
from expectify.kinds import Kind, classify, deep_equal, is_nil, is_numeric, kind_of, same_kind


class ToAssertion:
    """Checks ``actual <relation> expected`` with a single comparator.

    ``actual`` and ``invert`` are reassigned in place when the assertion is
    borrowed by equality checks or by a :class:`ThanAssertion`.
    """

    def __init__(self, actual: Any, comparator: Comparator, display: str, invert: bool = False):
        self.actual = actual
        self.comparator = comparator
        self.display = display
        self.invert = invert

    def to(self, expected: Any) -> Outcome:
        actual = self.actual
        kind, ok = same_kind(actual, expected)
        if not ok:
            sink.errorf(
                "expected %r %s %r - type mismatch %s != %s",
                actual,
                self.display,
                expected,
                kind.value,
                kind_of(expected).value,
            )
            return Failed
        left, right = classify(actual), classify(expected)
        if self.comparator(kind, left.value, right.value) == self.invert:
            show_error(left.value, right.value, self.invert, self.display)
            return Failed
        return Passed


class ThanAssertion:
    """A :class:`ToAssertion` restricted to numeric operands."""

    def __init__(self, actual: Any, comparator: Comparator, to_display: str, than_display: str):
        self.to_assertion = ToAssertion(actual, comparator, to_display)
        self.display = than_display
        self.invert = False

    def than(self, expected: Any) -> Outcome:
        actual = self.to_assertion.actual
        self.to_assertion.invert = self.invert
        if not is_numeric(actual):
            sink.errorf("cannot use %s for type %s", self.display, kind_of(actual).value)
            return Failed
        if not is_numeric(expected):
            sink.errorf("cannot use %s for type %s", self.display, kind_of(expected).value)
            return Failed
        return self.to_assertion.to(expected)


def equal(assertion: ToAssertion, actual: Any, expected: Any) -> bool:
    """Nil-aware equality; ``None`` on either side never reaches a comparator."""
    actual_nil, expected_nil = is_nil(actual), is_nil(expected)
    if actual_nil or expected_nil:
        if (actual_nil == expected_nil) == assertion.invert:
            show_error(actual, expected, assertion.invert, assertion.display)
            return False
        return True
    assertion.actual = actual
    return assertion.to(expected).passed


def contains(actual: Any, expected: Any) -> bool:
    """Report whether ``actual`` contains ``expected``.

    Sequences are searched for a single element equal to ``expected``; a
    sub-sequence is never matched, so ``[1, 2, 3]`` does not contain
    ``[1, 2]``.
    """
    kind = kind_of(actual)
    if kind is Kind.STRING:
        return isinstance(expected, str) and expected in actual
    if kind is Kind.BYTES:
        haystack = bytes(actual)
        if kind_of(expected) is Kind.BYTES:
            return bytes(expected) in haystack
        if kind_of(expected) in (Kind.SIGNED, Kind.UNSIGNED):
            return 0 <= int(expected) <= 255 and int(expected) in haystack
        return False
    if kind is Kind.SEQUENCE:
        return any(deep_equal(item, expected) for item in actual)
    if kind is Kind.MAPPING:
        try:
            return expected in actual
        except TypeError:
            # unhashable key
            return False
    return False
