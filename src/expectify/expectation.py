"""Fluent entry points: ``expect(actual).to.equal(expected)`` and friends."""

from __future__ import annotations

from typing import Any

from expectify import comparators, sink
from expectify.assertions import Failed, Outcome, Passed, ThanAssertion, ToAssertion, contains, equal


class ToExpectation:
    def __init__(self, actual: Any, others: tuple[Any, ...], invert: bool = False):
        self.actual = actual
        self.others = others
        self.invert = invert

    def equal(self, expected: Any, *others: Any) -> Outcome:
        """Compare the actual value, and each extra actual value, positionally."""
        display = "to equal" if self.invert else "to be equal to"
        assertion = ToAssertion(self.actual, comparators.equals, display, invert=self.invert)
        failed = not equal(assertion, self.actual, expected)

        if len(others) != len(self.others):
            sink.errorf(
                "mismatch number of values and expectations %d != %d",
                len(self.others) + 1,
                len(others) + 1,
            )
            failed = True
        else:
            for actual_other, expected_other in zip(self.others, others):
                if not equal(assertion, actual_other, expected_other):
                    failed = True

        return Failed if failed else Passed

    def contain(self, expected: Any) -> Outcome:
        found = contains(self.actual, expected)
        if not self.invert and not found:
            sink.errorf("%r does not contain %r", self.actual, expected)
            return Failed
        if self.invert and found:
            sink.errorf("%r contains %r", self.actual, expected)
            return Failed
        return Passed


class Expectation:
    """One actual value (plus optional extra values) and its relations."""

    def __init__(self, actual: Any, others: tuple[Any, ...] = (), include_not: bool = True):
        self.actual = actual
        self.others = others
        self.greater = ThanAssertion(
            actual, comparators.greater_than, "to be greater than", "greater than"
        )
        self.greater_or_equal = ToAssertion(
            actual, comparators.greater_or_equal_to, "to be greater or equal to"
        )
        self.less = ThanAssertion(actual, comparators.less_than, "to be less than", "less than")
        self.less_or_equal = ToAssertion(
            actual, comparators.less_or_equal_to, "to be less or equal to"
        )
        self.to = ToExpectation(actual, others)
        self.not_: InvertedExpectation | None = (
            InvertedExpectation(actual, others) if include_not else None
        )

    def to_equal(self, expected: Any, *others: Any) -> Outcome:
        return self.to.equal(expected, *others)

    def greater_than(self, expected: Any) -> Outcome:
        return self.greater.than(expected)

    def greater_or_equal_to(self, expected: Any) -> Outcome:
        return self.greater_or_equal.to(expected)

    def less_than(self, expected: Any) -> Outcome:
        return self.less.than(expected)

    def less_or_equal_to(self, expected: Any) -> Outcome:
        return self.less_or_equal.to(expected)


class InvertedExpectation(Expectation):
    """The ``not_`` sibling: every relation has its polarity flipped."""

    def __init__(self, actual: Any, others: tuple[Any, ...] = ()):
        super().__init__(actual, others, include_not=False)
        self.greater.invert = True
        self.greater_or_equal.invert = True
        self.less.invert = True
        self.less_or_equal.invert = True
        self.to.invert = True


def expect(actual: Any, *others: Any) -> Expectation:
    return Expectation(actual, others)


def not_expect(actual: Any, *others: Any) -> InvertedExpectation:
    return InvertedExpectation(actual, others)


def fail(format: str, *args: Any) -> None:
    """Record a failure unconditionally."""
    sink.errorf(format, *args)


def skip(format: str, *args: Any) -> None:
    """Mark the running test as skipped."""
    sink.skip(format, *args)


def stop() -> None:
    """Ask the running suite to stop after the current test."""
    sink.stop()
