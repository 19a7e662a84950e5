"""Base data structures for the assertion system."""

from __future__ import annotations

from typing import Any

from expectify import sink


class Outcome:
    """Pass/fail signal returned by every terminal assertion method.

    Callers usually ignore it, since failures are already recorded as a
    side effect.  ``message`` replaces the wording of the failure that was
    just recorded, so a call site can explain itself::

        expect(len(rows)).to.equal(3).message("expected three rows, got %d", len(rows))
    """

    __slots__ = ("passed",)

    def __init__(self, passed: bool):
        self.passed = passed

    def __bool__(self) -> bool:
        return self.passed

    def __repr__(self) -> str:
        return "Passed" if self.passed else "Failed"

    def message(self, format: str, *args: Any) -> Outcome:
        if not self.passed:
            sink.error_message(format, *args)
        return self


Passed = Outcome(True)
Failed = Outcome(False)


def show_error(actual: Any, expected: Any, invert: bool, display: str) -> None:
    inversion = "not " if invert else ""
    sink.errorf("expected %r %s%s %r", actual, inversion, display, expected)
