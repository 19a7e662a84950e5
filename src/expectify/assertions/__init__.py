"""Assertion engine behind the fluent expectation API."""

from expectify.assertions.base import Failed, Outcome, Passed
from expectify.assertions.relations import ThanAssertion, ToAssertion, contains, equal

__all__ = [
    "Failed",
    "Outcome",
    "Passed",
    "ThanAssertion",
    "ToAssertion",
    "contains",
    "equal",
]
