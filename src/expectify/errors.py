"""Exceptions raised by expectify."""

from __future__ import annotations


class ExpectifyError(Exception):
    """Base class for errors raised by the runner and its collaborators."""


class RunnerBusyError(ExpectifyError):
    """Raised when a runner starts while another one is still active."""


class SummaryFileError(ExpectifyError):
    """Raised when the persisted summary file cannot be read or rewritten."""


class SuiteLoadError(ExpectifyError):
    """Raised when a suite target cannot be imported or instantiated."""


class ExpectationFailed(AssertionError):
    """An expectation failed while no runner was collecting failures."""


class SuiteFailed(AssertionError):
    """At least one test of a suite failed."""

    def __init__(self, type_name: str, failed: int):
        super().__init__(f"{failed} test(s) failed in {type_name}")
        self.type_name = type_name
        self.failed = failed
