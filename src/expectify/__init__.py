"""Fluent expectations and a sequential suite runner."""

from expectify.assertions import Failed, Outcome, Passed
from expectify.config import RunConfig, load_config
from expectify.discovery import Procedure, ProcedureSource, collect_procedures
from expectify.errors import (
    ExpectationFailed,
    ExpectifyError,
    RunnerBusyError,
    SuiteFailed,
    SuiteLoadError,
    SummaryFileError,
)
from expectify.expectation import Expectation, InvertedExpectation, expect, fail, not_expect, skip, stop
from expectify.results import Failure, Result, Status, SuiteReport
from expectify.runner import Runner, expectify
from expectify.sink import capture_failures

__all__ = [
    "Expectation",
    "ExpectationFailed",
    "ExpectifyError",
    "Failed",
    "Failure",
    "InvertedExpectation",
    "Outcome",
    "Passed",
    "Procedure",
    "ProcedureSource",
    "Result",
    "RunConfig",
    "Runner",
    "RunnerBusyError",
    "Status",
    "SuiteFailed",
    "SuiteLoadError",
    "SuiteReport",
    "SummaryFileError",
    "capture_failures",
    "collect_procedures",
    "expect",
    "expectify",
    "fail",
    "load_config",
    "not_expect",
    "skip",
    "stop",
]
