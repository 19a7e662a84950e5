"""Records produced by a suite run."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from expectify.sink import render


class Status(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class Failure:
    """One failed expectation and the ``file:line`` it was raised from."""

    message: str
    location: str


@dataclass
class Result:
    """Outcome of a single test procedure.

    Attributes:
        method: Name of the test procedure.
        type_name: Name of the suite type the procedure belongs to.
        start: ``time.perf_counter()`` reading when the test started.
        end: Reading when the test body returned, ``None`` while running.
        failures: Failures recorded while the result was current.
        skip: Whether the test called ``skip``. A skipped test is reported
            as skipped even when failures were recorded before the call.
        skip_message: The message given to ``skip``.
    """

    method: str
    type_name: str
    start: float = field(default_factory=time.perf_counter)
    end: float | None = None
    failures: list[Failure] = field(default_factory=list)
    skip: bool = False
    skip_message: str = ""

    def mark_skipped(self, format: str, *args: Any) -> None:
        self.skip = True
        self.skip_message = render(format, args)

    def error_message(self, format: str, *args: Any) -> None:
        """Replace the message of the most recent failure."""
        if self.failures:
            self.failures[-1].message = render(format, args)

    @property
    def passed(self) -> bool:
        return self.skip or not self.failures

    @property
    def status(self) -> Status:
        if self.skip:
            return Status.SKIPPED
        if self.failures:
            return Status.FAILED
        return Status.PASSED

    @property
    def duration_ms(self) -> int:
        end = self.end if self.end is not None else time.perf_counter()
        return int((end - self.start) * 1000)


@dataclass
class SuiteReport:
    """Aggregated outcome of one suite run."""

    type_name: str
    results: list[Result]
    stopped: bool = False
    interrupted: bool = False

    def count(self, status: Status) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def passed(self) -> int:
        return self.count(Status.PASSED)

    @property
    def failed(self) -> int:
        return self.count(Status.FAILED)

    @property
    def skipped(self) -> int:
        return self.count(Status.SKIPPED)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def failures(self) -> list[Result]:
        return [r for r in self.results if r.status is Status.FAILED]
