"""Routing of assertion failures to whoever is collecting them.

While a :class:`~expectify.runner.Runner` is running a suite it is the
active reporter and every failure becomes a ``Failure`` on its current
result.  Tests of the library itself swap in a stub with
:func:`capture_failures`.  With nobody collecting, a failure raises
:class:`~expectify.errors.ExpectationFailed` so expectations still work in
a plain pytest function.
"""

from __future__ import annotations

import logging
import unittest
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Protocol

from expectify.errors import ExpectationFailed, RunnerBusyError

logger = logging.getLogger("expectify.sink")


class Reporter(Protocol):
    def errorf(self, format: str, *args: Any) -> None: ...

    def error_message(self, format: str, *args: Any) -> None: ...

    def skip(self, format: str, *args: Any) -> None: ...

    def stop(self) -> None: ...


_active: Reporter | None = None


def render(format: str, args: tuple[Any, ...]) -> str:
    return format % args if args else format


def activate(reporter: Reporter) -> None:
    global _active
    if _active is not None and _active is not reporter:
        raise RunnerBusyError("another runner is already active in this process")
    _active = reporter


def deactivate(reporter: Reporter) -> None:
    global _active
    if _active is reporter:
        _active = None


def active() -> Reporter | None:
    return _active


def errorf(format: str, *args: Any) -> None:
    if _active is None:
        raise ExpectationFailed(render(format, args))
    _active.errorf(format, *args)


def error_message(format: str, *args: Any) -> None:
    if _active is not None:
        _active.error_message(format, *args)


def skip(format: str, *args: Any) -> None:
    if _active is None:
        raise unittest.SkipTest(render(format, args))
    _active.skip(format, *args)


def stop() -> None:
    if _active is None:
        logger.warning("stop() called with no active runner")
        return
    _active.stop()


@dataclass
class CapturedFailures:
    """Reporter stub that keeps failure messages in memory."""

    messages: list[str] = field(default_factory=list)
    skip_message: str | None = None
    stopped: bool = False

    def errorf(self, format: str, *args: Any) -> None:
        self.messages.append(render(format, args))

    def error_message(self, format: str, *args: Any) -> None:
        if self.messages:
            self.messages[-1] = render(format, args)

    def skip(self, format: str, *args: Any) -> None:
        self.skip_message = render(format, args)

    def stop(self) -> None:
        self.stopped = True


@contextmanager
def capture_failures() -> Iterator[CapturedFailures]:
    """Collect failures in memory instead of reporting them."""
    global _active
    previous = _active
    captured = CapturedFailures()
    _active = captured
    try:
        yield captured
    finally:
        _active = previous
