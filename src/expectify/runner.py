from __future__ import annotations

import logging
import re
import sys
import time
from collections.abc import Callable, Iterable
from typing import Any, TextIO

from expectify import sink
from expectify.config import RunConfig
from expectify.discovery import lifecycle_hook, procedures_of
from expectify.errors import SuiteFailed
from expectify.output import OutputCapture
from expectify.reporting import console
from expectify.results import Failure, Result, SuiteReport
from expectify.summary import update_persisted_summary
from expectify.verbose import setup_logger

# Frames searched above the reporting call for the test file that failed
MAX_LOCATION_DEPTH = 12
UNKNOWN_LOCATION = "???:1"
_TEST_FILE = re.compile(r"^(test_.*|.*_test)\.py$")
_PATH_SEPARATORS = re.compile(r"[\\/]")


def failure_location(skip: int = 1, depth: int = MAX_LOCATION_DEPTH) -> str:
    """Return ``file:line`` of the nearest caller living in a test file."""
    frame = sys._getframe(skip + 1)
    for _ in range(depth):
        if frame is None:
            break
        base_name = _PATH_SEPARATORS.split(frame.f_code.co_filename)[-1]
        if _TEST_FILE.match(base_name):
            return f"{base_name}:{frame.f_lineno}"
        frame = frame.f_back
    return UNKNOWN_LOCATION


class Runner:
    """Runs the test procedures of a suite one at a time.

    The runner is the active failure reporter for the length of :meth:`run`,
    so every expectation evaluated by a test body lands on the result that
    is current at that moment.
    """

    def __init__(
        self,
        config: RunConfig | None = None,
        hooks: Iterable[Callable[[], Any]] = (),
        output: OutputCapture | None = None,
        logger: logging.Logger | None = None,
    ):
        self.config = config or RunConfig()
        self.hooks = list(hooks)
        self.output = output or OutputCapture(verbose=self.config.verbose)
        self.results: list[Result] = []
        self.current: Result | None = None
        self.stop_requested = False
        self.logger = logger or setup_logger(
            debug_file=self.config.debug_log,
            verbose=self.config.debug,
            logger_name="expectify.runner",
        )

    def before_each(self, hook: Callable[[], Any]) -> None:
        """Register a hook that runs before every test body."""
        self.hooks.append(hook)

    def start(self, name: str, type_name: str) -> Result:
        self.current = Result(method=name, type_name=type_name)
        self.results.append(self.current)
        return self.current

    def end(self) -> bool:
        result = self.current
        result.end = time.perf_counter()
        self.current = None
        return result.passed

    def skip(self, format: str, *args: Any) -> None:
        if self.current is not None:
            self.current.mark_skipped(format, *args)

    def errorf(self, format: str, *args: Any) -> None:
        if self.current is None:
            self.logger.warning(f"Failure outside of a test: {sink.render(format, args)}")
            return
        location = failure_location(skip=1)
        self.current.failures.append(Failure(sink.render(format, args), location))

    def error_message(self, format: str, *args: Any) -> None:
        if self.current is not None:
            self.current.error_message(format, *args)

    def stop(self) -> None:
        self.logger.info("Stop requested")
        self.stop_requested = True

    def run(self, suite: object) -> SuiteReport:
        """Run every selected procedure of ``suite`` and report the outcome."""
        type_name = type(suite).__name__
        procedures = procedures_of(suite)
        each = lifecycle_hook(suite)
        announced = False
        interrupted = False
        name = None
        result: Result | None = None

        self.logger.debug(f"Starting suite {type_name} with {len(procedures)} procedure(s)")
        sink.activate(self)
        self.results = []
        self.current = None
        self.stop_requested = False
        self.output.silence()
        stream = self.output.stream
        try:
            for procedure in procedures:
                if self.stop_requested:
                    self.logger.info(f"Stopping {type_name} before {procedure.name}")
                    break
                if not self.config.selects(procedure.name, type_name):
                    continue

                name = procedure.name
                result = self.start(name, type_name)

                def body(procedure=procedure, result=result) -> None:
                    nonlocal announced
                    if self.current is not result:
                        self.logger.warning(f"each() ran {type_name}.{procedure.name} more than once")
                        return
                    for hook in self.hooks:
                        hook()
                    with self.output.test_body():
                        procedure.func()
                    passed = self.end()
                    self.logger.debug(
                        f"{type_name}.{procedure.name} {result.status.value} in {result.duration_ms}ms"
                    )
                    if not passed or self.config.verbose:
                        if not announced:
                            console.announce_suite(type_name, stream)
                            announced = True
                        console.report(result, stream)

                if each is not None:
                    each(body)
                else:
                    body()
                if self.current is result:
                    self.logger.warning(f"each() never ran {type_name}.{name}")
                    self.end()
        except KeyboardInterrupt:
            interrupted = True
            self.logger.warning(f"Run of {type_name} interrupted by user (Ctrl+C)")
            if self.current is not None:
                self.end()
        except Exception:
            self.output.restore()
            if result is not None:
                console.report(result, stream)
            console.crash(name or type_name, stream)
            self.logger.exception(f"{type_name}.{name} crashed")
            raise
        finally:
            self.output.restore()
            sink.deactivate(self)

        return self.finish(type_name, stream, interrupted=interrupted)

    def finish(self, type_name: str, stream: TextIO | None = None, interrupted: bool = False) -> SuiteReport:
        stream = stream or sys.stdout
        report = SuiteReport(
            type_name=type_name,
            results=list(self.results),
            stopped=self.stop_requested,
            interrupted=interrupted,
        )
        if report.failed:
            console.failure_summary(report.results, stream)

        self.logger.info(
            f"{type_name}: {report.passed} passed, {report.failed} failed, {report.skipped} skipped"
        )
        if self.config.summary_path is not None:
            update_persisted_summary(
                self.config.summary_path, report.passed + report.skipped, report.failed
            )
        return report


def expectify(
    suite: object,
    config: RunConfig | None = None,
    hooks: Iterable[Callable[[], Any]] = (),
) -> SuiteReport:
    """Run ``suite`` from inside a host test function.

    Raises :class:`~expectify.errors.SuiteFailed` when any test failed so the
    host test is marked failed too.  Settings default to the ``EXPECTIFY_*``
    environment variables.
    """
    config = config or RunConfig.from_env()
    report = Runner(config=config, hooks=hooks).run(suite)
    if config.junit_path is not None:
        from expectify.reporting.junit import write_junit

        write_junit(config.junit_path, [report], merge=True)
    if not report.ok:
        raise SuiteFailed(report.type_name, report.failed)
    return report
