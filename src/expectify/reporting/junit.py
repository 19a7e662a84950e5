from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from junitparser import Failure, JUnitXml, Skipped, TestCase, TestSuite

from expectify.metrics import duration_stats
from expectify.results import Status, SuiteReport


@dataclass
class SuiteTotals:
    """Per-suite counts read back from a junit file."""

    name: str
    tests: int
    failures: int
    skipped: int
    failed_cases: list[tuple[str, int]]


def build_suite(report: SuiteReport) -> TestSuite:
    suite = TestSuite(report.type_name)

    stats = duration_stats(report.results)
    for stat_name, stat_val in stats.to_dict().items():
        if stat_val is not None:
            suite.add_property(f"duration_ms_{stat_name}", str(stat_val))
    if report.stopped:
        suite.add_property("stopped", "true")
    if report.interrupted:
        suite.add_property("interrupted", "true")

    # Test cases: one per result
    for result in report.results:
        case = TestCase(result.method)
        case.classname = report.type_name
        case.time = result.duration_ms / 1000
        if result.status is Status.SKIPPED:
            case.result = [Skipped(result.skip_message)]
        elif result.status is Status.FAILED:
            case.result = [Failure(f"{f.location} {f.message}") for f in result.failures]
        suite.add_testcase(case)

    # Set time after add_testcase (add_testcase resets it via update_statistics)
    suite.time = sum(r.duration_ms for r in report.results) / 1000
    return suite


def write_junit(path: Path, reports: list[SuiteReport], *, merge: bool = False) -> Path:
    """Write junit.xml for ``reports``, return path.

    With ``merge`` set, suites already in the file are kept unless a report
    with the same suite name replaces them.
    """
    xml = JUnitXml()
    if merge and path.exists():
        replaced = {r.type_name for r in reports}
        for existing in JUnitXml.fromfile(str(path)):
            if existing.name not in replaced:
                xml.append(existing)

    for report in reports:
        # Use append (not +=) to preserve properties and time
        xml.append(build_suite(report))

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path


def read_totals(path: Path) -> list[SuiteTotals]:
    """Summarize every suite of a junit file."""
    xml = JUnitXml.fromfile(str(path))
    if isinstance(xml, TestSuite) and not isinstance(xml, JUnitXml):
        suites = [xml]
    else:
        suites = list(xml)

    totals = []
    for suite in suites:
        failed_cases = []
        for case in suite:
            failures = [r for r in case.result if isinstance(r, Failure)]
            if failures:
                failed_cases.append((case.name, len(failures)))
        totals.append(
            SuiteTotals(
                name=suite.name,
                tests=suite.tests,
                failures=len(failed_cases),
                skipped=suite.skipped,
                failed_cases=failed_cases,
            )
        )
    return totals
