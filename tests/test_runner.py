import re

import pytest

from expectify import (
    Procedure,
    RunConfig,
    Runner,
    RunnerBusyError,
    Status,
    SuiteFailed,
    expect,
    expectify,
    fail,
    skip,
    stop,
)
from expectify.runner import UNKNOWN_LOCATION, failure_location


class MixedSuite:
    def __init__(self):
        self.calls = []

    def adds(self):
        self.calls.append("adds")
        expect(1 + 1).to.equal(2)

    def subtracts(self):
        self.calls.append("subtracts")
        expect(3 - 1).to.equal(1)
        expect(3 - 1).to.equal(0)

    def skipped(self):
        self.calls.append("skipped")
        expect(1).to.equal(2)
        skip("needs %s", "spice")

    def _private(self):
        self.calls.append("_private")

    def needs_argument(self, value):
        self.calls.append("needs_argument")

    @property
    def not_a_test(self):
        raise AssertionError("properties are never evaluated")


class PassingSuite:
    def one(self):
        expect("a").to.equal("a")

    def two(self):
        expect([1, 2]).to.contain(2)


@pytest.fixture
def runner():
    return Runner(config=RunConfig())


# --- discovery and classification ---


def test_runs_public_zero_argument_methods_in_order(runner):
    suite = MixedSuite()
    report = runner.run(suite)

    assert suite.calls == ["adds", "subtracts", "skipped"]
    assert [r.method for r in report.results] == ["adds", "subtracts", "skipped"]
    assert {r.type_name for r in report.results} == {"MixedSuite"}


def test_classifies_results(runner):
    report = runner.run(MixedSuite())

    statuses = {r.method: r.status for r in report.results}
    assert statuses == {
        "adds": Status.PASSED,
        "subtracts": Status.FAILED,
        "skipped": Status.SKIPPED,
    }
    assert (report.passed, report.failed, report.skipped) == (1, 1, 1)
    assert not report.ok


def test_failures_accumulate_without_aborting_test(runner):
    report = runner.run(MixedSuite())

    subtracts = next(r for r in report.results if r.method == "subtracts")
    assert [f.message for f in subtracts.failures] == [
        "expected 2 to be equal to 1",
        "expected 2 to be equal to 0",
    ]


def test_skip_takes_precedence_over_earlier_failures(runner):
    report = runner.run(MixedSuite())

    skipped = next(r for r in report.results if r.method == "skipped")
    assert len(skipped.failures) == 1
    assert skipped.skip_message == "needs spice"
    assert skipped.status is Status.SKIPPED
    assert skipped.passed


def test_failure_location_points_at_test_file(runner):
    report = runner.run(MixedSuite())

    subtracts = next(r for r in report.results if r.method == "subtracts")
    for failure in subtracts.failures:
        assert re.fullmatch(r"test_runner\.py:\d+", failure.location)


def test_failure_location_placeholder_when_no_test_file():
    assert failure_location(depth=0) == UNKNOWN_LOCATION


def test_results_have_timing(runner):
    report = runner.run(PassingSuite())

    for result in report.results:
        assert result.end is not None
        assert result.end >= result.start
        assert result.duration_ms >= 0


def test_procedure_source_is_used_verbatim(runner):
    calls = []

    class Registered:
        def procedures(self):
            return [
                Procedure("second", lambda: calls.append("second")),
                Procedure("first", lambda: calls.append("first")),
            ]

        def ignored(self):
            calls.append("ignored")

    report = runner.run(Registered())
    assert calls == ["second", "first"]
    assert [r.method for r in report.results] == ["second", "first"]


# --- reporting ---


def test_failed_suite_prints_failure_summary(runner, capsys):
    runner.run(MixedSuite())
    out = capsys.readouterr().out

    assert "MixedSuite" in out
    assert "Failure summary" in out
    summary = out.split("Failure summary", 1)[1]
    assert "MixedSuite.subtracts" in summary
    assert "MixedSuite.adds" not in summary
    assert "MixedSuite.skipped" not in summary


def test_passing_suite_prints_nothing(runner, capsys):
    report = runner.run(PassingSuite())

    assert report.ok
    assert capsys.readouterr().out == ""


def test_only_failures_reported_by_default(runner, capsys):
    runner.run(MixedSuite())
    out = capsys.readouterr().out

    assert " subtracts" in out
    assert "expected 2 to be equal to 0" in out
    assert " adds " not in out


def test_verbose_reports_every_test(capsys):
    Runner(config=RunConfig(verbose=True)).run(PassingSuite())
    out = capsys.readouterr().out

    assert "PassingSuite" in out
    assert " one" in out
    assert " two" in out


def test_expectify_raises_when_tests_fail():
    with pytest.raises(SuiteFailed) as exc_info:
        expectify(MixedSuite(), config=RunConfig())
    assert exc_info.value.failed == 1
    assert exc_info.value.type_name == "MixedSuite"


def test_expectify_returns_report_when_all_pass():
    report = expectify(PassingSuite(), config=RunConfig())
    assert report.ok
    assert report.passed == 2


def test_expectify_reads_config_from_environment(monkeypatch):
    monkeypatch.setenv("EXPECTIFY_MATCH", "^one$")
    report = expectify(PassingSuite())
    assert [r.method for r in report.results] == ["one"]


def test_expectify_writes_junit(tmp_path):
    junit = tmp_path / "junit.xml"
    expectify(PassingSuite(), config=RunConfig(junit_path=junit))
    assert junit.exists()


# --- filtering ---


def test_match_filters_by_method_name():
    report = Runner(config=RunConfig(match="SUBTRACT")).run(MixedSuite())
    assert [r.method for r in report.results] == ["subtracts"]


def test_match_accepts_type_name():
    report = Runner(config=RunConfig(match="passing")).run(PassingSuite())
    assert [r.method for r in report.results] == ["one", "two"]


def test_match_with_no_hits_runs_nothing():
    suite = MixedSuite()
    report = Runner(config=RunConfig(match="nothing-here")).run(suite)
    assert report.results == []
    assert suite.calls == []


# --- hooks ---


def test_global_hooks_run_in_order_before_every_test():
    events = []

    class Suite:
        def a(self):
            events.append("a")

        def b(self):
            events.append("b")

    runner = Runner(hooks=[lambda: events.append("h1")])
    runner.before_each(lambda: events.append("h2"))
    runner.run(Suite())

    assert events == ["h1", "h2", "a", "h1", "h2", "b"]


def test_each_wraps_every_test():
    events = []

    class Suite:
        def each(self, run):
            events.append("setup")
            run()
            events.append("teardown")

        def a(self):
            events.append("a")

        def b(self):
            events.append("b")

    report = Runner(hooks=[lambda: events.append("hook")]).run(Suite())

    assert events == ["setup", "hook", "a", "teardown", "setup", "hook", "b", "teardown"]
    assert [r.method for r in report.results] == ["a", "b"]


def test_each_with_wrong_arity_is_a_plain_method():
    events = []

    class Suite:
        def each(self):
            events.append("each")

        def a(self):
            events.append("a")

    report = Runner().run(Suite())
    assert events == ["each", "a"]
    assert [r.method for r in report.results] == ["each", "a"]


def test_each_that_never_runs_the_test_still_ends_result():
    class Suite:
        def each(self, run):
            pass

        def a(self):
            raise AssertionError("never called")

    report = Runner().run(Suite())
    assert len(report.results) == 1
    assert report.results[0].end is not None
    assert report.results[0].status is Status.PASSED


def test_each_that_runs_the_test_twice_runs_it_once():
    events = []

    class Suite:
        def each(self, run):
            run()
            run()

        def a(self):
            events.append("a")

    report = Runner().run(Suite())
    assert events == ["a"]
    assert len(report.results) == 1
    assert report.results[0].status is Status.PASSED


# --- output isolation ---


class PrintingSuite:
    def talks(self):
        print("chatter from the test body")


def test_stdout_silenced_during_tests(capsys):
    Runner(config=RunConfig()).run(PrintingSuite())
    assert "chatter" not in capsys.readouterr().out


def test_stdout_shown_in_verbose_mode(capsys):
    Runner(config=RunConfig(verbose=True)).run(PrintingSuite())
    assert "chatter from the test body" in capsys.readouterr().out


def test_stdout_restored_after_run():
    import sys

    before = sys.stdout
    Runner().run(PrintingSuite())
    assert sys.stdout is before


# --- stop and crash handling ---


def test_stop_ends_suite_after_current_test(capsys):
    class Suite:
        def first(self):
            expect(1).to.equal(2)

        def second(self):
            stop()
            expect(1).to.equal(3)

        def third(self):
            raise AssertionError("should not run")

    report = Runner().run(Suite())

    assert [r.method for r in report.results] == ["first", "second"]
    assert report.stopped
    assert report.failed == 2
    assert "Failure summary" in capsys.readouterr().out


def test_crash_propagates_and_restores_state(capsys):
    import sys

    from expectify import sink

    before = sys.stdout

    class Suite:
        def fine(self):
            pass

        def explodes(self):
            raise ValueError("boom")

        def never(self):
            raise AssertionError("should not run")

    with pytest.raises(ValueError, match="boom"):
        Runner().run(Suite())

    assert sys.stdout is before
    assert sink.active() is None
    out = capsys.readouterr().out
    assert "💣" in out
    assert "explodes" in out


def test_keyboard_interrupt_returns_partial_report():
    class Suite:
        def first(self):
            pass

        def second(self):
            raise KeyboardInterrupt

        def third(self):
            raise AssertionError("should not run")

    report = Runner().run(Suite())
    assert report.interrupted
    assert [r.method for r in report.results] == ["first", "second"]


def test_second_runner_cannot_start_while_one_is_active():
    class Inner:
        def a(self):
            pass

    class Outer:
        def nested(self):
            Runner().run(Inner())

    with pytest.raises(RunnerBusyError):
        Runner().run(Outer())


def test_runner_is_reusable():
    runner = Runner()
    runner.run(MixedSuite())
    report = runner.run(PassingSuite())
    assert [r.method for r in report.results] == ["one", "two"]


# --- messages and unconditional failures ---


def test_outcome_message_rewrites_recorded_failure():
    class Suite:
        def counted(self):
            expect(len([1, 2])).to.equal(3).message("wanted %d items", 3)
            fail("plain failure")

    report = Runner().run(Suite())
    assert [f.message for f in report.results[0].failures] == [
        "wanted 3 items",
        "plain failure",
    ]


# --- persisted summary ---


def test_summary_file_merged_after_run(tmp_path):
    summary = tmp_path / "summary.txt"
    summary.write_text("3 passed\n0 failed")

    Runner(config=RunConfig(summary_path=summary)).run(MixedSuite())

    content = summary.read_text()
    assert "5 passed" in content
    assert "1 failed" in content


def test_summary_file_error_raised_after_reporting(tmp_path, capsys):
    from expectify import SummaryFileError

    directory = tmp_path / "summary.txt"
    directory.mkdir()
    runner = Runner(config=RunConfig(summary_path=directory))

    with pytest.raises(SummaryFileError):
        runner.run(MixedSuite())

    assert "Failure summary" in capsys.readouterr().out
    assert [r.method for r in runner.results] == ["adds", "subtracts", "skipped"]


def test_skipped_tests_count_as_passed_in_summary(tmp_path, mocker):
    update = mocker.patch("expectify.runner.update_persisted_summary")
    summary = tmp_path / "summary.txt"

    Runner(config=RunConfig(summary_path=summary)).run(MixedSuite())

    update.assert_called_once_with(summary, 2, 1)


def test_no_summary_written_without_path(mocker):
    update = mocker.patch("expectify.runner.update_persisted_summary")

    Runner(config=RunConfig()).run(PassingSuite())

    update.assert_not_called()
