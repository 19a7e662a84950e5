from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="expectify", help="Run expectation suites")


@app.command()
def run(
    targets: list[str] = typer.Argument(help="Suites to run, as path.py[:Suite] or module[:Suite]"),
    match: str | None = typer.Option(
        None, "--match", "-m", help="Regular expression selecting which tests to run"
    ),
    show_stdout: bool = typer.Option(
        False, "--vv", help="Let tests write to stdout and report every test"
    ),
    summary: str | None = typer.Option(None, help="Path to a summary file to merge totals into"),
    junit: str | None = typer.Option(None, help="Path to write junit.xml to"),
    config: str | None = typer.Option(None, help="Path to a YAML run config"),
    debug_log: str | None = typer.Option(None, help="Path to a debug log file"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output to stderr"),
):
    """Run suites and exit non-zero if any test failed."""
    from expectify.config import RunConfig, load_config
    from expectify.errors import ExpectifyError
    from expectify.loader import load_suites
    from expectify.metrics import duration_stats
    from expectify.reporting.junit import write_junit
    from expectify.runner import Runner

    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            typer.echo(f"Error: config file not found: {config}", err=True)
            raise typer.Exit(1)
        base = load_config(config_path)
    else:
        base = RunConfig.from_env()

    try:
        run_config = base.merged(
            match=match,
            verbose=True if show_stdout else None,
            debug=True if debug else None,
            summary_path=Path(summary) if summary else None,
            junit_path=Path(junit) if junit else None,
            debug_log=Path(debug_log) if debug_log else None,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    reports = []
    try:
        for target in targets:
            for suite in load_suites(target):
                reports.append(Runner(config=run_config).run(suite))
    except ExpectifyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if run_config.junit_path is not None:
        write_junit(run_config.junit_path, reports)

    results = [r for report in reports for r in report.results]
    passed = sum(report.passed for report in reports)
    failed = sum(report.failed for report in reports)
    skipped = sum(report.skipped for report in reports)
    stats = duration_stats(results)
    line = f"{passed} passed, {failed} failed, {skipped} skipped"
    if stats.avg is not None:
        line += f" (avg {stats.avg:.0f}ms, max {stats.max:.0f}ms)"
    typer.echo(line)

    if failed or any(report.interrupted for report in reports):
        raise typer.Exit(1)


@app.command()
def report(
    junit_xml: str = typer.Argument(help="Path to a junit.xml written by 'run --junit'"),
):
    """Reprint the failure summary of a previous run."""
    from expectify.reporting.junit import read_totals

    junit_path = Path(junit_xml)
    if not junit_path.exists():
        typer.echo(f"Error: junit file not found: {junit_xml}", err=True)
        raise typer.Exit(1)

    totals = read_totals(junit_path)
    failed = 0
    for suite in totals:
        typer.echo(
            f"{suite.name}: {suite.tests - suite.failures - suite.skipped} passed, "
            f"{suite.failures} failed, {suite.skipped} skipped"
        )
        for case_name, count in suite.failed_cases:
            mark = typer.style("×", fg=typer.colors.RED)
            typer.echo(f" {mark} {suite.name}.{case_name:<40}{count:2d}")
        failed += suite.failures

    if failed:
        raise typer.Exit(1)
