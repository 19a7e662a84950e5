"""Colored per-test report lines and the failure summary."""

from __future__ import annotations

from typing import TextIO

import typer

from expectify.results import Result, Status

_MARKS = {
    Status.PASSED: ("✓", typer.colors.GREEN),
    Status.FAILED: ("×", typer.colors.RED),
    Status.SKIPPED: ("⸚", typer.colors.YELLOW),
}


def _mark(status: Status) -> str:
    symbol, color = _MARKS[status]
    return typer.style(symbol, fg=color)


def announce_suite(type_name: str, file: TextIO) -> None:
    typer.echo("\n" + typer.style(type_name, bold=True), file=file)


def report(result: Result, file: TextIO) -> None:
    """Write the detailed line for ``result``, with failures or skip reason."""
    status = result.status
    info = f" {result.method:<70}{result.duration_ms}ms"
    typer.echo(f" {_mark(status)}{info}", file=file)
    if status is Status.SKIPPED:
        typer.echo("   " + typer.style(result.skip_message, dim=True), file=file)
    elif status is Status.FAILED:
        for failure in result.failures:
            location = typer.style(f"{failure.location:<40}", dim=True)
            typer.echo(f"    {location}{failure.message}", file=file)


def summary(result: Result, file: TextIO) -> None:
    info = f" {result.type_name}.{result.method:<40}"
    line = f" {_mark(result.status)}{info}"
    if result.status is Status.FAILED:
        line += f"{len(result.failures):2d}"
    typer.echo(line, file=file)


def failure_summary(results: list[Result], file: TextIO) -> None:
    typer.echo("\nFailure summary", file=file)
    for result in results:
        if not result.passed:
            summary(result, file)
    typer.echo("", file=file)


def crash(name: str, file: TextIO) -> None:
    typer.echo(typer.style(f" 💣  {name:<75}", fg=typer.colors.RED, bold=True), file=file)
