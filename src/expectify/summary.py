"""Cumulative pass/fail totals persisted across runs."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from expectify.errors import SummaryFileError

logger = logging.getLogger("expectify.summary")

SUMMARY_PATTERN = re.compile(r"(\d+) passed\s*(?:\*\s*)?(\d+) failed")


def merge_summary(existing: str, passed: int, failed: int) -> tuple[int, int]:
    """Add the totals found in ``existing`` to this run's counts.

    The totals are only picked up when the text holds exactly one
    ``N passed`` / ``N failed`` pair.
    """
    found = SUMMARY_PATTERN.findall(existing)
    if len(found) == 1:
        previous_passed, previous_failed = found[0]
        passed += int(previous_passed)
        failed += int(previous_failed)
    return passed, failed


def render_summary(passed: int, failed: int) -> str:
    return f"\n* {passed} passed\n* {failed} failed\n"


def update_persisted_summary(path: Path, passed: int, failed: int) -> tuple[int, int]:
    """Merge this run into the summary file at ``path`` and rewrite it."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch(mode=0o600, exist_ok=True)
        with path.open("r+", encoding="utf-8", errors="replace") as f:
            existing = f.read()
            passed, failed = merge_summary(existing, passed, failed)
            f.seek(0)
            f.truncate()
            f.write(render_summary(passed, failed))
    except OSError as e:
        raise SummaryFileError(f"cannot update summary file {path}: {e}") from e

    logger.debug(f"Summary file {path} now at {passed} passed / {failed} failed")
    return passed, failed
