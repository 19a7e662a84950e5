from __future__ import annotations

from dataclasses import asdict, dataclass

import numpy as np

from expectify.results import Result


@dataclass
class DurationStatistics:
    """Statistics over test durations, in milliseconds."""

    avg: float | None
    min: float | None
    max: float | None
    stddev: float | None

    def to_dict(self) -> dict[str, float | None]:
        return asdict(self)


def compute_stats(values: list[float | int | None]) -> DurationStatistics:
    """Compute avg, min, max, stddev for a list of numeric values."""
    nums = [v for v in values if v is not None]
    if not nums:
        return DurationStatistics(avg=None, min=None, max=None, stddev=None)

    arr = np.array(nums, dtype=float)
    return DurationStatistics(
        avg=round(float(np.mean(arr)), 4),
        min=round(float(np.min(arr)), 4),
        max=round(float(np.max(arr)), 4),
        stddev=round(float(np.std(arr)), 4),
    )


def duration_stats(results: list[Result]) -> DurationStatistics:
    # skipped tests carry no meaningful timing
    return compute_stats([r.duration_ms for r in results if not r.skip])
