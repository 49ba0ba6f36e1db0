"""Latency statistics for detector benchmarking."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class LatencySummary:
    """Summary of a set of latency samples in microseconds."""

    samples: int
    mean_us: float
    min_us: float
    max_us: float
    p50_us: float
    p95_us: float


def percentile_index(size: int, fraction: float) -> int:
    """Index of the given fraction in a sorted sequence of ``size`` items."""
    if size == 0:
        return 0
    return int(fraction * (size - 1))


def summarize_latencies(latencies_us: Iterable[float]) -> LatencySummary:
    """Sort the samples and compute mean, extremes and percentiles."""
    ordered = sorted(latencies_us)
    if not ordered:
        raise ValueError("No benchmark samples were collected.")
    count = len(ordered)
    return LatencySummary(
        samples=count,
        mean_us=sum(ordered) / count,
        min_us=ordered[0],
        max_us=ordered[-1],
        p50_us=ordered[percentile_index(count, 0.50)],
        p95_us=ordered[percentile_index(count, 0.95)],
    )