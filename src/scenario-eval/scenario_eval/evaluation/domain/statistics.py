"""Aggregate statistics over a run's scenario results."""

import math
from collections.abc import Collection, Sequence

from scenario_eval.evaluation.domain.result import ScenarioResult


def success_rate(successful: int, total: int) -> float:
    """Return successful/total, or 0.0 for an empty run."""
    if total == 0:
        return 0.0
    return successful / total


def mean_latency_ms(latencies: Sequence[int]) -> float:
    if not latencies:
        return 0.0
    return sum(latencies) / len(latencies)


def p95_latency_ms(latencies: Sequence[int]) -> int:
    """Nearest-rank style 95th percentile: ``sorted[floor(0.95 * n)]``, 0 when empty."""
    if not latencies:
        return 0
    ordered = sorted(latencies)
    return ordered[math.floor(len(ordered) * 0.95)]


def handoff_rate(
    results: Sequence[ScenarioResult], handoff_outcomes: Collection[str]
) -> float:
    """Fraction of all results whose met outcomes include any handoff outcome.

    The denominator is every scenario in the run, not just the successful ones.
    """
    if not results:
        return 0.0
    handoffs = sum(
        1
        for r in results
        if any(outcome in handoff_outcomes for outcome in r.outcomes_met)
    )
    return handoffs / len(results)
