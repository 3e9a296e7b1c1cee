"""Observer port for the evaluation domain — defines events in domain language."""

from typing import Protocol


class EvaluationObserver(Protocol):
    """Observer port emitting structured events during a scenario run.

    Implementations may log to structlog, render progress, or record for tests.
    """

    def run_started(self, run_id: str, total_scenarios: int) -> None: ...

    def run_completed(
        self,
        run_id: str,
        successful: int,
        total_scenarios: int,
        elapsed_seconds: float,
    ) -> None: ...

    def scenario_started(
        self, run_id: str, scenario_id: str, position: int
    ) -> None: ...

    def scenario_completed(
        self,
        run_id: str,
        scenario_id: str,
        success: bool,
        response_time_ms: int,
        outcomes_met: list[str],
        outcomes_missed: list[str],
    ) -> None: ...

    def scenario_failed(self, run_id: str, scenario_id: str, reason: str) -> None: ...
