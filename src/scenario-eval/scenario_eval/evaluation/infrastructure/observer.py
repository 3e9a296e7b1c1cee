"""StructlogEvaluationObserver — production observer that delegates to structlog."""

import structlog


class StructlogEvaluationObserver:
    """Logs evaluation domain events to structlog.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def run_started(self, run_id: str, total_scenarios: int) -> None:
        self._log.info("run.started", run_id=run_id, total_scenarios=total_scenarios)

    def run_completed(
        self,
        run_id: str,
        successful: int,
        total_scenarios: int,
        elapsed_seconds: float,
    ) -> None:
        self._log.info(
            "run.completed",
            run_id=run_id,
            successful=successful,
            total_scenarios=total_scenarios,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def scenario_started(self, run_id: str, scenario_id: str, position: int) -> None:
        self._log.info(
            "run.scenario.started",
            run_id=run_id,
            scenario_id=scenario_id,
            position=position,
        )

    def scenario_completed(
        self,
        run_id: str,
        scenario_id: str,
        success: bool,
        response_time_ms: int,
        outcomes_met: list[str],
        outcomes_missed: list[str],
    ) -> None:
        self._log.info(
            "run.scenario.completed",
            run_id=run_id,
            scenario_id=scenario_id,
            verdict="PASS" if success else "FAIL",
            response_time_ms=response_time_ms,
            outcomes_met=outcomes_met,
            outcomes_missed=outcomes_missed,
        )

    def scenario_failed(self, run_id: str, scenario_id: str, reason: str) -> None:
        self._log.error(
            "run.scenario.failed",
            run_id=run_id,
            scenario_id=scenario_id,
            reason=reason,
        )
