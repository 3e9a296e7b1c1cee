"""CompositeEvaluationObserver — fans out all events to a list of observers."""

from scenario_eval.evaluation.domain.observer import EvaluationObserver


class CompositeEvaluationObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[EvaluationObserver]) -> None:
        self._observers = observers

    def run_started(self, run_id: str, total_scenarios: int) -> None:
        for obs in self._observers:
            obs.run_started(run_id=run_id, total_scenarios=total_scenarios)

    def run_completed(
        self,
        run_id: str,
        successful: int,
        total_scenarios: int,
        elapsed_seconds: float,
    ) -> None:
        for obs in self._observers:
            obs.run_completed(
                run_id=run_id,
                successful=successful,
                total_scenarios=total_scenarios,
                elapsed_seconds=elapsed_seconds,
            )

    def scenario_started(self, run_id: str, scenario_id: str, position: int) -> None:
        for obs in self._observers:
            obs.scenario_started(
                run_id=run_id, scenario_id=scenario_id, position=position
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
        for obs in self._observers:
            obs.scenario_completed(
                run_id=run_id,
                scenario_id=scenario_id,
                success=success,
                response_time_ms=response_time_ms,
                outcomes_met=outcomes_met,
                outcomes_missed=outcomes_missed,
            )

    def scenario_failed(self, run_id: str, scenario_id: str, reason: str) -> None:
        for obs in self._observers:
            obs.scenario_failed(run_id=run_id, scenario_id=scenario_id, reason=reason)
