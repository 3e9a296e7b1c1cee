"""BatchRunner — runs every scenario in order and aggregates a RunSummary."""

import time
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from scenario_eval.config.domain.scoring import ScoringConfig
from scenario_eval.evaluation.application.scenario_runner import ScenarioRunner
from scenario_eval.evaluation.domain.observer import EvaluationObserver
from scenario_eval.evaluation.domain.result import ScenarioResult
from scenario_eval.evaluation.domain.statistics import (
    handoff_rate,
    mean_latency_ms,
    p95_latency_ms,
    success_rate,
)
from scenario_eval.evaluation.domain.summary import RunSummary
from scenario_eval.scenario.domain.scenario import Scenario


class BatchRunner:
    """Runs scenarios strictly one after another and summarises the run.

    Results keep scenario input order. A failing scenario is recorded and the
    loop moves on; nothing here retries or runs scenarios concurrently. Latency
    aggregates include the 0 ms recorded for errored scenarios.
    """

    def __init__(
        self,
        scenario_runner: ScenarioRunner,
        scoring: ScoringConfig,
        observer: EvaluationObserver,
    ) -> None:
        self._scenario_runner = scenario_runner
        self._scoring = scoring
        self._observer = observer

    async def run(self, scenarios: Sequence[Scenario], system_prompt: str) -> RunSummary:
        run_id = str(uuid.uuid4())
        self._observer.run_started(run_id=run_id, total_scenarios=len(scenarios))
        started_at = time.monotonic()

        results: list[ScenarioResult] = []
        for position, scenario in enumerate(scenarios):
            self._observer.scenario_started(
                run_id=run_id, scenario_id=scenario.id, position=position
            )
            result = await self._scenario_runner.run(
                scenario=scenario, system_prompt=system_prompt
            )
            results.append(result)

            if result.error is not None:
                self._observer.scenario_failed(
                    run_id=run_id, scenario_id=scenario.id, reason=result.error
                )
            self._observer.scenario_completed(
                run_id=run_id,
                scenario_id=scenario.id,
                success=result.success,
                response_time_ms=result.response_time_ms,
                outcomes_met=result.outcomes_met,
                outcomes_missed=result.outcomes_missed,
            )

        summary = self._summarise(run_id=run_id, results=results)

        self._observer.run_completed(
            run_id=run_id,
            successful=summary.successful,
            total_scenarios=summary.total_scenarios,
            elapsed_seconds=time.monotonic() - started_at,
        )
        return summary

    def _summarise(self, run_id: str, results: list[ScenarioResult]) -> RunSummary:
        total = len(results)
        successes = [r for r in results if r.success]
        failures = [r for r in results if not r.success]
        latencies = [r.response_time_ms for r in results]
        limit = self._scoring.highlight_limit

        return RunSummary(
            run_id=run_id,
            total_scenarios=total,
            successful=len(successes),
            failed=total - len(successes),
            success_rate=success_rate(successful=len(successes), total=total),
            avg_response_time_ms=mean_latency_ms(latencies),
            p95_response_time_ms=p95_latency_ms(latencies),
            handoff_rate=handoff_rate(
                results=results,
                handoff_outcomes=set(self._scoring.handoff_outcomes),
            ),
            results=results,
            notable_failures=failures[:limit],
            example_transcripts=successes[:limit],
            run_at=datetime.now(timezone.utc),
        )
