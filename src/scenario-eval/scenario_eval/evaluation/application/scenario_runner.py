"""ScenarioRunner — replays one scenario against the backend and scores the reply."""

import time

from scenario_eval.backend.domain.factory import ChatBackendFactory
from scenario_eval.backend.domain.message import ChatMessage
from scenario_eval.config.domain.scoring import ScoringConfig
from scenario_eval.evaluation.domain.result import ScenarioResult, TranscriptTurn
from scenario_eval.outcome.domain.catalog import OutcomeCatalog
from scenario_eval.outcome.domain.evaluation import evaluate_outcomes
from scenario_eval.scenario.domain.scenario import Scenario


class ScenarioRunner:
    """Runs a single scenario: one backend call, one reply, one ScenarioResult.

    Never raises for a scenario-level problem. Any exception while building the
    request, calling the backend, or scoring the reply is folded into a failed
    result with ``response_time_ms=0``, no met outcomes, and every expected
    outcome missed.
    """

    def __init__(
        self,
        backend_factory: ChatBackendFactory,
        catalog: OutcomeCatalog,
        scoring: ScoringConfig,
    ) -> None:
        self._backend_factory = backend_factory
        self._catalog = catalog
        self._scoring = scoring

    async def run(self, scenario: Scenario, system_prompt: str) -> ScenarioResult:
        transcript: list[TranscriptTurn] = []
        try:
            messages = [ChatMessage(role="system", content=system_prompt)]
            for text in scenario.user_turns():
                messages.append(ChatMessage(role="user", content=text))
                transcript.append(TranscriptTurn(role="user", content=text))

            backend = self._backend_factory.create(scenario_id=scenario.id)
            start = time.monotonic()
            reply = await backend.complete(messages=messages)
            response_time_ms = int((time.monotonic() - start) * 1000)

            transcript.append(TranscriptTurn(role="assistant", content=reply))
            evaluation = evaluate_outcomes(
                reply=reply,
                expected_outcomes=scenario.expected_outcomes,
                catalog=self._catalog,
            )
        except Exception as exc:  # noqa: BLE001
            return ScenarioResult(
                scenario_id=scenario.id,
                scenario_name=scenario.name,
            category=scenario.category,
                success=False,
                response_time_ms=0,
                transcript=transcript,
                outcomes_met=[],
                outcomes_missed=list(scenario.expected_outcomes),
                error=str(exc) or type(exc).__name__,
            )

        return ScenarioResult(
            scenario_id=scenario.id,
            scenario_name=scenario.name,
            category=scenario.category,
            success=evaluation.passes(threshold=self._scoring.success_threshold),
            response_time_ms=response_time_ms,
            transcript=transcript,
            outcomes_met=evaluation.met,
            outcomes_missed=evaluation.missed,
        )
