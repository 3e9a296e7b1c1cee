"""RunSummary — the aggregate result of a completed scenario run."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from scenario_eval.evaluation.domain.result import ScenarioResult


class RunSummary(BaseModel, frozen=True):
    """Immutable summary returned when a run completes.

    Field names match the JSON document consumed by the test-harness UI.
    ``notable_failures`` and ``example_transcripts`` are the first failed and
    first successful results in scenario order, not a ranking.
    """

    run_id: str = Field(min_length=1)
    total_scenarios: int = Field(ge=0)
    successful: int = Field(ge=0)
    failed: int = Field(ge=0)
    success_rate: float = Field(ge=0.0, le=1.0)
    avg_response_time_ms: float = Field(ge=0.0)
    p95_response_time_ms: int = Field(ge=0)
    handoff_rate: float = Field(ge=0.0, le=1.0)
    results: list[ScenarioResult]
    notable_failures: list[ScenarioResult]
    example_transcripts: list[ScenarioResult]
    run_at: datetime

    @model_validator(mode="after")
    def _counts_are_consistent(self) -> "RunSummary":
        if self.successful + self.failed != self.total_scenarios:
            raise ValueError(
                f"successful ({self.successful}) + failed ({self.failed})"
                f" != total_scenarios ({self.total_scenarios})"
            )
        if len(self.results) != self.total_scenarios:
            raise ValueError(
                f"{len(self.results)} results for {self.total_scenarios} scenarios"
            )
        return self
