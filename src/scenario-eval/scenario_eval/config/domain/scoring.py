"""Scoring configuration model."""

from pydantic import BaseModel, Field

DEFAULT_HANDOFF_OUTCOMES: tuple[str, ...] = ("escalation_offered", "callback_offered")


class ScoringConfig(BaseModel, frozen=True):
    """Acceptance and aggregation parameters for a run.

    A scenario passes when no expected outcome is missed, or when the met count
    reaches ``success_threshold`` times the number of expected outcomes.
    """

    success_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    handoff_outcomes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HANDOFF_OUTCOMES), min_length=1
    )
    highlight_limit: int = Field(default=3, ge=0)
