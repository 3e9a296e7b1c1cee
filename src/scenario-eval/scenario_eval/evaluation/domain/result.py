"""ScenarioResult — the outcome of replaying one scenario against the backend."""

from typing import Literal, TypeAlias

from pydantic import BaseModel, Field

TranscriptRole: TypeAlias = Literal["user", "assistant"]


class TranscriptTurn(BaseModel, frozen=True):
    """One line actually exchanged with the backend during a scenario."""

    role: TranscriptRole
    content: str


class ScenarioResult(BaseModel, frozen=True):
    """Immutable record of one scenario run: what was sent, what came back, how it scored.

    ``response_time_ms`` is 0 whenever the scenario failed with an error.
    """

    scenario_id: str
    scenario_name: str
    category: str = ""
    success: bool
    response_time_ms: int = Field(ge=0)
    transcript: list[TranscriptTurn]
    outcomes_met: list[str]
    outcomes_missed: list[str]
    error: str | None = None
