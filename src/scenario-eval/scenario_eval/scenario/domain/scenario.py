"""Scenario value objects — a scripted dialogue and the outcomes it expects."""

from typing import Literal, TypeAlias

from pydantic import BaseModel, Field

ScriptedRole: TypeAlias = Literal["user", "assistant", "agent"]


class ScriptedTurn(BaseModel, frozen=True):
    """One scripted line. Agent-side lines are reference text and are never replayed."""

    role: ScriptedRole
    content: str | None = None


class Scenario(BaseModel, frozen=True):
    """Immutable dialogue script with the behavioural outcomes its reply must show."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    messages: list[ScriptedTurn]
    expected_outcomes: list[str]
    category: str = ""

    def user_turns(self) -> list[str]:
        """Return the text of every user turn that has content, in script order."""
        return [
            turn.content
            for turn in self.messages
            if turn.role == "user" and turn.content
        ]
