"""ChatBackend Protocol — structural interface for language-model backends."""

from typing import Protocol

from scenario_eval.backend.domain.message import ChatMessage


class ChatBackend(Protocol):
    """Sends one chat request and returns the text of the first completion choice.

    Implementations return an empty string when the choice carries no content,
    and raise on transport failures, non-success statuses, or malformed bodies.
    """

    async def complete(self, messages: list[ChatMessage]) -> str: ...
