"""ChatMessage value object — one entry of a chat-completion request."""

from typing import Literal, TypeAlias

from pydantic import BaseModel

ChatRole: TypeAlias = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel, frozen=True):
    role: ChatRole
    content: str
