"""Chat backend configuration model."""

from pydantic import BaseModel, Field


class BackendConfig(BaseModel, frozen=True):
    """Connection and sampling parameters for the chat-completion gateway."""

    model: str = Field(min_length=1)
    api_key: str = Field(min_length=1)
    api_base: str | None = None
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=500, ge=1)
    timeout_seconds: float | None = Field(default=None, gt=0)
