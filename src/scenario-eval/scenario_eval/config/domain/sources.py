"""Input source models: scenario file, system prompt, and catalog override."""

from pathlib import Path

from pydantic import BaseModel, model_validator


class ScenariosConfig(BaseModel, frozen=True):
    path: Path


class SystemPromptConfig(BaseModel, frozen=True):
    """Exactly one of ``path`` or ``text`` must be set."""

    path: Path | None = None
    text: str | None = None

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "SystemPromptConfig":
        if (self.path is None) == (self.text is None):
            raise ValueError("system_prompt requires exactly one of 'path' or 'text'")
        return self


class CatalogConfig(BaseModel, frozen=True):
    path: Path | None = None
