"""Top-level HarnessConfig aggregate — the root configuration object."""

from pydantic import BaseModel, Field

from scenario_eval.config.domain.backend import BackendConfig
from scenario_eval.config.domain.scoring import ScoringConfig
from scenario_eval.config.domain.sources import (
    CatalogConfig,
    ScenariosConfig,
    SystemPromptConfig,
)


class HarnessConfig(BaseModel, frozen=True):
    """Root configuration aggregate for a scenario-eval run."""

    # Used as the output file stem.
    name: str = Field(min_length=1, pattern=r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
    version: str = Field(default="1", min_length=1)
    backend: BackendConfig
    scenarios: ScenariosConfig
    system_prompt: SystemPromptConfig
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
