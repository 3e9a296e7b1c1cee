"""ScenarioLoader Protocol — structural interface for loading scenarios."""

from pathlib import Path
from typing import Protocol

from scenario_eval.scenario.domain.scenario import Scenario


class ScenarioLoader(Protocol):
    """Loads the ordered list of Scenario objects for one run."""

    def load(self, path: Path) -> list[Scenario]: ...
