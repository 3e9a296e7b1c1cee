"""Error types raised by scenario infrastructure."""

from scenario_eval.core.errors import ScenarioEvalError


class ScenarioLoadError(ScenarioEvalError):
    """Raised when a scenario file cannot be loaded or is malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to load scenarios: {reason}")
