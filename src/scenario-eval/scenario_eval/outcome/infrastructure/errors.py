"""Error types raised by outcome catalog infrastructure."""

from scenario_eval.core.errors import ScenarioEvalError


class CatalogLoadError(ScenarioEvalError):
    """Raised when an outcome catalog file is missing, malformed, or holds a bad pattern."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to load outcome catalog: {reason}")
