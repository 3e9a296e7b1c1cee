"""Base exception class for all scenario-eval-specific errors."""


class ScenarioEvalError(Exception):
    """Base class for all scenario-eval errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
