"""Error types raised by backend infrastructure."""

from scenario_eval.core.errors import ScenarioEvalError


class BackendInvocationError(ScenarioEvalError):
    """Raised when the backend cannot be reached or returns an unusable body."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to invoke backend: {reason}")


class BackendStatusError(BackendInvocationError):
    """Raised when the backend answers with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        detail = f"status {status_code}"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)
