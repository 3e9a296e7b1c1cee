"""Structlog implementation of the BackendObserver port."""

import structlog


class StructlogBackendObserver:
    """Delegates backend events to structlog.

    Satisfies the BackendObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def backend_call_started(
        self, scenario_id: str, model: str, num_messages: int
    ) -> None:
        self._log.info(
            "backend.call_started",
            scenario_id=scenario_id,
            model=model,
            num_messages=num_messages,
        )

    def backend_call_completed(
        self, scenario_id: str, duration_ms: int, reply_chars: int
    ) -> None:
        self._log.info(
            "backend.call_completed",
            scenario_id=scenario_id,
            duration_ms=duration_ms,
            reply_chars=reply_chars,
        )

    def backend_call_failed(
        self, scenario_id: str, reason: str, status_code: int | None
    ) -> None:
        self._log.error(
            "backend.call_failed",
            scenario_id=scenario_id,
            reason=reason,
            status_code=status_code,
        )
