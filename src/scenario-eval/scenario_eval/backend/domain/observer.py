"""Observer port for the backend domain — defines events in domain language."""

from typing import Protocol


class BackendObserver(Protocol):
    def backend_call_started(
        self, scenario_id: str, model: str, num_messages: int
    ) -> None: ...

    def backend_call_completed(
        self, scenario_id: str, duration_ms: int, reply_chars: int
    ) -> None: ...

    def backend_call_failed(
        self, scenario_id: str, reason: str, status_code: int | None
    ) -> None: ...
