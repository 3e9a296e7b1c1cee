"""Observer port for the scenario domain — defines events in domain language."""

from typing import Protocol


class ScenarioObserver(Protocol):
    def scenarios_loading_started(self, path: str) -> None: ...

    def scenarios_loading_completed(
        self, path: str, total_scenarios: int, categories: list[str]
    ) -> None: ...

    def scenarios_loading_failed(self, path: str, reason: str) -> None: ...
