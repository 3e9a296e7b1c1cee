"""Structlog implementation of the ScenarioObserver port."""

import structlog


class StructlogScenarioObserver:
    """Delegates scenario loading events to structlog.

    Satisfies the ScenarioObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def scenarios_loading_started(self, path: str) -> None:
        self._log.info("scenarios.loading_started", path=path)

    def scenarios_loading_completed(
        self, path: str, total_scenarios: int, categories: list[str]
    ) -> None:
        self._log.info(
            "scenarios.loading_completed",
            path=path,
            total_scenarios=total_scenarios,
            categories=categories,
        )

    def scenarios_loading_failed(self, path: str, reason: str) -> None:
        self._log.error("scenarios.loading_failed", path=path, reason=reason)
