"""Structlog implementation of the CatalogObserver port."""

import structlog


class StructlogCatalogObserver:
    """Delegates catalog events to structlog.

    Satisfies the CatalogObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def catalog_loaded(self, source: str, total_outcomes: int) -> None:
        self._log.info("catalog.loaded", source=source, total_outcomes=total_outcomes)

    def catalog_outcomes_unknown(self, purpose: str, outcome_ids: list[str]) -> None:
        self._log.warning(
            "catalog.outcomes_unknown",
            purpose=purpose,
            outcome_ids=outcome_ids,
            message="Outcomes without catalog rules can never be met",
        )
