"""Observer port for the outcome catalog — defines events in domain language."""

from typing import Protocol


class CatalogObserver(Protocol):
    def catalog_loaded(self, source: str, total_outcomes: int) -> None: ...

    def catalog_outcomes_unknown(self, purpose: str, outcome_ids: list[str]) -> None: ...
