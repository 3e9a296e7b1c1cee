"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, name: str, version: str) -> None:
        self._log.info("config.loaded", name=name, version=version)

    def config_backend_timeout_warning(self, model: str) -> None:
        self._log.warning(
            "config.backend_timeout_warning",
            model=model,
            message="No backend timeout set; a hung call stalls the whole run",
        )
