"""ChatBackendFactory Protocol — builds one backend per scenario."""

from typing import Protocol

from scenario_eval.backend.domain.backend import ChatBackend


class ChatBackendFactory(Protocol):
    """Constructs a ChatBackend bound to the scenario it will serve.

    Binding the scenario id at construction lets backend observer events carry
    it without widening the ``complete()`` signature.
    """

    def create(self, scenario_id: str) -> ChatBackend: ...
