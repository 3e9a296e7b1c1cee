"""LiteLLMChatBackendFactory — creates LiteLLMChatBackend instances per scenario."""

from scenario_eval.backend.domain.backend import ChatBackend
from scenario_eval.backend.domain.observer import BackendObserver
from scenario_eval.backend.infrastructure.litellm_backend import LiteLLMChatBackend
from scenario_eval.config.domain.backend import BackendConfig


class LiteLLMChatBackendFactory:
    """Satisfies the ChatBackendFactory protocol."""

    def __init__(self, config: BackendConfig, observer: BackendObserver) -> None:
        self._config = config
        self._observer = observer

    def create(self, scenario_id: str) -> ChatBackend:
        return LiteLLMChatBackend(
            config=self._config,
            scenario_id=scenario_id,
            observer=self._observer,
        )
