"""LiteLLMChatBackend — chat backend that calls an OpenAI-compatible gateway via LiteLLM."""

import time
from collections.abc import Iterator
from typing import Any

import litellm
import openai

from scenario_eval.backend.domain.message import ChatMessage
from scenario_eval.backend.domain.observer import BackendObserver
from scenario_eval.backend.infrastructure.errors import (
    BackendInvocationError,
    BackendStatusError,
)
from scenario_eval.config.domain.backend import BackendConfig


class LiteLLMChatBackend:
    """ChatBackend implementation that delegates to ``litellm.acompletion``.

    One instance is constructed per scenario. The scenario id is injected at
    construction time so that observer events carry it.
    """

    def __init__(
        self,
        config: BackendConfig,
        scenario_id: str,
        observer: BackendObserver,
    ) -> None:
        self._config = config
        self._scenario_id = scenario_id
        self._observer = observer

    async def complete(self, messages: list[ChatMessage]) -> str:
        """Send *messages* once and return the first choice's content.

        No retries are attempted; LiteLLM's own retry loop is disabled.

        Raises:
            BackendStatusError: if the gateway answered with a non-success status.
            BackendInvocationError: on a connection failure or timeout, even
                when LiteLLM attaches a status code to it, on any other error
                without a status, or on a response without choices.
        """
        self._observer.backend_call_started(
            scenario_id=self._scenario_id,
            model=self._config.model,
            num_messages=len(messages),
        )

        start = time.monotonic()
        try:
            response = await litellm.acompletion(**self._request_kwargs(messages))
        except Exception as exc:
            status_code = None if _is_transport_failure(exc) else _status_code_of(exc)
            self._observer.backend_call_failed(
                scenario_id=self._scenario_id,
                reason=str(exc),
                status_code=status_code,
            )
            if status_code is not None and not 200 <= status_code < 300:
                raise BackendStatusError(status_code=status_code, reason=str(exc)) from exc
            raise BackendInvocationError(reason=str(exc)) from exc

        duration_ms = int((time.monotonic() - start) * 1000)

        try:
            reply = _first_choice_content(response)
        except (AttributeError, IndexError, KeyError, TypeError) as exc:
            reason = f"malformed completion response: {exc!r}"
            self._observer.backend_call_failed(
                scenario_id=self._scenario_id,
                reason=reason,
                status_code=None,
            )
            raise BackendInvocationError(reason=reason) from exc

        self._observer.backend_call_completed(
            scenario_id=self._scenario_id,
            duration_ms=duration_ms,
            reply_chars=len(reply),
        )
        return reply

    def _request_kwargs(self, messages: list[ChatMessage]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self._config.model,
            "messages": [m.model_dump() for m in messages],
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "api_key": self._config.api_key,
            "num_retries": 0,
        }
        if self._config.api_base is not None:
            kwargs["api_base"] = self._config.api_base
        if self._config.timeout_seconds is not None:
            kwargs["timeout"] = self._config.timeout_seconds
        return kwargs


def _first_choice_content(response: Any) -> str:
    """Return choices[0].message.content, treating a missing/None content as ''."""
    choices = response.choices
    if not choices:
        raise IndexError("response has no choices")
    message = choices[0].message
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else ""


def _status_code_of(exc: Exception) -> int | None:
    status_code = getattr(exc, "status_code", None)
    return status_code if isinstance(status_code, int) else None


# litellm.Timeout and litellm.APIConnectionError both carry a synthetic
# status_code (408 / 500) although no HTTP response was received.
_TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (
    litellm.Timeout,
    litellm.APIConnectionError,
    openai.APIConnectionError,
    TimeoutError,
    ConnectionError,
)


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _is_transport_failure(exc: Exception) -> bool:
    """True when the gateway never answered.

    LiteLLM re-raises an unreachable gateway as InternalServerError (500); the
    underlying connection error survives only in the exception chain.
    """
    return any(isinstance(link, _TRANSPORT_ERRORS) for link in _exception_chain(exc))
