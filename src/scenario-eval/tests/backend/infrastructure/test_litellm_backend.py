"""Tests for LiteLLMChatBackend infrastructure implementation."""

from unittest.mock import AsyncMock, MagicMock, patch

import litellm
import openai
import pytest

from scenario_eval.backend.domain.message import ChatMessage
from scenario_eval.backend.infrastructure.errors import (
    BackendInvocationError,
    BackendStatusError,
)
from scenario_eval.backend.infrastructure.litellm_backend import LiteLLMChatBackend
from scenario_eval.config.domain.backend import BackendConfig
from tests.backend.fake_observer import FakeBackendObserver

_ACOMPLETION = "scenario_eval.backend.infrastructure.litellm_backend.litellm.acompletion"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


_MODEL = "openai/google/gemini-2.5-flash"


def _make_unreachable_gateway_error() -> litellm.InternalServerError:
    """Build the 500 LiteLLM raises when the gateway refuses the connection.

    The original connection error is only reachable through the exception chain.
    """
    try:
        try:
            raise openai.APIConnectionError(request=MagicMock())
        except openai.APIConnectionError:
            raise litellm.InternalServerError(
                message="litellm.InternalServerError: Connection error.",
                llm_provider="openai",
                model=_MODEL,
            )
    except litellm.InternalServerError as exc:
        return exc


def _make_config(
    api_base: str | None = "https://gateway.example.test/v1",
    timeout_seconds: float | None = None,
) -> BackendConfig:
    return BackendConfig(
        model=_MODEL,
        api_key="secret",
        api_base=api_base,
        timeout_seconds=timeout_seconds,
    )


def _make_backend(
    config: BackendConfig | None = None,
    scenario_id: str = "s1",
) -> tuple[LiteLLMChatBackend, FakeBackendObserver]:
    observer = FakeBackendObserver()
    backend = LiteLLMChatBackend(
        config=config if config is not None else _make_config(),
        scenario_id=scenario_id,
        observer=observer,
    )
    return backend, observer


def _make_messages() -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content="Tu es une conseillère."),
        ChatMessage(role="user", content="Bonjour."),
    ]


def _make_acompletion_response(content: object) -> MagicMock:
    """Build a mock litellm response object with the given message content."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


# ---------------------------------------------------------------------------
# complete() — success path
# ---------------------------------------------------------------------------


class TestCompleteSuccess:
    async def test_returns_first_choice_content(self) -> None:
        backend, _ = _make_backend()

        with patch(
            _ACOMPLETION,
            new=AsyncMock(return_value=_make_acompletion_response("Bonjour !")),
        ):
            reply = await backend.complete(_make_messages())

        assert reply == "Bonjour !"

    async def test_none_content_becomes_empty_reply(self) -> None:
        backend, observer = _make_backend()

        with patch(
            _ACOMPLETION,
            new=AsyncMock(return_value=_make_acompletion_response(None)),
        ):
            reply = await backend.complete(_make_messages())

        assert reply == ""
        assert observer.completed[0].reply_chars == 0

    async def test_sends_configured_request(self) -> None:
        backend, _ = _make_backend(config=_make_config(timeout_seconds=12.5))
        mock = AsyncMock(return_value=_make_acompletion_response("ok"))

        with patch(_ACOMPLETION, new=mock):
            await backend.complete(_make_messages())

        kwargs = mock.await_args.kwargs
        assert kwargs["model"] == "openai/google/gemini-2.5-flash"
        assert kwargs["messages"] == [
            {"role": "system", "content": "Tu es une conseillère."},
            {"role": "user", "content": "Bonjour."},
        ]
        assert kwargs["temperature"] == pytest.approx(0.7)
        assert kwargs["max_tokens"] == 500
        assert kwargs["api_key"] == "secret"
        assert kwargs["api_base"] == "https://gateway.example.test/v1"
        assert kwargs["timeout"] == pytest.approx(12.5)
        assert kwargs["num_retries"] == 0

    async def test_optional_settings_omitted_when_unset(self) -> None:
        backend, _ = _make_backend(config=_make_config(api_base=None))
        mock = AsyncMock(return_value=_make_acompletion_response("ok"))

        with patch(_ACOMPLETION, new=mock):
            await backend.complete(_make_messages())

        kwargs = mock.await_args.kwargs
        assert "api_base" not in kwargs
        assert "timeout" not in kwargs

    async def test_emits_started_and_completed_events(self) -> None:
        backend, observer = _make_backend(scenario_id="dispute")

        with patch(
            _ACOMPLETION,
            new=AsyncMock(return_value=_make_acompletion_response("Bonjour !")),
        ):
            await backend.complete(_make_messages())

        assert len(observer.started) == 1
        assert observer.started[0].scenario_id == "dispute"
        assert observer.started[0].model == "openai/google/gemini-2.5-flash"
        assert observer.started[0].num_messages == 2
        assert len(observer.completed) == 1
        assert observer.completed[0].reply_chars == len("Bonjour !")
        assert observer.completed[0].duration_ms >= 0
        assert observer.failed == []


# ---------------------------------------------------------------------------
# complete() — failure paths
# ---------------------------------------------------------------------------


class TestCompleteFailure:
    async def test_rate_limit_raises_backend_status_error(self) -> None:
        backend, observer = _make_backend()
        error = litellm.RateLimitError(
            message="rate limited", llm_provider="openai", model=_MODEL
        )

        with patch(_ACOMPLETION, new=AsyncMock(side_effect=error)):
            with pytest.raises(BackendStatusError) as exc_info:
                await backend.complete(_make_messages())

        assert exc_info.value.status_code == 429
        assert "status 429" in str(exc_info.value)
        assert observer.failed[0].status_code == 429
        assert observer.completed == []

    async def test_service_unavailable_raises_backend_status_error(self) -> None:
        backend, _ = _make_backend()
        error = litellm.ServiceUnavailableError(
            message="overloaded", llm_provider="openai", model=_MODEL
        )

        with patch(_ACOMPLETION, new=AsyncMock(side_effect=error)):
            with pytest.raises(BackendStatusError) as exc_info:
                await backend.complete(_make_messages())

        assert exc_info.value.status_code == 503

    async def test_litellm_timeout_is_not_a_status_error(self) -> None:
        backend, observer = _make_backend(config=_make_config(timeout_seconds=1))
        error = litellm.Timeout(message="timed out", model=_MODEL, llm_provider="openai")

        with patch(_ACOMPLETION, new=AsyncMock(side_effect=error)):
            with pytest.raises(BackendInvocationError, match="timed out") as exc_info:
                await backend.complete(_make_messages())

        assert not isinstance(exc_info.value, BackendStatusError)
        assert "status 408" not in str(exc_info.value)
        assert observer.failed[0].status_code is None

    async def test_litellm_connection_error_is_not_a_status_error(self) -> None:
        backend, observer = _make_backend()
        error = litellm.APIConnectionError(
            message="Connection error.", llm_provider="openai", model=_MODEL
        )

        with patch(_ACOMPLETION, new=AsyncMock(side_effect=error)):
            with pytest.raises(BackendInvocationError) as exc_info:
                await backend.complete(_make_messages())

        assert not isinstance(exc_info.value, BackendStatusError)
        assert str(exc_info.value).startswith("Failed to invoke backend")
        assert observer.failed[0].status_code is None

    async def test_unreachable_gateway_reported_as_500_is_not_a_status_error(
        self,
    ) -> None:
        backend, observer = _make_backend()

        with patch(
            _ACOMPLETION,
            new=AsyncMock(side_effect=_make_unreachable_gateway_error()),
        ):
            with pytest.raises(BackendInvocationError) as exc_info:
                await backend.complete(_make_messages())

        assert not isinstance(exc_info.value, BackendStatusError)
        assert observer.failed[0].status_code is None

    async def test_plain_exception_raises_backend_invocation_error(self) -> None:
        backend, _ = _make_backend()

        with patch(_ACOMPLETION, new=AsyncMock(side_effect=ValueError("bad model"))):
            with pytest.raises(BackendInvocationError, match="bad model") as exc_info:
                await backend.complete(_make_messages())

        assert not isinstance(exc_info.value, BackendStatusError)

    async def test_response_without_choices_is_malformed(self) -> None:
        backend, observer = _make_backend()
        response = MagicMock()
        response.choices = []

        with patch(_ACOMPLETION, new=AsyncMock(return_value=response)):
            with pytest.raises(BackendInvocationError, match="malformed"):
                await backend.complete(_make_messages())

        assert len(observer.failed) == 1
        assert observer.completed == []
