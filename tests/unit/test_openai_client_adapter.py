from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from app.analysis.exceptions import AnalysisNetworkError, AnalysisResponseError
from app.analysis.openai_client_adapter import OpenAIClientAdapter


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _complete(mock_client: MagicMock) -> str:
    with patch(
        "app.analysis.openai_client_adapter.openai.OpenAI",
        return_value=mock_client,
    ):
        adapter = OpenAIClientAdapter(api_key="k", timeout_seconds=30, base_url=None)
        return adapter.create_chat_completion(
            model="gpt-4",
            temperature=0.7,
            max_tokens=2500,
            system_prompt="system",
            user_prompt="user",
        )


class TestOpenAIClientAdapter:
    def test_returns_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("Great resume")

        assert _complete(mock_client) == "Great resume"

    def test_sends_generation_limits_and_messages(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("ok")

        _complete(mock_client)

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 2500
        assert kwargs["messages"] == [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "user"},
        ]

    def test_disables_sdk_retries(self) -> None:
        with patch("app.analysis.openai_client_adapter.openai.OpenAI") as mock_cls:
            OpenAIClientAdapter(api_key="k", timeout_seconds=12, base_url="http://x/v1")
        mock_cls.assert_called_once_with(
            api_key="k", timeout=12, base_url="http://x/v1", max_retries=0
        )

    def test_raises_response_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)

        with pytest.raises(AnalysisResponseError, match="empty response"):
            _complete(mock_client)

    def test_raises_response_error_for_blank_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("  \n")

        with pytest.raises(AnalysisResponseError, match="empty response"):
            _complete(mock_client)

    def test_raises_response_error_without_choices(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = MagicMock(choices=[])

        with pytest.raises(AnalysisResponseError, match="no choices"):
            _complete(mock_client)

    def test_raises_network_error_on_connection_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )

        with pytest.raises(AnalysisNetworkError, match="network error"):
            _complete(mock_client)

    def test_raises_network_error_on_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.TimeoutException("timeout")

        with pytest.raises(AnalysisNetworkError, match="network error"):
            _complete(mock_client)

    def test_raises_network_error_on_quota_exhaustion(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.RateLimitError(
            message="insufficient_quota",
            response=httpx.Response(429, request=httpx.Request("POST", "https://api.openai.com")),
            body=None,
        )

        with pytest.raises(AnalysisNetworkError, match="quota exceeded"):
            _complete(mock_client)

    def test_raises_network_error_on_api_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIError(
            message="server error",
            request=MagicMock(),
            body=None,
        )

        with pytest.raises(AnalysisNetworkError, match="API error"):
            _complete(mock_client)
