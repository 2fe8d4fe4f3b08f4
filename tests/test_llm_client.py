"""Tests for the Groq completion client wrapper."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from table_agent.config import Settings
from table_agent.llm_client import GroqCompletionClient, extract_content


def completion(content: str):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestExtractContent:
    def test_message_shape(self) -> None:
        assert extract_content(completion('{"action": "none"}')) == '{"action": "none"}'

    def test_text_shape(self) -> None:
        assert extract_content(SimpleNamespace(choices=[SimpleNamespace(message=None, text="hi")])) == "hi"

    def test_no_choices(self) -> None:
        assert extract_content(SimpleNamespace(choices=[])) == ""


class TestGroqCompletionClient:
    @pytest.mark.asyncio
    async def test_sends_low_temperature_bounded_request(self) -> None:
        sdk = MagicMock()
        sdk.chat.completions.create = AsyncMock(return_value=completion("{}"))
        client = GroqCompletionClient(api_key="gsk_test", client=sdk)

        assert await client.complete("system", "user") == "{}"

        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "llama-3.1-8b-instant"
        assert kwargs["temperature"] == 0.1
        assert kwargs["max_completion_tokens"] == 500
        assert kwargs["messages"] == [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "user"},
        ]

    def test_from_settings(self) -> None:
        client = GroqCompletionClient.from_settings(
            Settings(groq_api_key="gsk_test", model="llama-3.3-70b-versatile", max_tokens=200)
        )
        assert client.model == "llama-3.3-70b-versatile"
        assert client.max_tokens == 200
