"""Tests for the Anthropic provider."""
from types import SimpleNamespace

import httpx
import pytest
from anthropic import APIConnectionError, RateLimitError

from kalyana.exceptions import UpstreamError
from kalyana.llm import AnthropicProvider, ChatMessage, create_llm_provider

API_URL = "https://api.anthropic.com/v1/messages"


class FakeMessage:
    """Stand-in for an SDK Message object."""

    def __init__(self, text: str):
        self.content = [SimpleNamespace(type="text", text=text)]
        self.model = "claude-test"
        self.usage = SimpleNamespace(input_tokens=3, output_tokens=5)

    def model_dump(self, mode: str = "python") -> dict:
        return {
            "type": "message",
            "role": "assistant",
            "model": self.model,
            "content": [{"type": "text", "text": self.content[0].text}],
        }


@pytest.fixture
def provider():
    return AnthropicProvider(api_key="sk-ant-test", model="claude-test")


def stub_create(provider, monkeypatch, result=None, error=None):
    """Replace messages.create and return the list of captured kwargs."""
    calls = []

    async def create(**kwargs):
        calls.append(kwargs)
        if error is not None:
            raise error
        return result

    monkeypatch.setattr(provider._client.messages, "create", create)
    return calls


class TestAnthropicProvider:
    """Tests for AnthropicProvider.chat_completion."""

    @pytest.mark.asyncio
    async def test_completion(self, provider, monkeypatch):
        calls = stub_create(provider, monkeypatch, result=FakeMessage("Breathe."))

        response = await provider.chat_completion(
            [ChatMessage(role="user", content="Hello")],
            system="You are a guide.",
            max_tokens=1024,
        )

        assert response.content == "Breathe."
        assert response.usage["total_tokens"] == 8
        assert response.raw["content"][0]["text"] == "Breathe."
        assert calls == [{
            "model": "claude-test",
            "messages": [{"role": "user", "content": "Hello"}],
            "max_tokens": 1024,
            "system": "You are a guide.",
        }]

    @pytest.mark.asyncio
    async def test_system_message_is_extracted(self, provider, monkeypatch):
        calls = stub_create(provider, monkeypatch, result=FakeMessage("ok"))

        await provider.chat_completion([
            ChatMessage(role="system", content="Be brief."),
            ChatMessage(role="user", content="Hello"),
        ])

        assert calls[0]["system"] == "Be brief."
        assert calls[0]["messages"] == [{"role": "user", "content": "Hello"}]
        assert calls[0]["max_tokens"] == 1024
        assert "temperature" not in calls[0]

    @pytest.mark.asyncio
    async def test_status_error_is_mapped(self, provider, monkeypatch):
        """Test that the upstream status and message are preserved."""
        body = {"type": "error", "error": {"type": "rate_limit_error", "message": "Slow down"}}
        error = RateLimitError(
            "rate limited",
            response=httpx.Response(429, request=httpx.Request("POST", API_URL)),
            body=body,
        )
        stub_create(provider, monkeypatch, error=error)

        with pytest.raises(UpstreamError) as exc_info:
            await provider.chat_completion([ChatMessage(role="user", content="Hello")])

        assert exc_info.value.status == 429
        assert exc_info.value.message == "Slow down"

    @pytest.mark.asyncio
    async def test_status_error_without_message(self, provider, monkeypatch):
        error = RateLimitError(
            "rate limited",
            response=httpx.Response(429, request=httpx.Request("POST", API_URL)),
            body=None,
        )
        stub_create(provider, monkeypatch, error=error)

        with pytest.raises(UpstreamError) as exc_info:
            await provider.chat_completion([ChatMessage(role="user", content="Hello")])

        assert exc_info.value.message == "Anthropic API error"

    @pytest.mark.asyncio
    async def test_connection_error_is_500(self, provider, monkeypatch):
        error = APIConnectionError(request=httpx.Request("POST", API_URL))
        stub_create(provider, monkeypatch, error=error)

        with pytest.raises(UpstreamError) as exc_info:
            await provider.chat_completion([ChatMessage(role="user", content="Hello")])

        assert exc_info.value.status == 500


class TestLLMFactory:
    """Tests for create_llm_provider."""

    @pytest.mark.parametrize("name", ["anthropic", "claude", "Anthropic"])
    def test_create_anthropic(self, name):
        provider = create_llm_provider(name, api_key="sk-ant-test")
        assert isinstance(provider, AnthropicProvider)

    def test_requires_api_key(self):
        with pytest.raises(TypeError):
            create_llm_provider("anthropic")

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("openai", api_key="x")
