"""Pytest configuration and shared fixtures."""
import asyncio
from collections.abc import Sequence
from typing import Any

import pytest

from kalyana.exceptions import GatewayFailure
from kalyana.gateway import Gateway
from kalyana.llm import ChatMessage, LLMProvider, LLMResponse
from kalyana.memory import InMemoryHistoryStore, JsonFileHistoryStore, Turn
from kalyana.session import GatewayClient, SessionController, SessionPrompts

PERSONA = "You are a plain-spoken guide."


class FakeGatewayClient(GatewayClient):
    """Scripted gateway client.

    Each call pops the next scripted reply; an Exception instance is raised
    instead of returned. When ``gate`` is given, calls wait on it before
    answering so tests can hold a request in flight.
    """

    def __init__(self, replies: Sequence[Any] = (), gate: asyncio.Event | None = None):
        self.replies = list(replies)
        self.calls: list[list[Turn]] = []
        self.gate = gate
        self.closed = False

    async def send(self, messages: Sequence[Turn]) -> dict[str, Any]:
        self.calls.append(list(messages))
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0) if self.replies else "..."
        if isinstance(reply, Exception):
            raise reply
        return {"content": [{"type": "text", "text": reply}]}

    async def close(self) -> None:
        self.closed = True


class FakeProvider(LLMProvider):
    """LLM provider that records requests and returns a canned response."""

    def __init__(self, reply: str = "Sit with it.", error: Exception | None = None, raw: bool = True):
        self.reply = reply
        self.error = error
        self.raw = raw
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.requests.append({
            "messages": messages,
            "model": model,
            "system": system,
            "max_tokens": max_tokens,
        })
        if self.error is not None:
            raise self.error
        raw = {
            "id": "msg_test",
            "type": "message",
            "role": "assistant",
            "model": "claude-test",
            "content": [{"type": "text", "text": self.reply}],
        }
        return LLMResponse(content=self.reply, model="claude-test", raw=raw if self.raw else {})

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def prompts():
    """Short, recognisable lifecycle prompts."""
    return SessionPrompts(
        greeting="GREET",
        closing="CLOSE",
        fallback_greeting="Come. Sit.",
        fallback_closing="Go well.",
    )


@pytest.fixture
def memory_store():
    """Empty in-memory history store."""
    return InMemoryHistoryStore()


@pytest.fixture
def json_store(tmp_path):
    """Empty file-backed history store in a temporary directory."""
    return JsonFileHistoryStore(root=tmp_path / "history")


@pytest.fixture
def make_controller(memory_store, prompts):
    """Build a controller around a scripted gateway client."""
    def _make(replies: Sequence[Any] = (), gate: asyncio.Event | None = None, store=None):
        client = FakeGatewayClient(replies, gate=gate)
        controller = SessionController(client, store or memory_store, prompts=prompts)
        return controller, client
    return _make


@pytest.fixture
def failure():
    """A gateway failure as raised by clients."""
    return GatewayFailure(502, "upstream unavailable")


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def gateway(fake_provider):
    """Configured gateway backed by the fake provider."""
    return Gateway(provider=fake_provider, system_prompt=PERSONA)


@pytest.fixture
def sample_turns():
    """A short finished exchange."""
    return [
        Turn(role="assistant", content="What are you carrying?"),
        Turn(role="user", content="Worry about my father."),
        Turn(role="assistant", content="Worry is a guest.\n\n—\n\nAjahn Chah, Food for the Heart"),
    ]
