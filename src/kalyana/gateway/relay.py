"""The relay operation.

A Gateway accepts a list of conversation turns, attaches the fixed persona
as the system instruction, makes exactly one upstream call and returns the
upstream message object (or its error) unchanged. It keeps no state between
calls; every deployment adapter goes through ``Gateway.relay``.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..config import DEFAULT_MAX_TOKENS, GatewaySettings
from ..exceptions import UpstreamError
from ..llm import ChatMessage, LLMProvider, create_llm_provider
from ..prompts import get_persona_prompt
from .models import RelayResult, WireTurn

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    "API key not configured. Set ANTHROPIC_API_KEY in the environment."
)

_wire_turns = TypeAdapter(list[WireTurn])


class Gateway:
    """Stateless forwarder between chat clients and the upstream model API."""

    def __init__(
        self,
        provider: LLMProvider | None,
        system_prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        model: str | None = None,
    ):
        """Initialize the gateway.

        Args:
            provider: Upstream provider; None means the credential is missing
            system_prompt: Persona text sent as the system instruction
            max_tokens: Bound on the reply size
            model: Upstream model override (None uses the provider default)
        """
        self._provider = provider
        self._system_prompt = system_prompt
        self._max_tokens = max_tokens
        self._model = model

    @classmethod
    def from_settings(cls, settings: GatewaySettings) -> "Gateway":
        """Build a gateway from settings; a missing key yields an unconfigured gateway."""
        provider = None
        if settings.api_key:
            provider = create_llm_provider(
                "anthropic",
                api_key=settings.api_key,
                model=settings.model,
                base_url=settings.base_url,
            )
        return cls(
            provider=provider,
            system_prompt=get_persona_prompt(settings.persona_file),
            max_tokens=settings.max_tokens,
        )

    @property
    def configured(self) -> bool:
        return self._provider is not None

    async def relay(
        self,
        payload: bytes | str | Mapping[str, Any] | None,
        method: str = "POST",
    ) -> RelayResult:
        """Forward one request body upstream.

        Args:
            payload: Raw request body, or an already decoded JSON object
            method: HTTP method of the incoming request

        Returns:
            RelayResult with status 200 and the upstream message object, or
            an error status with ``{"error": message}``
        """
        if method.upper() != "POST":
            return RelayResult.error(405, "Method not allowed")

        if self._provider is None:
            logger.error("Relay refused: ANTHROPIC_API_KEY is not set")
            return RelayResult.error(500, MISSING_KEY_MESSAGE)

        body = self._decode(payload)
        if body is None:
            return RelayResult.error(400, "Invalid JSON")

        messages = body.get("messages") if isinstance(body, Mapping) else None
        if not isinstance(messages, list):
            return RelayResult.error(400, "messages array required")

        try:
            turns = _wire_turns.validate_python(messages)
        except ValidationError as e:
            first = e.errors()[0]
            where = ".".join(str(part) for part in first["loc"])
            return RelayResult.error(400, f"invalid message: {where}: {first['msg']}")

        logger.info("Relaying %d message(s) upstream", len(turns))
        try:
            response = await self._provider.chat_completion(
                [ChatMessage(role=t.role, content=t.content) for t in turns],
                model=self._model,
                system=self._system_prompt,
                max_tokens=self._max_tokens,
            )
        except UpstreamError as e:
            logger.warning("Upstream failure %s: %s", e.status, e.message)
            return RelayResult.error(e.status, e.message)
        except Exception as e:
            logger.exception("Unexpected relay error")
            return RelayResult.error(500, str(e) or "Unexpected error")

        body_out = response.raw or {
            "type": "message",
            "role": "assistant",
            "model": response.model,
            "content": [{"type": "text", "text": response.content}],
        }
        return RelayResult(status=200, body=body_out)

    @staticmethod
    def _decode(payload: bytes | str | Mapping[str, Any] | None) -> Any:
        """Decode a request body; None signals a missing or unparseable payload."""
        if payload is None:
            return None
        if isinstance(payload, Mapping):
            return payload
        if isinstance(payload, bytes):
            try:
                payload = payload.decode("utf-8")
            except UnicodeDecodeError:
                return None
        if not payload.strip():
            return None
        try:
            return json.loads(payload)
        except json.JSONDecodeError:
            return None

    async def close(self) -> None:
        if self._provider is not None:
            await self._provider.close()

    async def __aenter__(self) -> "Gateway":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
