"""Anthropic Claude LLM provider implementation.

Uses the official Anthropic Python SDK for async chat completions.
Reference: https://github.com/anthropics/anthropic-sdk-python
"""

from typing import Any

from anthropic import APIConnectionError, APIStatusError, AsyncAnthropic

from ...exceptions import UpstreamError
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse


def _error_message(exc: APIStatusError) -> str:
    """Pull the API's own error message out of a status error."""
    body = exc.body
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return "Anthropic API error"


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM provider implementation.

    Hidden design decisions:
    - Anthropic API client initialization
    - Message format conversion (system message handling)
    - Mapping SDK errors onto UpstreamError with the upstream status
    - Retries are disabled: one upstream call per completion
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            model: Default model to use (default: claude-sonnet-4-20250514)
            base_url: Optional custom API base URL
            **client_kwargs: Additional kwargs for AsyncAnthropic client
        """
        self._model = model
        client_kwargs.setdefault("max_retries", 0)
        self._client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Anthropic Claude.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            system: System prompt; a "system" message in ``messages`` also works
            temperature: Sampling temperature (omitted when None)
            max_tokens: Maximum tokens to generate (default: 1024)
            **kwargs: Additional Anthropic-specific parameters

        Returns:
            LLMResponse with generated content and the raw message object

        Raises:
            UpstreamError: On a non-success status or a connection failure
        """
        model_to_use = model or self._model

        # Extract system message and convert to Anthropic format
        system_message = system
        anthropic_messages = []

        for msg in messages:
            if msg.role == "system":
                system_message = msg.content
            else:
                anthropic_messages.append({
                    "role": msg.role,
                    "content": msg.content
                })

        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": anthropic_messages,
            "max_tokens": max_tokens or 1024,  # Anthropic requires max_tokens
            **kwargs
        }

        if system_message:
            request_params["system"] = system_message
        if temperature is not None:
            request_params["temperature"] = temperature

        try:
            response = await self._client.messages.create(**request_params)
        except APIStatusError as e:
            raise UpstreamError(e.status_code, _error_message(e)) from e
        except APIConnectionError as e:
            raise UpstreamError(500, str(e) or "Unexpected error") from e

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens
            }

        # Extract content (handle multiple content blocks)
        content = ""
        for block in response.content:
            if hasattr(block, "text"):
                content += block.text

        return LLMResponse(
            content=content,
            model=response.model,
            usage=usage,
            raw=response.model_dump(mode="json"),
        )

    async def close(self) -> None:
        """Close the Anthropic client."""
        await self._client.close()
