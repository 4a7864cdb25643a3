from .base import LLMProvider
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse
from .providers import AnthropicProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "ChatMessage",
    "LLMResponse",
    "AnthropicProvider",
]
