"""Runtime configuration.

Settings are read from environment variables (a ``.env`` file is loaded by
the entry points with python-dotenv). Nothing here talks to the network or
the filesystem beyond resolving paths.
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationError

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_HISTORY_DIR = "~/.kalyana"


class GatewaySettings(BaseModel):
    """Configuration of the stateless gateway.

    Environment variables:
        ANTHROPIC_API_KEY: Upstream credential (required for relaying)
        ANTHROPIC_MODEL: Upstream model (default: claude-sonnet-4-20250514)
        ANTHROPIC_BASE_URL: Optional custom API base URL
        KALYANA_MAX_TOKENS: Max output tokens per reply (default: 1024)
        KALYANA_PERSONA_FILE: Optional persona prompt override
        KALYANA_HOST / KALYANA_PORT: Bind address for ``kalyana serve``
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = Field(default=None, description="Anthropic API key")
    model: str = Field(default=DEFAULT_MODEL, description="Upstream model name")
    base_url: str | None = Field(default=None, description="Custom API base URL")
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=1, description="Max output tokens")
    persona_file: Path | None = Field(default=None, description="Persona prompt override")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8888, ge=1, le=65535)

    @classmethod
    def from_env(cls) -> "GatewaySettings":
        persona = os.getenv("KALYANA_PERSONA_FILE")
        try:
            return cls(
                api_key=os.getenv("ANTHROPIC_API_KEY") or None,
                model=os.getenv("ANTHROPIC_MODEL", DEFAULT_MODEL),
                base_url=os.getenv("ANTHROPIC_BASE_URL") or None,
                max_tokens=os.getenv("KALYANA_MAX_TOKENS", str(DEFAULT_MAX_TOKENS)),
                persona_file=Path(persona) if persona else None,
                host=os.getenv("KALYANA_HOST", "127.0.0.1"),
                port=os.getenv("KALYANA_PORT", "8888"),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid gateway configuration: {e}") from e


class ClientSettings(BaseModel):
    """Configuration of the chat client.

    Environment variables:
        KALYANA_GATEWAY_URL: Gateway endpoint; unset runs the gateway in process
        KALYANA_HISTORY_BACKEND: "json" (default) or "memory"
        KALYANA_HISTORY_DIR: Directory holding the history record (default: ~/.kalyana)
        KALYANA_LOG_LEVEL: Log level (default: INFO)
    """

    model_config = ConfigDict(frozen=True)

    gateway_url: str | None = None
    history_backend: Literal["json", "memory"] = "json"
    history_dir: Path = Field(default_factory=lambda: Path(DEFAULT_HISTORY_DIR).expanduser())
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ClientSettings":
        try:
            return cls(
                gateway_url=os.getenv("KALYANA_GATEWAY_URL") or None,
                history_backend=os.getenv("KALYANA_HISTORY_BACKEND", "json"),
                history_dir=Path(os.getenv("KALYANA_HISTORY_DIR", DEFAULT_HISTORY_DIR)).expanduser(),
                log_level=os.getenv("KALYANA_LOG_LEVEL", "INFO"),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e

    @property
    def log_file(self) -> Path:
        return self.history_dir / "kalyana.log"
