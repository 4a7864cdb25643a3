"""How the session reaches the gateway.

Hides whether the gateway is a remote HTTP endpoint or an in-process
object. Every transport failure surfaces as GatewayFailure so the
controller has a single error to handle.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import httpx

from ..exceptions import GatewayFailure
from ..gateway import Gateway
from ..memory import Turn

logger = logging.getLogger(__name__)


def reply_text(body: dict[str, Any]) -> str:
    """Extract the reply text from an upstream message object.

    Returns the ``text`` of the first content block, or "" when absent.
    """
    content = body.get("content") if isinstance(body, dict) else None
    if isinstance(content, list) and content and isinstance(content[0], dict):
        return content[0].get("text") or ""
    return ""


class GatewayClient(ABC):
    """Abstract gateway client used by the session controller."""

    @abstractmethod
    async def send(self, messages: Sequence[Turn]) -> dict[str, Any]:
        """Send turns to the gateway and return the success body.

        Raises:
            GatewayFailure: The call failed or returned a non-success status
        """

    async def reply(self, messages: Sequence[Turn]) -> str:
        """Send turns and return the reply text."""
        return reply_text(await self.send(messages))

    async def close(self) -> None:
        """Release transport resources."""

    async def __aenter__(self) -> "GatewayClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


class HttpGatewayClient(GatewayClient):
    """Posts turns to a gateway URL with httpx."""

    def __init__(
        self,
        url: str,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            url: Full URL of the gateway chat endpoint
            timeout: Request timeout in seconds
            client: Preconfigured httpx client (owned by the caller)
        """
        self._url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def url(self) -> str:
        return self._url

    async def send(self, messages: Sequence[Turn]) -> dict[str, Any]:
        payload = {"messages": [m.to_wire() for m in messages]}
        try:
            resp = await self._client.post(self._url, json=payload)
        except httpx.HTTPError as e:
            raise GatewayFailure(None, str(e) or "Network error") from e
        if resp.status_code >= 400:
            raise GatewayFailure(resp.status_code, resp.text or "Network error")
        try:
            data = resp.json()
        except ValueError as e:
            raise GatewayFailure(resp.status_code, "Gateway returned invalid JSON") from e
        if not isinstance(data, dict):
            raise GatewayFailure(resp.status_code, "Gateway returned an unexpected body")
        return data

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class LocalGatewayClient(GatewayClient):
    """Calls a Gateway object in the same process."""

    def __init__(self, gateway: Gateway):
        self._gateway = gateway

    async def send(self, messages: Sequence[Turn]) -> dict[str, Any]:
        result = await self._gateway.relay({"messages": [m.to_wire() for m in messages]})
        if not result.ok:
            raise GatewayFailure(result.status, str(result.body.get("error") or "Gateway error"))
        return result.body

    async def close(self) -> None:
        await self._gateway.close()
