"""Serverless function adapter for the gateway.

``handler`` takes an API-gateway style event (``httpMethod``, ``body``,
``isBase64Encoded``) and returns ``{"statusCode", "headers", "body"}``.
Each invocation builds its own Gateway and closes it afterwards, since the
async HTTP client cannot outlive the event loop of one invocation.
"""

import asyncio
import base64
import binascii
import json
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv

from ..config import GatewaySettings
from .models import RelayResult
from .relay import Gateway

JSON_HEADERS = {"Content-Type": "application/json"}


@lru_cache(maxsize=1)
def _settings() -> GatewaySettings:
    load_dotenv()
    return GatewaySettings.from_env()


def _event_body(event: dict[str, Any]) -> bytes | str | None:
    body = event.get("body")
    if body is None or not event.get("isBase64Encoded"):
        return body
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError):
        return None


def _response(result: RelayResult) -> dict[str, Any]:
    return {
        "statusCode": result.status,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(result.body, ensure_ascii=False),
    }


async def handle_event(
    event: dict[str, Any],
    gateway: Gateway | None = None,
) -> dict[str, Any]:
    """Relay one serverless event.

    Args:
        event: Incoming event
        gateway: Gateway to use; a fresh one is built and closed when omitted
    """
    method = event.get("httpMethod") or event.get("method") or "GET"
    if gateway is not None:
        return _response(await gateway.relay(_event_body(event), method=method))

    async with Gateway.from_settings(_settings()) as fresh:
        return _response(await fresh.relay(_event_body(event), method=method))


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Synchronous entry point for function runtimes."""
    return asyncio.run(handle_event(event))
