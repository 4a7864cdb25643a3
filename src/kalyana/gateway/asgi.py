"""FastAPI adapter for the gateway.

Exposes ``Gateway.relay`` over HTTP. The route accepts every common method
so that method validation stays inside ``relay``.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import GatewaySettings
from .relay import Gateway

CHAT_PATHS = ("/api/chat", "/.netlify/functions/chat")
_ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def create_app(gateway: Gateway | None = None) -> FastAPI:
    """Create the ASGI application.

    Args:
        gateway: Gateway to serve; built from the environment when omitted

    Returns:
        FastAPI application with the chat and health routes
    """
    if gateway is None:
        gateway = Gateway.from_settings(GatewaySettings.from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.gateway.close()

    app = FastAPI(title="Kalyana Gateway", version="0.1.0", lifespan=lifespan)
    app.state.gateway = gateway

    async def chat(request: Request) -> JSONResponse:
        body = await request.body()
        result = await request.app.state.gateway.relay(body, method=request.method)
        return JSONResponse(result.body, status_code=result.status)

    for path in CHAT_PATHS:
        app.add_api_route(path, chat, methods=_ROUTE_METHODS)

    @app.get("/health")
    async def health(request: Request) -> dict[str, object]:
        return {"status": "ok", "configured": request.app.state.gateway.configured}

    return app
