"""Factory functions for CLI.

Centralizes creation of the history store, gateway and gateway client from
settings. Hides configuration details from command implementations.
"""

from rich.console import Console

from ..config import ClientSettings, GatewaySettings
from ..gateway import Gateway
from ..memory import HistoryStore, create_history_store
from ..session import GatewayClient, HttpGatewayClient, LocalGatewayClient

# Default console for output
_console = Console()


def get_history_store(settings: ClientSettings) -> HistoryStore:
    """Create the history store described by the client settings.

    Raises:
        ValueError: If the configured backend is unknown
    """
    return create_history_store(settings.history_backend, root=settings.history_dir)


def get_gateway(settings: GatewaySettings | None = None) -> Gateway:
    """Create a gateway from settings (the environment by default)."""
    return Gateway.from_settings(settings or GatewaySettings.from_env())


def get_gateway_client(
    settings: ClientSettings,
    console: Console | None = None,
) -> GatewayClient:
    """Create the client the session uses to reach the gateway.

    With KALYANA_GATEWAY_URL set the client posts over HTTP; otherwise the
    gateway runs in this process and needs ANTHROPIC_API_KEY.
    """
    con = console or _console
    if settings.gateway_url:
        return HttpGatewayClient(settings.gateway_url)

    gateway = get_gateway()
    if not gateway.configured:
        con.print(
            "[yellow]Warning: ANTHROPIC_API_KEY not set and no KALYANA_GATEWAY_URL; "
            "the guide will answer with fallback text only[/yellow]"
        )
    return LocalGatewayClient(gateway)
