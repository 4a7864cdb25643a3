"""
Kalyana: a Dhamma reflection companion.

A terminal chat client whose session controller keeps the conversation
locally, and a stateless gateway that relays it to the Anthropic API with a
fixed persona. Each module hides one design decision.
"""

__version__ = "0.1.0"

from .exceptions import ConfigurationError, GatewayFailure, KalyanaError
from .gateway import Gateway
from .memory import HistoryStore, Turn, create_history_store
from .session import Phase, SessionController, split_citation

__all__ = [
    "ConfigurationError",
    "Gateway",
    "GatewayFailure",
    "HistoryStore",
    "KalyanaError",
    "Phase",
    "SessionController",
    "Turn",
    "create_history_store",
    "split_citation",
]
