"""Conversation history module for kalyana.

Persists the most recent turns of the conversation between runs.
"""

from .base import MAX_STORED_TURNS, HistoryStore
from .factory import create_history_store
from .in_memory import InMemoryHistoryStore
from .json_file import JsonFileHistoryStore
from .models import Role, Turn

__all__ = [
    "MAX_STORED_TURNS",
    "HistoryStore",
    "InMemoryHistoryStore",
    "JsonFileHistoryStore",
    "Role",
    "Turn",
    "create_history_store",
]
