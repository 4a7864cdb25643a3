"""In-memory history backend.

Simple dict-based storage for session-only history.
Data is lost when the application exits.
"""

from .base import MAX_STORED_TURNS, HistoryStore
from .json_file import DEFAULT_KEY


class InMemoryHistoryStore(HistoryStore):
    """In-memory history (session-only).

    Stores the same encoded payload a file backend would, so corrupt
    records can be simulated by writing to ``records`` directly.
    """

    def __init__(self, key: str = DEFAULT_KEY, max_turns: int = MAX_STORED_TURNS):
        super().__init__(max_turns=max_turns)
        self._key = key
        self.records: dict[str, str] = {}

    def _read(self) -> str | None:
        return self.records.get(self._key)

    def _write(self, payload: str) -> None:
        self.records[self._key] = payload

    def _delete(self) -> None:
        self.records.pop(self._key, None)

    @property
    def backend_type(self) -> str:
        return "memory"
