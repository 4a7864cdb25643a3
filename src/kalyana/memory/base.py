"""Abstract base class for history storage backends.

This module defines the interface for persisting the conversation.
The abstraction hides:
- Where the single history record lives (file, memory)
- How writes are made safe against partial failure

The encode/decode path and the best-effort error policy live here so that
every backend truncates, validates and swallows failures the same way.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from .models import Turn

logger = logging.getLogger(__name__)

MAX_STORED_TURNS = 60

_turn_list = TypeAdapter(list[Turn])


class HistoryStore(ABC):
    """Best-effort store for the most recent turns of one conversation.

    ``load``, ``save`` and ``clear`` never raise: a corrupt or missing
    record loads as an empty history and failed writes are logged.
    """

    def __init__(self, max_turns: int = MAX_STORED_TURNS):
        if max_turns < 1:
            raise ValueError("max_turns must be at least 1")
        self._max_turns = max_turns

    @property
    def max_turns(self) -> int:
        return self._max_turns

    def load(self) -> list[Turn]:
        """Return the last saved turns, or an empty list."""
        try:
            raw = self._read()
        except (OSError, ValueError) as e:
            logger.warning("Could not read history (%s): %s", self.backend_type, e)
            return []
        if not raw:
            return []
        try:
            return _turn_list.validate_python(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.warning("Discarding unreadable history (%s): %s", self.backend_type, e)
            return []

    def save(self, turns: Sequence[Turn]) -> None:
        """Overwrite the record with the last ``max_turns`` turns."""
        trimmed = list(turns)[-self._max_turns:]
        payload = json.dumps([t.to_record() for t in trimmed], ensure_ascii=False)
        try:
            self._write(payload)
        except (OSError, ValueError) as e:
            logger.warning("Could not save history (%s): %s", self.backend_type, e)

    def clear(self) -> None:
        """Remove the stored record."""
        try:
            self._delete()
        except OSError as e:
            logger.warning("Could not clear history (%s): %s", self.backend_type, e)

    @abstractmethod
    def _read(self) -> str | None:
        """Return the raw stored payload, or None if nothing is stored."""

    @abstractmethod
    def _write(self, payload: str) -> None:
        """Replace the stored payload."""

    @abstractmethod
    def _delete(self) -> None:
        """Remove the stored payload if present."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
