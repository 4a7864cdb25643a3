"""JSON file history backend.

Keeps one keyed record, ``<root>/<key>.json``, holding the JSON-encoded
turn list. Writes go through a temporary file and ``os.replace`` so a crash
mid-write leaves the previous record intact.
"""

import os
from pathlib import Path
from uuid import uuid4

from .base import MAX_STORED_TURNS, HistoryStore

DEFAULT_KEY = "kalyana_history"


class JsonFileHistoryStore(HistoryStore):
    """File-backed history that survives restarts."""

    def __init__(
        self,
        root: str | Path = "~/.kalyana",
        key: str = DEFAULT_KEY,
        max_turns: int = MAX_STORED_TURNS,
    ):
        super().__init__(max_turns=max_turns)
        self._root = Path(root).expanduser()
        self._key = key

    @property
    def path(self) -> Path:
        return self._root / f"{self._key}.json"

    def _read(self) -> str | None:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def _write(self, payload: str) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        tmp_path = self._root / f"{self._key}.{uuid4().hex}.tmp"
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

    def _delete(self) -> None:
        self.path.unlink(missing_ok=True)

    @property
    def backend_type(self) -> str:
        return "json"
