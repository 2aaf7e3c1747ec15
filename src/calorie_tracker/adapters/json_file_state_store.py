"""State store that keeps one JSON file per key on local disk."""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from calorie_tracker.errors import PersistenceError
from calorie_tracker.services.ledger import StateStore


@dataclass
class JsonFileStateStore(StateStore):
    """Local filesystem implementation of the state store."""

    directory: Path

    def read(self, key: str) -> object | None:
        """Return the decoded value for a key, or None if never written."""
        path = self._path(key)
        try:
            with path.open(encoding="utf-8") as handle:
                return json.load(handle)
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Failed to read {path}") from exc

    def write(self, key: str, value: object) -> None:
        """Atomically replace the file for a key."""
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        except OSError as exc:
            raise PersistenceError(f"Failed to write {path}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(value, handle, ensure_ascii=False)
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write {path}") from exc

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"
