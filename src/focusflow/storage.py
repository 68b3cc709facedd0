"""Synchronous key-value store persisted as a single JSON file.

Values are stored as strings, mirroring the browser storage the web client
keeps its timer durations in. Writes replace the whole file atomically so a
multi-key update is all-or-nothing.
"""

from __future__ import annotations

import json
import os
import tempfile
from json import JSONDecodeError
from pathlib import Path

from focusflow.errors import PersistenceError


class JsonKeyValueStore:
    """String key-value store backed by a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, JSONDecodeError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Cannot read {self.path}: expected a JSON object")
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def get(self, key: str) -> str | None:
        """Return the stored string for *key*, or None when absent."""
        return self._read().get(key)

    def items(self) -> dict[str, str]:
        """Return a copy of every stored entry."""
        return self._read()

    def set_many(self, values: dict[str, str]) -> None:
        """Write several entries in one atomic file replace."""
        try:
            current = self._read()
        except PersistenceError:
            # An unreadable file is overwritten with the new values only
            current = {}
        current.update({k: str(v) for k, v in values.items()})

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(current, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(f"Cannot write {self.path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        """Write a single entry."""
        self.set_many({key: value})
