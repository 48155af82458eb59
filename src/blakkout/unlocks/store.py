"""store.py - where unlock state survives a restart.

a tiny key-value store of strings, like a browser's localStorage.
the registry writes one JSON string under one fixed key.
a corrupt file reads as empty. writes raise; the caller decides.
"""

import json
from pathlib import Path
from typing import Optional

from blakkout.log import warn
from blakkout.paths import ensure_dir


class MemoryStore:
    """in-process store. gone when the process is."""

    def __init__(self, data: dict = None):
        self._data: dict[str, str] = dict(data or {})

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str):
        self._data[key] = value

    def remove(self, key: str):
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStore:
    """key -> string store backed by one JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            warn("store", f"unreadable store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            warn("store", f"store {self.path} is not an object, ignoring")
            return {}
        return data

    def _save(self, data: dict):
        ensure_dir(self.path.parent)
        self.path.write_text(json.dumps(data, indent=2) + "\n")

    def read(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else json.dumps(value)

    def write(self, key: str, value: str):
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str):
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)

    def keys(self) -> list[str]:
        return list(self._load())
