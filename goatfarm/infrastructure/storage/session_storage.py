"""Session storage adapters: a JSON file on disk, or a plain dict.

File layout:
    <session_file>   {"token": "...", "user": "{\"id\": ...}"}
"""

import json
import logging
from pathlib import Path

from goatfarm.application.interfaces import SessionStorage

logger = logging.getLogger(__name__)


class JsonFileSessionStorage(SessionStorage):
    """Infrastructure adapter persisting session keys in a small JSON file."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read session file %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring session file %s: not a JSON object", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _save(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2, sort_keys=True), "utf-8")

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        if data:
            self._save(data)
        else:
            self._path.unlink(missing_ok=True)
            logger.debug("Removed empty session file %s", self._path)


class InMemorySessionStorage(SessionStorage):
    """Ephemeral storage; the session ends with the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
