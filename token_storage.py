"""Persisted key/value storage for client-side state.

The bearer token lives here under AUTH_TOKEN_KEY. The client only ever reads
it; logging in and out is up to the caller.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

AUTH_TOKEN_KEY = "auth_token"

logger = logging.getLogger(__name__)


class TokenStorage(Protocol):
    """What the dispatcher needs from a storage backend."""

    def get_item(self, key: str) -> Optional[str]: ...


class MemoryStorage:
    """Process-local storage, mostly for tests and short-lived scripts."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """
    JSON file backed storage

    The file holds a flat object of string values. It is re-read on every
    lookup so a token written by another process is picked up.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Storage file {self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} must contain a JSON object")
        return data

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data), encoding="utf-8")
        os.replace(tmp, self.path)

    def get_item(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
        logger.debug("Stored %s in %s", key, self.path)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)
