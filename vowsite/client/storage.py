"""
Durable key/value storage for the display client, kept in one JSON file.
Survives restarts the way browser localStorage survives page reloads.
"""
import json
import logging
import os
import tempfile
import threading
from typing import Any

logger = logging.getLogger(__name__)

LANGUAGE_KEY = "vowsLanguage"
DATA_KEY = "vowsData"
UNLOCKED_KEY = "vowsUnlocked"


class LocalStorage:
    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._data: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            self._data = data if isinstance(data, dict) else {}
        except FileNotFoundError:
            self._data = {}
        except (OSError, ValueError) as e:
            logger.warning("local_storage_unreadable", extra={"error": str(e), "path": self.path})
            self._data = {}
        return self._data

    def _save(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=directory, prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._load()[key] = value
            self._save()

    def remove(self, key: str) -> None:
        with self._lock:
            if self._load().pop(key, None) is not None:
                self._save()
