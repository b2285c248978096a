"""
Key-Value Stores

Persistence backends for small JSON blobs such as the speed history.
"""

import copy
import json
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from config.logging_config import get_logger
from ..errors import PersistenceError
from .base import KeyValueStore

logger = get_logger(__name__)


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store; values are deep-copied on the way in and out."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Optional[Any]:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON document on disk.

    Every set() rewrites the whole document through a temporary file and an
    atomic rename, so a crash never leaves a half-written file behind.
    Concurrent writers in other processes are not coordinated: last writer
    wins.

    Reads and writes are synchronous and run on the caller's thread. The
    speed tracker calls set() once per completed provider call, so inside the
    event loop each save blocks the loop for one small write of at most
    STATS_MAX_TASK_RECORDS task records.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Failed to read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceError(f"Invalid store file {self.path}: expected a JSON object")
        return data

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(tmp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.path)
            except (OSError, TypeError, ValueError) as e:
                raise PersistenceError(f"Failed to write {self.path}: {e}") from e
            logger.debug(f"Saved key '{key}' to {self.path}")
