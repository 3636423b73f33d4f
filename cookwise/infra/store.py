"""JSON file store shared by all repositories.

All collections live in one file so that a multi-record change (slot
replacement, recipe + new ingredients, pantry merge) is written in a single
atomic file replace.
"""
import json
import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from threading import Lock, RLock
from typing import Dict

from cookwise.domain.errors import StoreError
from cookwise.infra.paths import STORE_FILE

logger = logging.getLogger(__name__)

COLLECTIONS = ("ingredients", "recipes", "meal_plans", "pantry_items", "shopping_lists")

_locks_guard = Lock()
_locks: Dict[str, RLock] = {}


def _lock_for(path: Path) -> RLock:
    key = str(path.resolve())
    with _locks_guard:
        if key not in _locks:
            _locks[key] = RLock()
        return _locks[key]


class JsonStore:
    def __init__(self, path: Path = STORE_FILE):
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {name: [] for name in COLLECTIONS}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f) or {}
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in store file %s: %s", self.path, e)
            raise StoreError(f"Invalid JSON in store file {self.path}") from e
        for name in COLLECTIONS:
            data.setdefault(name, [])
        return data

    def _atomic_write(self, data: dict):
        os.makedirs(self.path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".kitchen_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, str(self.path))
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def read(self) -> dict:
        """Snapshot of all collections."""
        with self._lock:
            return self._load()

    @contextmanager
    def transaction(self):
        """Yield the collections for modification; written back only if the block succeeds.

        Transactions on the same file are serialized within the process.
        """
        with self._lock:
            data = self._load()
            yield data
            self._atomic_write(data)


__all__ = ["JsonStore", "COLLECTIONS"]
