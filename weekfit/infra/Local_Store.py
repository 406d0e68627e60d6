"""Local JSON key-value store.

Stands in for the browser's localStorage: when the hosted backend is not
configured or a table is missing, repositories keep their copy here under
keys such as ``menu_<uid>`` or ``progress_<uid>``.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

from weekfit.utilities.config import LOCAL_STORE_FILE

logger = logging.getLogger(__name__)


class LocalStore:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or LOCAL_STORE_FILE)
        self._lock = Lock()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in local store {self.path}: {e}")
            return {}

    def _atomic_write(self, data: Dict[str, Any]) -> None:
        os.makedirs(self.path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".store_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False, default=str)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._atomic_write(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._atomic_write(data)

    def keys(self):
        with self._lock:
            return list(self._load().keys())
