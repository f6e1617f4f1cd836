"""Single-file string key-value storage with atomic whole-file replace."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

LOGGER = logging.getLogger(__name__)


class CorruptState(ValueError):
    """Persisted state exists but cannot be decoded."""


class KeyValueStorage:
    """String-valued keys kept in one JSON object on disk.

    Every ``set`` rewrites the whole file through a temp file and
    ``os.replace`` so readers see either the old or the new content.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as error:
            raise CorruptState(f"State file could not be read: {self.path}") from error
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as error:
            raise CorruptState(f"State file is not valid JSON: {self.path}") from error
        if not isinstance(data, dict) or not all(isinstance(value, str) for value in data.values()):
            raise CorruptState(f"State file must hold an object of string values: {self.path}")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=True, indent=2)
            os.replace(temp_name, self.path)
        except BaseException:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise
        LOGGER.debug("state written: path=%s keys=%s", self.path, len(data))

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except CorruptState:
                LOGGER.warning("overwriting unreadable state file: path=%s", self.path)
                data = {}
            data[key] = value
            self._write_all(data)
