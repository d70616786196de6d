from __future__ import annotations

import copy
import json
import os
import tempfile
import threading
from pathlib import Path

from entity_match.errors import StoreError


class InMemoryUsageStore:
    """Dict-backed store for tests and short-lived processes."""

    def __init__(self) -> None:
        self._data: dict[str, object] = {}

    def get(self, key: str) -> object | None:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: object) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonFileUsageStore:
    """Persists every key in one JSON object on disk.

    Writes go to a temp file in the same directory and are swapped in with
    ``os.replace``, so readers never see a half-written file.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> object | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: object) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def _read(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StoreError(f"{self._path}: invalid JSON: {exc}") from exc
        except OSError as exc:
            raise StoreError(f"{self._path}: cannot read usage store: {exc}") from exc
        if not isinstance(payload, dict):
            raise StoreError(f"{self._path}: expected a JSON object")
        return payload

    def _write(self, data: dict[str, object]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            os.unlink(tmp_name)
            raise
