from __future__ import annotations

from typing import Protocol


class UsageStore(Protocol):
    """Injected key-value storage for JSON-serializable usage snapshots.

    Implementations own the medium (file, embedded DB, remote KV); the engine
    only hands them plain lists of dicts.
    """

    def get(self, key: str) -> object | None:
        ...

    def set(self, key: str, value: object) -> None:
        ...
