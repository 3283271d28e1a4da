from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

from .base import PersistenceError

"""In-process resource store.

Used for --dry-run / DISABLE_STORE=1 runs and in tests. Records get
incremental integer ids under the `_id` key, like the backend does.
"""

__all__ = [
    "MemoryResourceStore",
]


class MemoryResourceStore:
    """Dict-backed ResourceStore.

    `reject` may return an error message for a record to simulate a backend
    rejection of that create call (None = accept).
    """

    id_key = "_id"

    def __init__(
        self,
        records: list[dict[str, Any]] | None = None,
        *,
        reject: Callable[[dict[str, Any]], str | None] | None = None,
    ) -> None:
        self._records: dict[int, dict[str, Any]] = {}
        self._next_id = 1
        self.reject = reject
        self.create_calls = 0
        for r in records or []:
            self._insert(r)

    def __len__(self) -> int:
        return len(self._records)

    def close(self) -> None:
        """No-op; the store holds no external resources."""

    def __enter__(self) -> MemoryResourceStore:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def list(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(r) for r in self._records.values()]

    def create(self, record: dict[str, Any]) -> dict[str, Any]:
        self.create_calls += 1
        if self.reject is not None:
            message = self.reject(record)
            if message:
                raise PersistenceError(message)
        return copy.deepcopy(self._insert(record))

    def update(self, record_id: Any, partial: dict[str, Any]) -> dict[str, Any]:
        current = self._get(record_id)
        current.update({k: v for k, v in partial.items() if k != self.id_key})
        return copy.deepcopy(current)

    def delete(self, record_id: Any) -> None:
        self._get(record_id)
        del self._records[int(record_id)]

    def _insert(self, record: dict[str, Any]) -> dict[str, Any]:
        stored = dict(record)
        stored[self.id_key] = self._next_id
        self._records[self._next_id] = stored
        self._next_id += 1
        return stored

    def _get(self, record_id: Any) -> dict[str, Any]:
        try:
            return self._records[int(record_id)]
        except (KeyError, TypeError, ValueError):
            raise PersistenceError(f"record not found: {record_id}", status_code=404) from None
