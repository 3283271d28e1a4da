from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

"""Resource store contract.

A resource store is the persistence collaborator of one tracked resource.
Every operation either returns or raises PersistenceError carrying the
store's human readable message.
"""

__all__ = [
    "PersistenceError",
    "ResourceStore",
]


class PersistenceError(Exception):
    """Store rejected a list / create / update / delete call."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@runtime_checkable
class ResourceStore(Protocol):
    def list(self) -> list[dict[str, Any]]: ...

    def create(self, record: dict[str, Any]) -> dict[str, Any]: ...

    def update(self, record_id: Any, partial: dict[str, Any]) -> dict[str, Any]: ...

    def delete(self, record_id: Any) -> None: ...
