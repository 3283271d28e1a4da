from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

"""Import result models for the tracker import tool.

ImportResult aggregates the outcome of one upload: how many rows the file
held, how many creates the store accepted, which row was rejected (if any)
and the list re-fetched from the store afterwards.
"""


class ImportStatus(Enum):
    """Outcome of a batch import.

    - SUCCESS: every row was created
    - PARTIAL: a create was rejected; earlier rows stay persisted
    - FAILED: nothing was created because the very first create was rejected
    """
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True)
class ImportResult:
    """Aggregated result of importing one uploaded file into one resource."""
    resource: str  # resource name (anime, games, ...)
    source: str  # uploaded file name
    total_rows: int  # RawRows handed to the orchestrator
    created: int  # creates accepted by the store
    start_time: datetime
    end_time: datetime
    failed_row: int | None = None  # 1-based row of the rejected create
    error: str | None = None  # message surfaced to the caller
    created_records: list[dict[str, Any]] | None = None  # store responses, input order
    refreshed: list[dict[str, Any]] | None = None  # authoritative list after the batch

    @property
    def status(self) -> ImportStatus:
        if self.failed_row is None:
            return ImportStatus.SUCCESS
        if self.created > 0:
            return ImportStatus.PARTIAL
        return ImportStatus.FAILED

    @property
    def attempted(self) -> int:
        """Number of create calls issued (the rejected one included)."""
        return self.created + (1 if self.failed_row is not None else 0)

    @property
    def elapsed_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()
