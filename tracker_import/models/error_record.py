from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import Enum

"""One line of the import error log.

A record either points at the upload row whose create the store rejected,
or at the whole upload (decode and refresh failures) with row -1.
"""

__all__ = [
    "ErrorType",
    "ErrorRecord",
    "FILE_LEVEL_ROW",
]

FILE_LEVEL_ROW = -1


class ErrorType(str, Enum):
    PERSISTENCE = "PERSISTENCE_ERROR"
    DECODE = "DECODE_ERROR"
    REFRESH = "REFRESH_ERROR"


_FILE_LEVEL_TYPES = frozenset({ErrorType.DECODE, ErrorType.REFRESH})


@dataclass(frozen=True)
class ErrorRecord:
    timestamp: str  # ISO8601 UTC, Z suffix
    file: str
    resource: str
    row: int
    error_type: str
    message: str

    @classmethod
    def rejected_row(cls, file: str, resource: str, row: int, message: str) -> ErrorRecord:
        """Store rejected the create for upload row `row` (1-based)."""
        if row < 1:
            raise ValueError(f"row must be >= 1, got {row}")
        return cls(_utc_now(), file, resource, row, ErrorType.PERSISTENCE.value, message)

    @classmethod
    def file_level(cls, file: str, resource: str, error_type: ErrorType, message: str) -> ErrorRecord:
        if error_type not in _FILE_LEVEL_TYPES:
            raise ValueError(f"{error_type.value} is not a file-level error")
        return cls(_utc_now(), file, resource, FILE_LEVEL_ROW, error_type.value, message)

    @property
    def is_file_level(self) -> bool:
        return self.row == FILE_LEVEL_ROW

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)


def _utc_now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")
