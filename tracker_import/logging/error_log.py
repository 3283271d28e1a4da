from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord, ErrorType

"""Per-run error log.

Rejections and file-level failures of an upload are buffered and written
as JSON Lines to `logs/errors-YYYYMMDD-HHMMSS.log` (UTC) when the run ends.
A clean run leaves no file behind.
"""

__all__ = [
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR
        self._file_path: Path | None = None

    def record_rejection(self, file: str, resource: str, row: int, message: str) -> ErrorRecord:
        record = ErrorRecord.rejected_row(file, resource, row, message)
        self._records.append(record)
        return record

    def record_file_error(self, file: str, resource: str, error_type: ErrorType, message: str) -> ErrorRecord:
        record = ErrorRecord.file_level(file, resource, error_type, message)
        self._records.append(record)
        return record

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def counts(self) -> dict[str, int]:
        """Pending records per error type, e.g. {"PERSISTENCE_ERROR": 1}."""
        return dict(Counter(r.error_type for r in self._records))

    @property
    def file_path(self) -> Path:
        # fixed on first use so later flushes of the same run append
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def flush(self) -> Path | None:
        """Append pending records; returns the log path, or None if nothing was pending."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            f.writelines(r.to_json_line() + "\n" for r in self._records)
        self._records.clear()
        return fp
