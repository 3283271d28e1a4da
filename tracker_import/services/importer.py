from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import ErrorType
from ..models.field_spec import ResourceSchema
from ..models.import_result import ImportResult
from ..schemas.resources import get_schema
from ..store.base import PersistenceError, ResourceStore
from ..upload.reader import DecodeError, read_upload
from .normalizer import normalize_row
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Batch import orchestration.

import_rows() turns RawRows into persisted records:
- every row is normalized independently (normalization cannot fail)
- creates are issued one at a time, in input order, each awaited before
  the next one is sent
- the first rejected create stops the batch; rows before it stay persisted,
  rows after it are never attempted

run_import() is the full upload path: decode -> import_rows -> re-list the
resource from the store so callers display server truth.
"""

__all__ = [
    "ProcessingError",
    "resolve_schema",
    "import_rows",
    "refresh",
    "run_import",
]


class ProcessingError(Exception):
    """Raised for unusable invocation input (unknown resource name)."""


def resolve_schema(resource: str | ResourceSchema) -> ResourceSchema:
    if isinstance(resource, ResourceSchema):
        return resource
    try:
        return get_schema(resource)
    except KeyError as e:
        raise ProcessingError(str(e.args[0])) from e


def import_rows(
    rows: Sequence[Mapping[str, Any]],
    schema: ResourceSchema,
    store: ResourceStore,
    *,
    source: str = "<rows>",
    error_log: ErrorLogBuffer | None = None,
) -> ImportResult:
    """Normalize and create rows sequentially, stopping at the first rejection.

    Args:
        rows: RawRows in file order
        schema: target resource schema
        store: persistence collaborator for the resource
        source: file name used in log / error records
        error_log: buffer receiving a PERSISTENCE_ERROR record on rejection

    Returns:
        ImportResult; `failed_row` / `error` are set when a create was rejected
    """
    start_time = datetime.now(UTC)
    created_records: list[dict[str, Any]] = []
    failed_row: int | None = None
    error: str | None = None

    with ProgressTracker(len(rows), description=f"Importing {schema.label}") as progress:
        for row_number, raw in enumerate(rows, start=1):
            record = normalize_row(raw, schema)
            logger.debug("resource=%s row=%d record=%s", schema.name, row_number, record)
            try:
                saved = store.create(record)
            except PersistenceError as e:
                failed_row = row_number
                error = f"row {row_number}: {e.message}"
                logger.warning(
                    "resource=%s file=%s create rejected at row %d, %d remaining rows not attempted: %s",
                    schema.name,
                    source,
                    row_number,
                    len(rows) - row_number,
                    e.message,
                )
                if error_log is not None:
                    error_log.record_rejection(source, schema.name, row_number, e.message)
                progress.advance(success=False)
                break
            created_records.append(saved)
            progress.advance()
            progress.set_postfix(created=len(created_records))

    end_time = datetime.now(UTC)
    return ImportResult(
        resource=schema.name,
        source=source,
        total_rows=len(rows),
        created=len(created_records),
        start_time=start_time,
        end_time=end_time,
        failed_row=failed_row,
        error=error,
        created_records=created_records,
    )


def refresh(store: ResourceStore) -> list[dict[str, Any]]:
    """Re-fetch the authoritative list of a resource."""
    return store.list()


def run_import(
    path: Path,
    resource: str | ResourceSchema,
    store: ResourceStore,
    *,
    sheet: str | int | None = None,
    delimiter: str = ",",
    error_log: ErrorLogBuffer | None = None,
) -> ImportResult:
    """Decode an uploaded file, import its rows and refresh the resource list.

    Raises:
        ProcessingError: unknown resource
        DecodeError: file could not be decoded (nothing was created)
        PersistenceError: the refresh list call failed after the batch
    """
    schema = resolve_schema(resource)
    path = Path(path)

    try:
        upload = read_upload(path, sheet=sheet, delimiter=delimiter)
    except DecodeError as e:
        if error_log is not None:
            error_log.record_file_error(path.name, schema.name, ErrorType.DECODE, str(e))
        raise

    logger.info(
        "decoded file=%s sheet=%s rows=%d headers=%s",
        upload.source,
        upload.sheet_name or "-",
        upload.total_rows,
        upload.headers,
    )

    result = import_rows(upload.rows, schema, store, source=upload.source, error_log=error_log)

    # re-list even after a partial batch: earlier creates are persisted
    try:
        refreshed = refresh(store)
    except PersistenceError as e:
        if error_log is not None:
            error_log.record_file_error(upload.source, schema.name, ErrorType.REFRESH, e.message)
        raise

    logger.debug("resource=%s refreshed_count=%d", schema.name, len(refreshed))
    return replace(result, refreshed=refreshed)
