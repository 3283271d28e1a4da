from __future__ import annotations

import json

import jsonschema
import pytest
from jsonschema.exceptions import ValidationError

from tracker_import.logging.error_log import ErrorLogBuffer
from tracker_import.models.error_record import ErrorRecord, ErrorType

"""Error log JSON Lines record contract."""

ERROR_LOG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "required": ["timestamp", "file", "resource", "row", "error_type", "message"],
    "properties": {
        "timestamp": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$"},
        "file": {"type": "string"},
        "resource": {"type": "string"},
        "row": {"type": "integer", "minimum": -1},
        "error_type": {"type": "string", "pattern": "^[A-Z][A-Z_]*$"},
        "message": {"type": "string"},
    },
}


@pytest.mark.parametrize(
    "record",
    [
        ErrorRecord.rejected_row("anime.csv", "anime", 2, "duplicate key"),
        ErrorRecord.file_level("anime.csv", "anime", ErrorType.DECODE, "bad zip"),
        ErrorRecord.file_level("anime.csv", "anime", ErrorType.REFRESH, "timeout"),
    ],
)
def test_error_record_matches_schema(record):
    jsonschema.validate(json.loads(record.to_json_line()), ERROR_LOG_SCHEMA)


def test_schema_rejects_extra_key():
    record = json.loads(ErrorRecord.rejected_row("a.csv", "anime", 1, "x").to_json_line())
    record["sheet"] = "Sheet1"
    with pytest.raises(ValidationError):
        jsonschema.validate(record, ERROR_LOG_SCHEMA)


def test_flushed_lines_match_schema(tmp_path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.record_rejection("a.xlsx", "genshin", 3, "rarity out of range")
    buf.record_file_error("a.xlsx", "genshin", ErrorType.REFRESH, "timeout")
    for line in buf.flush().read_text(encoding="utf-8").splitlines():
        jsonschema.validate(json.loads(line), ERROR_LOG_SCHEMA)
