"""Domain models for the spreadsheet -> tracker API import tool.

This package contains the declarative schema types (FieldSpec, ResourceSchema)
and the result / error records produced by an import run.
"""

from .error_record import FILE_LEVEL_ROW, ErrorRecord, ErrorType
from .field_spec import FieldKind, FieldSpec, ResourceSchema
from .import_result import ImportResult, ImportStatus

__all__ = [
    # Schema models
    "FieldKind",
    "FieldSpec",
    "ResourceSchema",
    # Result models
    "ImportResult",
    "ImportStatus",
    "ErrorRecord",
    "ErrorType",
    "FILE_LEVEL_ROW",
]
