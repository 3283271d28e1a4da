from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from ..models.field_spec import FieldKind, FieldSpec, ResourceSchema

"""Row normalization engine.

Turns a RawRow (header text -> scalar, as typed by whoever built the
spreadsheet) into a NormalizedRecord for one ResourceSchema:

1. resolve_field: first alias present in the row wins (empty string counts)
2. coerce by kind: text / integer / emoji-or-url
3. normalize_enum: exact member -> synonym lookup -> schema default

Normalization is total: every row yields a record, unusable input degrades to
the field default instead of raising.
"""

__all__ = [
    "MISSING",
    "resolve_field",
    "coerce_text",
    "coerce_integer",
    "coerce_image",
    "normalize_enum",
    "normalize_value",
    "normalize_row",
    "normalize_rows",
    "looks_like_url",
]

RawRow = Mapping[str, Any]


class _Missing:
    """Sentinel for 'no alias of this field is present in the row'."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_URL_PREFIXES = ("http://", "https://", "//")


def resolve_field(row: RawRow, spec: FieldSpec) -> Any:
    """Return the value under the first alias present in the row, else MISSING.

    Matching is exact; the resolver never lowercases headers.
    """
    for alias in spec.aliases:
        if alias in row:
            return row[alias]
    return MISSING


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _is_blank(value: Any) -> bool:
    if value is MISSING or value is None or _is_nan(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def coerce_text(value: Any, default: str = "") -> str:
    if value is MISSING or value is None or _is_nan(value):
        return default
    # spreadsheet cells hand back 2021.0 for a typed 2021
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_integer(value: Any, default: int = 0) -> int:
    """Parse the leading base-10 integer of value.

    "12" -> 12, "12.7" -> 12, "-3" -> -3, "5 eps" -> 5. Numbers are truncated
    toward zero. Anything unparsable (including booleans and NaN) -> default.
    No range clamping is applied.
    """
    if value is MISSING or value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return default
        return int(value)
    m = _LEADING_INT.match(str(value))
    if m is None:
        return default
    return int(m.group(1))


def coerce_image(value: Any, default: str) -> Any:
    """Image glyph or URL; blank -> per-resource default glyph, else unchanged."""
    if _is_blank(value):
        return default
    return value


def normalize_enum(value: Any, spec: FieldSpec) -> str:
    """Map a free-text value onto the field's closed vocabulary.

    Tiers: exact member -> synonym (as-is, lowercased, title-cased) -> default.
    Members map to themselves, so the function is idempotent.
    """
    if _is_blank(value):
        return spec.default
    text = coerce_text(value).strip()
    if text in spec.enum_values:
        return text
    for variant in (text, text.lower(), text.title()):
        mapped = spec.synonyms.get(variant)
        if mapped is not None:
            return mapped
    return spec.default


def normalize_value(value: Any, spec: FieldSpec) -> Any:
    """Coerce an already resolved value according to spec.kind."""
    if spec.kind is FieldKind.INTEGER:
        return coerce_integer(value, spec.default)
    if spec.kind is FieldKind.ENUM:
        return normalize_enum(value, spec)
    if spec.kind is FieldKind.EMOJI_OR_URL:
        return coerce_image(value, spec.default)
    return coerce_text(value, spec.default)


def normalize_row(row: RawRow, schema: ResourceSchema) -> dict[str, Any]:
    """Normalize one RawRow into a record holding exactly the schema fields, in order."""
    return {spec.name: normalize_value(resolve_field(row, spec), spec) for spec in schema.fields}


def normalize_rows(rows: Iterable[RawRow], schema: ResourceSchema) -> list[dict[str, Any]]:
    return [normalize_row(r, schema) for r in rows]


def looks_like_url(value: Any) -> bool:
    """Display helper: does an image value point at a URL rather than a glyph?"""
    return isinstance(value, str) and value.strip().lower().startswith(_URL_PREFIXES)
