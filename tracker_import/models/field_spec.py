from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""FieldSpec / ResourceSchema models for the tracker import tool.

A ResourceSchema is the declarative description of one tracked resource
(anime, games, ...). Each FieldSpec states how a single canonical field is
found in a RawRow (aliases), how its value is coerced (kind) and what it
falls back to when the spreadsheet says nothing useful (default).
"""

__all__ = [
    "FieldKind",
    "FieldSpec",
    "ResourceSchema",
]


class FieldKind(Enum):
    """Value kind of a canonical field.

    - TEXT: free text, coerced with str()
    - INTEGER: leading base-10 integer, default on failure
    - ENUM: closed vocabulary with synonym table and fallback
    - EMOJI_OR_URL: image glyph or image URL, per-resource default glyph
    """
    TEXT = "text"
    INTEGER = "integer"
    ENUM = "enum"
    EMOJI_OR_URL = "emoji-or-url"


@dataclass(frozen=True)
class FieldSpec:
    """Declarative description of one canonical field.

    Aliases are exact header strings, most canonical first. Matching is
    case-sensitive, so every accepted spelling has to be listed.
    """
    name: str  # canonical field name in the NormalizedRecord
    aliases: tuple[str, ...]  # accepted header spellings, in priority order
    kind: FieldKind = FieldKind.TEXT
    default: Any = None  # fallback value (None -> kind default)
    enum_values: tuple[str, ...] = ()  # closed set (ENUM only)
    synonyms: Mapping[str, str] = field(default_factory=dict)  # alt spelling -> member

    def __post_init__(self) -> None:
        if not self.aliases:
            raise ValueError(f"field '{self.name}' needs at least one alias")
        if self.default is None:
            object.__setattr__(self, "default", _kind_default(self.kind))
        if self.kind is FieldKind.ENUM:
            if not self.enum_values:
                raise ValueError(f"enum field '{self.name}' has no enum_values")
            if self.default not in self.enum_values:
                raise ValueError(
                    f"enum field '{self.name}' default {self.default!r} not in {list(self.enum_values)}"
                )
            stray = sorted({v for v in self.synonyms.values() if v not in self.enum_values})
            if stray:
                raise ValueError(f"enum field '{self.name}' synonyms map to unknown values: {stray}")
        elif self.enum_values or self.synonyms:
            raise ValueError(f"field '{self.name}' is {self.kind.value}, enum_values/synonyms not allowed")


def _kind_default(kind: FieldKind) -> Any:
    if kind is FieldKind.INTEGER:
        return 0
    return ""


@dataclass(frozen=True)
class ResourceSchema:
    """Ordered set of FieldSpecs for one tracked resource kind.

    Fields are independent of each other; there is no cross-field validation.
    """
    name: str  # registry key (e.g. "anime")
    endpoint: str  # REST collection path (e.g. "/anime")
    label: str  # human readable name for log / progress output
    fields: tuple[FieldSpec, ...]

    def __post_init__(self) -> None:
        names = [f.name for f in self.fields]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"schema '{self.name}' has duplicate fields: {dupes}")

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"schema '{self.name}' has no field '{name}'")
