#!/usr/bin/env python3
"""
Purpose:
    Implements the read-only input tree consumed by the schema builder:
    `FieldDefinition` nodes grouped under a `RecordDefinition`, each carrying
    its declared type, raw annotation string, declaration order and source
    position.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from docschema.core.schema.field_type import TypeRef, rebuild_types
from docschema.core.utils import is_valid_fieldname_pattern
from docschema.core import constants as C


# --- Positions --- #

class SourcePosition(BaseModel):
    """Where a definition was declared; used only for diagnostics."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    filename: str = "<unknown>"
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


# --- Models --- #

class FieldDefinition(BaseModel):
    """
    One declared field of a record.

    Fields
    ------
    name:
        Source-level field name; must match `FIELDNAME_ALLOWED_RE`.
    type:
        Declared type (structured or shorthand, see `TypeRef`).
    annotation:
        Raw annotation string in the directive mini-language, or None.
    order:
        Declaration index among its siblings; traversal sorts on it.
    position:
        Source position, reported in diagnostics and errors.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Field name.")
    type: TypeRef = Field(..., description="Declared type.")
    annotation: Optional[str] = Field(default=None, description="Raw annotation string.")
    order: int = Field(default=0, description="Declaration index.")
    position: SourcePosition = Field(default_factory=SourcePosition)

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, v: Any) -> str:
        return _normalize_name(v, what="field")


class RecordDefinition(BaseModel):
    """
    A top-level record type: the unit one schema is synthesized from.

    Example
    -------
    >>> rd = RecordDefinition(name="Task", fields=[
    ...     {"name": "ID", "type": "string", "annotation": "-,id=auto"},
    ...     {"name": "Title", "type": "string", "annotation": "title"},
    ... ])
    >>> [f.order for f in rd.fields]
    [0, 1]
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Record type name.")
    fields: Tuple[FieldDefinition, ...] = Field(default=(), description="Top-level fields.")
    position: SourcePosition = Field(default_factory=SourcePosition)
    package: Optional[str] = Field(default=None, description="Owning package/module, if known.")

    @model_validator(mode="before")
    @classmethod
    def _order_fields(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("fields"), (list, tuple)):
            data = {**data, "fields": assign_default_order(data["fields"])}
        return data

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, v: Any) -> str:
        return _normalize_name(v, what="record")

    @model_validator(mode="after")
    def _post(self) -> "RecordDefinition":
        check_unique_names(self.fields, at=self.name)
        return self


# --- Helpers --- #

def _normalize_name(v: Any, *, what: str) -> str:
    s = "" if v is None else str(v).strip()
    if not s:
        raise ValueError(f"The {what} 'name' key is not set")
    if not is_valid_fieldname_pattern(s):
        raise ValueError(
            f"The {what} name {s!r} must match the pattern {C.FIELDNAME_ALLOWED_RE.pattern!r}"
        )
    return s


def assign_default_order(fields: Sequence[Any]) -> list[Any]:
    """Give raw field dicts without an explicit `order` their list index."""
    out = []
    for i, f in enumerate(fields):
        if isinstance(f, dict) and f.get("order") is None:
            f = {**f, "order": i}
        out.append(f)
    return out


def check_unique_names(fields: Iterable[FieldDefinition], *, at: str) -> None:
    """Ensure no duplicate field names among siblings."""
    counts = Counter(f.name for f in fields)
    dups = [(n, c) for n, c in sorted(counts.items()) if c > 1]
    if dups:
        details = ", ".join(f"{n} ×{c}" for n, c in dups)
        raise ValueError(f"Duplicate field names in {at!r}: {details}")


# --- Forward-Ref Resolution --- #
rebuild_types(FieldDefinition)
FieldDefinition.model_rebuild()
