#!/usr/bin/env python3
"""
Purpose:
    Defines the immutable, renderer-ready schema model: ordered field records,
    the identifier descriptor, the meta-field result, unique/index registries
    and the schema-wide flags.
"""
from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from docschema.core.constants import INDEX_FIELD_NAME, TYPE_BOOL_MAP


_FROZEN = ConfigDict(frozen=True, extra="forbid")


class IdentifierMode(str, Enum):
    """How identifier values are obtained."""

    MANUAL = "manual"   # caller supplies identifier values
    AUTO = "auto"       # the store generates them


class IndexDescriptor(BaseModel):
    """A secondary index over one field."""
    model_config = _FROZEN

    name: str
    field: str
    storage_name: str


class UniqueEntry(BaseModel):
    """A uniqueness constraint over one (string) field."""
    model_config = _FROZEN

    field: str
    storage_name: str


class FieldRecord(BaseModel):
    """
    One flattened, storable field.

    Fields
    ------
    path:
        Logical dotted path (identity within a schema).
    storage_path:
        Dotted path under which the value is stored; empty for the
        document-identifier record.
    type_name:
        Canonical declared type name.
    optional_ancestors:
        Logical paths of the optional-record containers enclosing this field,
        outermost first.
    label:
        Storage path made unique within the schema; None for the
        document-identifier record.
    """
    model_config = _FROZEN

    path: str = Field(..., min_length=1)
    storage_path: str = ""
    type_name: str
    optional_ancestors: Tuple[str, ...] = ()
    is_identifier: bool = False
    is_document_id: bool = False
    is_unique: bool = False
    is_sequence: bool = False
    indexes: Tuple[IndexDescriptor, ...] = ()
    label: Optional[str] = None
    position: str = ""


class IdentifierDescriptor(BaseModel):
    model_config = _FROZEN

    field_name: str
    field_type: str
    mode: IdentifierMode
    accessor_name: str

    @property
    def is_auto(self) -> bool:
        return self.mode is IdentifierMode.AUTO


class MetaFieldSet(BaseModel):
    """Outcome of reserved bookkeeping-field detection."""
    model_config = _FROZEN

    enabled: bool = False
    fields: Tuple[str, ...] = ()


class IndexField(BaseModel):
    """The reserved top-level field that stores index entries."""
    model_config = _FROZEN

    field: str = INDEX_FIELD_NAME
    storage_name: str = INDEX_FIELD_NAME
    type_name: str = TYPE_BOOL_MAP


class SchemaModel(BaseModel):
    """
    Aggregate output for one record type; built once and never mutated.

    The model validates its own invariants on construction: logical paths are
    unique and at most one field is the identifier.
    """
    model_config = _FROZEN

    record_name: str
    package: Optional[str] = None
    collection_name: str
    is_subcollection: bool = False
    fields: Tuple[FieldRecord, ...] = ()
    identifier: Optional[IdentifierDescriptor] = None
    meta_fields: MetaFieldSet = Field(default_factory=MetaFieldSet)
    uniques: Tuple[UniqueEntry, ...] = ()
    indexes: Tuple[IndexDescriptor, ...] = ()
    index_field: Optional[IndexField] = None
    has_sequence_field: bool = False
    has_optional_nested_field: bool = False

    @property
    def indexes_enabled(self) -> bool:
        return self.index_field is not None

    @property
    def document_id_field(self) -> Optional[FieldRecord]:
        return next((f for f in self.fields if f.is_document_id), None)

    def field(self, path: str) -> FieldRecord:
        """Return the record for a logical path or raise KeyError."""
        for f in self.fields:
            if f.path == path:
                return f
        raise KeyError(path)

    @model_validator(mode="after")
    def _post(self) -> "SchemaModel":
        counts = Counter(f.path for f in self.fields)
        dups = sorted(p for p, c in counts.items() if c > 1)
        if dups:
            raise ValueError(f"Duplicate field paths: {dups}")
        if sum(1 for f in self.fields if f.is_identifier) > 1:
            raise ValueError("At most one identifier field is allowed")
        return self
