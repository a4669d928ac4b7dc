#!/usr/bin/env python3
"""
Purpose:
    Defines the declared-type model for record fields: a small tagged tree of
    primitive, record, optional, sequence and mapping nodes, together with the
    shorthand type-expression parser and canonical type-name rendering.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Tuple, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, model_validator

from docschema.core.constants import FIELDNAME_ALLOWED_RE

if TYPE_CHECKING:
    from .field_definition import FieldDefinition


class TypeKind(str, Enum):
    """
    Declared-type node kinds.

    - primitive : named scalar (string, int, bool, timestamp, ...)
    - record    : nested record with its own ordered fields
    - optional  : nullable wrapper around another type
    - sequence  : homogeneous list of another type
    - mapping   : key/value map
    """

    PRIMITIVE = "primitive"
    RECORD = "record"
    OPTIONAL = "optional"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


# Which attributes each kind requires; everything else must stay unset
_REQUIRED_PARTS: dict[TypeKind, frozenset[str]] = {
    TypeKind.PRIMITIVE: frozenset({"name"}),
    TypeKind.RECORD: frozenset({"name", "fields"}),
    TypeKind.OPTIONAL: frozenset({"inner"}),
    TypeKind.SEQUENCE: frozenset({"item"}),
    TypeKind.MAPPING: frozenset({"key", "value"}),
}


# --- Model --- #

class TypeRef(BaseModel):
    """
    One node of a declared type.

    Accepts either the structured form (``{"kind": "optional", "inner": ...}``)
    or a shorthand string such as ``"optional[timestamp]"``,
    ``"list[string]"`` or ``"map[string]bool"``. Records cannot be written as
    shorthand because they carry fields.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: TypeKind = Field(..., description="Node kind.")
    name: Optional[str] = Field(default=None, description="Primitive or record name.")
    fields: Tuple["FieldDefinition", ...] = Field(default=(), description="Record fields.")
    inner: Optional["TypeRef"] = Field(default=None, description="Optional-wrapped type.")
    item: Optional["TypeRef"] = Field(default=None, description="Sequence element type.")
    key: Optional["TypeRef"] = Field(default=None, description="Mapping key type.")
    value: Optional["TypeRef"] = Field(default=None, description="Mapping value type.")

    # --- Pre-parse: shorthand and field ordering --- #
    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if isinstance(data, str):
            return parse_type_expression(data)
        if isinstance(data, dict) and isinstance(data.get("fields"), (list, tuple)):
            from .field_definition import assign_default_order
            data = {**data, "fields": assign_default_order(data["fields"])}
        return data

    @model_validator(mode="after")
    def _post(self) -> "TypeRef":
        present = {
            part for part in ("name", "inner", "item", "key", "value")
            if getattr(self, part) is not None
        }
        if self.fields:
            present.add("fields")
        required = _REQUIRED_PARTS[self.kind]
        # an empty record is still a record
        missing = required - present - ({"fields"} if self.kind is TypeKind.RECORD else set())
        if missing:
            raise ValueError(f"{self.kind.value} type requires: {sorted(missing)}")
        stray = present - required
        if stray:
            raise ValueError(f"{self.kind.value} type does not accept: {sorted(stray)}")
        if self.kind is TypeKind.RECORD:
            from .field_definition import check_unique_names
            check_unique_names(self.fields, at=self.name or "<record>")
        return self

    # --- Constructors --- #

    @classmethod
    def primitive(cls, name: str) -> "TypeRef":
        return cls(kind=TypeKind.PRIMITIVE, name=name)

    @classmethod
    def optional(cls, inner: "TypeRef") -> "TypeRef":
        return cls(kind=TypeKind.OPTIONAL, inner=inner)

    @classmethod
    def sequence(cls, item: "TypeRef") -> "TypeRef":
        return cls(kind=TypeKind.SEQUENCE, item=item)

    @classmethod
    def mapping(cls, key: "TypeRef", value: "TypeRef") -> "TypeRef":
        return cls(kind=TypeKind.MAPPING, key=key, value=value)

    @classmethod
    def record(cls, name: str, fields: Any) -> "TypeRef":
        return cls.model_validate({"kind": TypeKind.RECORD, "name": name, "fields": fields})

    # --- Introspection helpers --- #

    @property
    def type_name(self) -> str:
        """Canonical name, e.g. ``optional[timestamp]`` or ``map[string]bool``."""
        if self.kind is TypeKind.OPTIONAL:
            return f"optional[{self.inner.type_name}]"
        if self.kind is TypeKind.SEQUENCE:
            return f"list[{self.item.type_name}]"
        if self.kind is TypeKind.MAPPING:
            return f"map[{self.key.type_name}]{self.value.type_name}"
        return self.name or ""

    def is_sequence(self) -> bool:
        return self.kind is TypeKind.SEQUENCE

    def nested_record(self) -> Optional["TypeRef"]:
        """
        Return the record node if this is a record or an optional-wrapped
        record, else None.
        """
        if self.kind is TypeKind.RECORD:
            return self
        if self.kind is TypeKind.OPTIONAL and self.inner.kind is TypeKind.RECORD:
            return self.inner
        return None

    def is_optional_record(self) -> bool:
        return self.kind is TypeKind.OPTIONAL and self.inner.kind is TypeKind.RECORD


# --- Shorthand parser --- #

_WRAPPERS = {"optional": TypeKind.OPTIONAL, "list": TypeKind.SEQUENCE, "map": TypeKind.MAPPING}


def parse_type_expression(text: str) -> dict:
    """
    Parse a shorthand type expression into the structured dict form.

    Grammar:
        expr := "optional[" expr "]" | "list[" expr "]" | "map[" expr "]" expr | name

    Raises:
        ValueError: if the expression is empty or not well-formed.
    """
    src = "".join(str(text).split())
    if not src:
        raise ValueError("Type expression must be a non-empty string")
    node, pos = _parse_expr(src, 0)
    if pos != len(src):
        raise ValueError(f"Unexpected {src[pos:]!r} in type expression {text!r}")
    return node


def _parse_expr(src: str, pos: int) -> tuple[dict, int]:
    end = pos
    while end < len(src) and src[end] not in "[]":
        end += 1
    word = src[pos:end]

    if end < len(src) and src[end] == "[" and word in _WRAPPERS:
        arg, pos = _parse_expr(src, end + 1)
        pos = _expect(src, pos, "]")
        kind = _WRAPPERS[word]
        if kind is TypeKind.OPTIONAL:
            return {"kind": kind.value, "inner": arg}, pos
        if kind is TypeKind.SEQUENCE:
            return {"kind": kind.value, "item": arg}, pos
        value, pos = _parse_expr(src, pos)
        return {"kind": kind.value, "key": arg, "value": value}, pos

    if not FIELDNAME_ALLOWED_RE.fullmatch(word.replace(".", "_")):
        raise ValueError(f"Invalid type name {word!r} at offset {pos} in {src!r}")
    return {"kind": TypeKind.PRIMITIVE.value, "name": word}, end


def _expect(src: str, pos: int, char: str) -> int:
    if pos >= len(src) or src[pos] != char:
        raise ValueError(f"Expected {char!r} at offset {pos} in {src!r}")
    return pos + 1


# --- Forward-Ref Rebuild Utility --- #

def rebuild_types(FieldDefinition: type) -> None:
    """
    Resolve forward references to FieldDefinition after it is defined.

    Must be called by the module that defines FieldDefinition, once the class
    exists.
    """
    globals()["FieldDefinition"] = FieldDefinition
    TypeRef.model_rebuild()
