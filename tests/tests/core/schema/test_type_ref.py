#!/usr/bin/env python3

import pytest
from pydantic import ValidationError

from docschema.core.schema import FieldDefinition, TypeKind, TypeRef
from docschema.core.schema.field_type import parse_type_expression


# --- Shorthand parsing --- #

@pytest.mark.parametrize("expr,type_name,kind", [
    ("string", "string", TypeKind.PRIMITIVE),
    ("optional[timestamp]", "optional[timestamp]", TypeKind.OPTIONAL),
    ("list[string]", "list[string]", TypeKind.SEQUENCE),
    ("map[string]bool", "map[string]bool", TypeKind.MAPPING),
    ("map[string] list[int]", "map[string]list[int]", TypeKind.MAPPING),
    ("optional[list[map[string]float]]", "optional[list[map[string]float]]", TypeKind.OPTIONAL),
])
def test_shorthand_round_trips_to_canonical_name(expr, type_name, kind):
    t = TypeRef.model_validate(expr)
    assert t.kind is kind
    assert t.type_name == type_name


@pytest.mark.parametrize("bad", ["", "optional[", "list[string", "map[string]", "string]", "a,b", "bad-name"])
def test_bad_shorthand_raises(bad):
    with pytest.raises(ValueError):
        parse_type_expression(bad)


def test_shorthand_inside_field_definition():
    fd = FieldDefinition(name="Tags", type="list[string]")
    assert fd.type.is_sequence()
    assert fd.type.item.type_name == "string"


# --- Structured form --- #

def test_record_type_requires_name_and_accepts_fields():
    t = TypeRef.record("Detail", [{"name": "Status", "type": "string"}])
    assert t.kind is TypeKind.RECORD
    assert t.type_name == "Detail"
    assert [f.name for f in t.fields] == ["Status"]
    assert t.nested_record() is t
    assert t.is_optional_record() is False


def test_optional_record_unwraps():
    inner = TypeRef.record("Detail", [{"name": "Status", "type": "string"}])
    t = TypeRef.optional(inner)
    assert t.is_optional_record() is True
    assert t.nested_record() == inner
    assert t.type_name == "optional[Detail]"


def test_optional_primitive_is_not_a_nested_record():
    t = TypeRef.model_validate("optional[timestamp]")
    assert t.nested_record() is None
    assert t.is_optional_record() is False


def test_missing_parts_raise():
    with pytest.raises(ValidationError, match="requires"):
        TypeRef(kind="optional")
    with pytest.raises(ValidationError, match="requires"):
        TypeRef(kind="mapping", key="string")


def test_stray_parts_raise():
    with pytest.raises(ValidationError, match="does not accept"):
        TypeRef(kind="primitive", name="string", item="int")


def test_record_fields_get_default_order_and_unique_names():
    t = TypeRef.record("Detail", [{"name": "A", "type": "int"}, {"name": "B", "type": "int"}])
    assert [f.order for f in t.fields] == [0, 1]
    with pytest.raises(ValidationError, match="Duplicate field names"):
        TypeRef.record("Detail", [{"name": "A", "type": "int"}, {"name": "A", "type": "string"}])


def test_type_ref_is_frozen():
    t = TypeRef.primitive("string")
    with pytest.raises(ValidationError):
        t.name = "int"
