#!/usr/bin/env python3
import logging

from docschema.core.schema import RecordDefinition, TypeRef
from docschema.core.schema.diagnostics import DiagnosticSink
from docschema.core.schema.walker import FieldRoute, SchemaWalker


# --- Helpers --- #

def _f(name, type_, annotation=None, **extra):
    return {"name": name, "type": type_, "annotation": annotation, **extra}


def _record(*fields, name="Task"):
    return RecordDefinition(name=name, fields=list(fields))


def _nested(name, *fields):
    return TypeRef.record(name, list(fields))


def _walk(record):
    sink = DiagnosticSink(record.name)
    return SchemaWalker(record, sink).walk(), sink


# --- Paths & ordering --- #

def test_logical_and_storage_paths_for_flat_fields():
    result, _ = _walk(_record(
        _f("Name", "string", "name"),
        _f("Count", "int"),
    ))
    assert [(w.path, w.storage_path) for w in result.fields] == [
        ("Name", "name"),
        ("Count", "Count"),
    ]


def test_traversal_follows_declaration_order_not_names():
    result, _ = _walk(_record(
        _f("Zeta", "string", order=0),
        _f("Alpha", "string", order=2),
        _f("Mid", "string", order=1),
    ))
    assert [w.path for w in result.fields] == ["Zeta", "Mid", "Alpha"]


def test_nested_record_is_flattened_without_container_entry():
    detail = _nested("Detail", _f("Status", "string", "status"), _f("Note", "string"))
    result, _ = _walk(_record(_f("Detail", detail, "detail")))
    assert [(w.path, w.storage_path) for w in result.fields] == [
        ("Detail.Status", "detail.status"),
        ("Detail.Note", "detail.Note"),
    ]
    assert all(w.depth == 1 for w in result.fields)
    assert result.has_optional_nested_field is False


# --- Optional ancestors --- #

def test_optional_ancestors_accumulate_and_stay_scoped():
    inner = _nested("Inner", _f("Leaf", "string"))
    outer = _nested(
        "Outer",
        _f("Inner", TypeRef.optional(inner)),
        _f("Plain", "string"),
    )
    result, _ = _walk(_record(
        _f("Outer", TypeRef.optional(outer)),
        _f("After", "string"),
    ))
    by_path = {w.path: w.optional_ancestors for w in result.fields}
    assert by_path == {
        "Outer.Inner.Leaf": ("Outer", "Outer.Inner"),
        "Outer.Plain": ("Outer",),
        "After": (),
    }
    assert result.has_optional_nested_field is True


def test_non_optional_nested_does_not_add_ancestor():
    inner = _nested("Inner", _f("Leaf", "string"))
    outer = _nested("Outer", _f("Inner", inner))
    result, _ = _walk(_record(_f("Outer", TypeRef.optional(outer))))
    assert result.fields[0].optional_ancestors == ("Outer",)


# --- Malformed annotations --- #

def test_malformed_annotation_skips_only_that_field(caplog):
    record = _record(
        _f("Good", "string", "good"),
        _f("Bad", "string", "bad,,unique"),
        _f("AlsoGood", "string"),
    )
    with caplog.at_level(logging.WARNING):
        result, sink = _walk(record)
    assert [w.path for w in result.fields] == ["Good", "AlsoGood"]
    assert len(sink) == 1
    diag = sink.items()[0]
    assert diag.field == "Bad"
    assert diag.record == "Task"
    assert diag.annotation == "bad,,unique"
    assert "skipped field" in caplog.text


def test_malformed_annotation_on_container_skips_subtree():
    detail = _nested("Detail", _f("Status", "string"))
    result, sink = _walk(_record(_f("Detail", detail, "a.b"), _f("Other", "string")))
    assert [w.path for w in result.fields] == ["Other"]
    assert len(sink) == 1


# --- Omission & routing --- #

def test_omitted_fields_are_dropped():
    result, _ = _walk(_record(_f("Secret", "string", "-"), _f("Name", "string")))
    assert [w.path for w in result.fields] == ["Name"]


def test_omitted_container_still_emits_descendants():
    detail = _nested("Detail", _f("Status", "string", "status"), _f("Secret", "string", "-"))
    result, _ = _walk(_record(_f("Detail", detail, "-"), _f("Name", "string")))
    assert [(w.path, w.storage_path) for w in result.fields] == [
        ("Detail.Status", "-.status"),
        ("Name", "Name"),
    ]


def test_omitted_optional_container_keeps_ancestor_and_flag():
    detail = _nested("Detail", _f("Status", "string"))
    result, _ = _walk(_record(_f("Detail", TypeRef.optional(detail), "-")))
    assert [w.optional_ancestors for w in result.fields] == [("Detail",)]
    assert result.has_optional_nested_field is True


def test_routes():
    result, _ = _walk(_record(
        _f("ID", "string", "-,id=auto"),
        _f("Name", "string", "name"),
        _f("Indexes", "map[string]bool"),
    ))
    routes = {w.path: w.route for w in result.fields}
    assert routes == {
        "ID": FieldRoute.IDENTIFIER,
        "Name": FieldRoute.ORDINARY,
        "Indexes": FieldRoute.INDEX_REGISTRY,
    }


def test_index_registry_requires_top_level_and_exact_type():
    nested = _nested("Sub", _f("Indexes", "map[string]bool"))
    result, _ = _walk(_record(
        _f("Sub", nested),
        _f("Indexes", "map[string]int"),
    ))
    assert [w.route for w in result.fields] == [FieldRoute.ORDINARY, FieldRoute.ORDINARY]


def test_index_registry_with_identifier_directive_goes_to_identifier():
    result, _ = _walk(_record(_f("Indexes", "map[string]bool", "-,id")))
    assert result.fields[0].route is FieldRoute.IDENTIFIER


# --- Sequence flag --- #

def test_sequence_flag_is_set_by_any_sequence_leaf():
    result, _ = _walk(_record(_f("Name", "string"), _f("Tags", "list[string]", "tags")))
    assert result.has_sequence_field is True
    result, _ = _walk(_record(_f("Name", "string")))
    assert result.has_sequence_field is False


def test_sequence_flag_set_even_when_field_is_omitted():
    result, _ = _walk(_record(_f("Tags", "list[string]", "-")))
    assert result.fields == ()
    assert result.has_sequence_field is True


# --- Determinism --- #

def test_walk_is_repeatable():
    detail = _nested("Detail", _f("Status", "string", "status"))
    record = _record(_f("Detail", TypeRef.optional(detail)), _f("Name", "string"))
    first, _ = _walk(record)
    second, _ = _walk(record)
    assert first == second


# --- Directive keys in the storage slot --- #

def test_directive_key_as_storage_name_is_reported(caplog):
    with caplog.at_level(logging.WARNING):
        result, sink = _walk(_record(_f("Email", "string", "unique"), _f("Code", "string", ",unique")))
    assert [w.storage_path for w in result.fields] == ["unique", "Code"]
    assert [w.directives.unique for w in result.fields] == [False, True]
    assert len(sink) == 1
    diag = sink.items()[0]
    assert diag.field == "Email"
    assert "write \",unique\"" in diag.message
    assert "also a directive key" in caplog.text
