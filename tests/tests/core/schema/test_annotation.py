#!/usr/bin/env python3

import pytest

from docschema.core.errors import MalformedAnnotation
from docschema.core.schema.annotation import (
    AnnotationDirectives,
    IndexDirective,
    is_ignored,
    parse_annotation,
)


# --- Absent / blank --- #

@pytest.mark.parametrize("raw", [None, "", "   "])
def test_missing_annotation_yields_all_absent(raw):
    d = parse_annotation(raw)
    assert d == AnnotationDirectives()
    assert d.storage_name is None
    assert not d.omit and not d.unique and not d.has_identifier
    assert d.index is None


# --- Storage slot --- #

def test_storage_name_only():
    d = parse_annotation("name")
    assert d.storage_name == "name"
    assert d.omit is False


def test_omit_sentinel_sets_omit():
    d = parse_annotation("-")
    assert d.storage_name == "-"
    assert d.omit is True
    assert is_ignored(d) is True


def test_empty_storage_slot_with_directives():
    d = parse_annotation(",unique")
    assert d.storage_name is None
    assert d.unique is True


def test_bare_directive_key_is_a_storage_name():
    d = parse_annotation("unique")
    assert d.storage_name == "unique"
    assert d.unique is False


def test_keyed_first_token_means_no_storage_name():
    d = parse_annotation("index=by_status")
    assert d.storage_name is None
    assert d.index == IndexDirective(name="by_status")


def test_whitespace_around_tokens_is_trimmed():
    d = parse_annotation("  status , unique , index = by_status ")
    assert d.storage_name == "status"
    assert d.unique is True
    assert d.index.name == "by_status"


# --- Identifier directive --- #

@pytest.mark.parametrize("raw,expected", [
    ("-,id", ""),
    ("-,id=", ""),
    ("-,id=auto", "auto"),
    ("-,id=manual", "manual"),  # kept raw; the resolver rejects it
])
def test_identifier_directive_values(raw, expected):
    d = parse_annotation(raw)
    assert d.identifier == expected
    assert d.has_identifier is True


def test_identifier_wins_over_omission():
    d = parse_annotation("-,id=auto")
    assert d.omit is True
    assert is_ignored(d) is False


# --- Index / unique / extras --- #

def test_index_without_name():
    d = parse_annotation("status,index")
    assert d.index == IndexDirective(name=None)


def test_unrecognized_keys_are_preserved_in_order():
    d = parse_annotation("name,omitempty,format=rfc3339")
    assert d.extras == (("omitempty", None), ("format", "rfc3339"))
    assert d.unique is False and d.index is None


# --- Malformed --- #

@pytest.mark.parametrize("raw,reason", [
    ("name,,unique", "empty directive"),
    ("name,unique,unique", "duplicate directive"),
    ("name,unique=yes", "does not take a value"),
    ("a.b", "storage name"),
    ("has space", "storage name"),
    ("name,1bad", "invalid directive key"),
    ("name,=x", "invalid directive key"),
    ("name,index=a=b", "invalid value"),
])
def test_malformed_annotations_raise(raw, reason):
    with pytest.raises(MalformedAnnotation, match=reason) as exc:
        parse_annotation(raw)
    assert exc.value.annotation == raw


def test_parse_is_pure_and_repeatable():
    raw = "status,unique,index=by_status,x=y"
    assert parse_annotation(raw) == parse_annotation(raw)
