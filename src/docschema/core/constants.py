#!/usr/bin/env python3
"""
Core constants used across docschema.

- Annotation mini-language: sentinels and recognized directive keys.
- Reserved fields: the index-registry field and the bookkeeping (meta) fields.
- File handling: supported definition extensions and default text encoding.
- Regular expressions: compiled patterns used by the parser and validators.
"""

import re
from types import MappingProxyType
from typing import Final, Mapping

# --- Type names --- #

TYPE_STRING: Final[str] = "string"
TYPE_INT: Final[str] = "int"
TYPE_TIMESTAMP: Final[str] = "timestamp"
TYPE_OPTIONAL_TIMESTAMP: Final[str] = "optional[timestamp]"
TYPE_BOOL_MAP: Final[str] = "map[string]bool"


# --- Annotation mini-language --- #

# Storage-name slot value that keeps a field out of storage
OMIT_SENTINEL: Final[str] = "-"

# Identifier directive value that requests generated identifiers
AUTO_SENTINEL: Final[str] = "auto"

DIRECTIVE_IDENTIFIER: Final[str] = "id"
DIRECTIVE_UNIQUE: Final[str] = "unique"
DIRECTIVE_INDEX: Final[str] = "index"

DIRECTIVE_KEYS: Final[frozenset[str]] = frozenset({DIRECTIVE_IDENTIFIER, DIRECTIVE_UNIQUE, DIRECTIVE_INDEX})

PATH_SEPARATOR: Final[str] = "."


# --- Reserved fields --- #

INDEX_FIELD_NAME: Final[str] = "Indexes"

# Bookkeeping fields and the exact type each must be declared with
META_FIELDS: Final[Mapping[str, str]] = MappingProxyType({
    "CreatedAt": TYPE_TIMESTAMP,
    "CreatedBy": TYPE_STRING,
    "UpdatedAt": TYPE_TIMESTAMP,
    "UpdatedBy": TYPE_STRING,
    "DeletedAt": TYPE_OPTIONAL_TIMESTAMP,
    "DeletedBy": TYPE_STRING,
    "Version": TYPE_INT,
})


# --- File handling --- #

SUPPORTED_DEFINITION_EXT: Final[frozenset[str]] = frozenset({".json", ".yaml", ".yml"})

DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"

DEFAULT_TEMPLATE: Final[str] = "labels.py.j2"


# --- Regular Expressions --- #

# Field and record names: leading letter/underscore, then letters/numbers/underscores
FIELDNAME_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Storage names may not contain the path separator or whitespace
STORAGE_NAME_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[A-Za-z0-9_$-]+$")

# Directive keys and values
DIRECTIVE_KEY_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
DIRECTIVE_VALUE_RE: re.Pattern[str] = re.compile(r"^[^\s,=]*$")


# --- Runtime guard --- #
def validate_constants():
    """
    Ensure constants are valid at runtime.
    """
    if INDEX_FIELD_NAME in META_FIELDS:
        raise RuntimeError(f"{INDEX_FIELD_NAME!r} cannot also be a meta field")
    if STORAGE_NAME_ALLOWED_RE.fullmatch(OMIT_SENTINEL) is None:
        raise RuntimeError("OMIT_SENTINEL must be a syntactically valid storage name")

validate_constants()
