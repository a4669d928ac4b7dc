#!/usr/bin/env python3
"""
Purpose:
    Parses a field's raw annotation string into structured directives.

    The mini-language is a flat, comma-separated token list:

        <storage-name>[,<key>[=<value>]]...

    - The first token, unless it contains '=', is the storage-name slot.
      It may be empty (no storage name) or the omit sentinel '-'.
    - Remaining tokens are keyed directives. Recognized keys are
      `id` (value: '' or 'auto'), `unique` (no value) and `index`
      (value: optional override name). Any other key is kept in `extras`.

    Examples:
        "name"               -> storage name 'name'
        "-,id=auto"          -> omitted, auto-generated identifier
        "status,unique"      -> storage name 'status', unique
        ",index=by_status"   -> no storage name, index named 'by_status'

    A bare first token is always the storage name: "unique" names the field
    `unique` in storage, ",unique" applies the directive. The walker reports
    a diagnostic when the storage name collides with a directive key.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from docschema.core import constants as C
from docschema.core.errors import MalformedAnnotation


# --- Data model --- #

@dataclass(frozen=True)
class IndexDirective:
    """Secondary-index request; `name` overrides the default index name."""
    name: Optional[str] = None


@dataclass(frozen=True)
class AnnotationDirectives:
    """
    Decoded annotation.

    - storage_name: storage slot value ('-' when omitted), None when absent
    - omit:         storage slot holds the omit sentinel
    - identifier:   None when absent, otherwise the raw directive value
    - unique:       unique directive present
    - index:        index directive, None when absent
    - extras:       unrecognized keyed directives, in declaration order
    """
    storage_name: Optional[str] = None
    omit: bool = False
    identifier: Optional[str] = None
    unique: bool = False
    index: Optional[IndexDirective] = None
    extras: Tuple[Tuple[str, Optional[str]], ...] = field(default=())

    @property
    def has_identifier(self) -> bool:
        return self.identifier is not None


EMPTY_DIRECTIVES = AnnotationDirectives()


# --- Public API --- #

def parse_annotation(raw: Optional[str]) -> AnnotationDirectives:
    """
    Parse `raw` into `AnnotationDirectives`.

    A missing or blank annotation is valid and yields all-absent directives.

    Raises:
        MalformedAnnotation: if `raw` is not valid directive syntax.
    """
    if raw is None or not raw.strip():
        return EMPTY_DIRECTIVES

    tokens = [t.strip() for t in raw.split(",")]

    storage_name: Optional[str] = None
    if "=" not in tokens[0]:
        storage_name = _parse_storage_slot(raw, tokens.pop(0))

    keyed = _parse_keyed(raw, tokens)

    unique = C.DIRECTIVE_UNIQUE in keyed
    if unique and keyed[C.DIRECTIVE_UNIQUE] is not None:
        raise MalformedAnnotation(raw, f"{C.DIRECTIVE_UNIQUE!r} does not take a value")

    index: Optional[IndexDirective] = None
    if C.DIRECTIVE_INDEX in keyed:
        index = IndexDirective(name=keyed[C.DIRECTIVE_INDEX] or None)

    identifier: Optional[str] = None
    if C.DIRECTIVE_IDENTIFIER in keyed:
        identifier = keyed[C.DIRECTIVE_IDENTIFIER] or ""

    extras = tuple((k, v) for k, v in keyed.items() if k not in C.DIRECTIVE_KEYS)

    return AnnotationDirectives(
        storage_name=storage_name,
        omit=storage_name == C.OMIT_SENTINEL,
        identifier=identifier,
        unique=unique,
        index=index,
        extras=extras,
    )


def is_ignored(directives: AnnotationDirectives) -> bool:
    """
    True when the field must be left out of the schema entirely: the storage
    slot is the omit sentinel and no identifier directive is present.
    """
    return directives.omit and not directives.has_identifier


# --- Internals --- #

def _parse_storage_slot(raw: str, token: str) -> Optional[str]:
    if token == "":
        return None
    if not C.STORAGE_NAME_ALLOWED_RE.fullmatch(token):
        raise MalformedAnnotation(
            raw, f"storage name {token!r} must match {C.STORAGE_NAME_ALLOWED_RE.pattern!r}"
        )
    return token


def _parse_keyed(raw: str, tokens: list[str]) -> Dict[str, Optional[str]]:
    keyed: Dict[str, Optional[str]] = {}
    for token in tokens:
        if token == "":
            raise MalformedAnnotation(raw, "empty directive")
        key, sep, value = token.partition("=")
        key = key.strip()
        if not C.DIRECTIVE_KEY_RE.fullmatch(key):
            raise MalformedAnnotation(raw, f"invalid directive key {key!r}")
        if key in keyed:
            raise MalformedAnnotation(raw, f"duplicate directive {key!r}")
        if sep:
            value = value.strip()
            if not C.DIRECTIVE_VALUE_RE.fullmatch(value):
                raise MalformedAnnotation(raw, f"invalid value {value!r} for directive {key!r}")
            keyed[key] = value
        else:
            keyed[key] = None
    return keyed
