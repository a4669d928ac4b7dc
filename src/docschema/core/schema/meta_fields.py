#!/usr/bin/env python3
"""
Purpose:
    Detects the reserved bookkeeping (audit/versioning) fields at the top level
    of a record. The set is all-or-nothing.
"""
from __future__ import annotations

import logging
from typing import Dict, List

from docschema.core.constants import META_FIELDS
from docschema.core.errors import IncompleteMetaFields
from docschema.core.schema.field_definition import FieldDefinition, RecordDefinition
from docschema.core.schema.model import MetaFieldSet

logger = logging.getLogger(__name__)


def _blame(record: RecordDefinition, top_level: List[FieldDefinition], mistyped: List[str]) -> str:
    for f in top_level:
        if f.name in mistyped:
            return str(f.position)
    return str(record.position)


def detect_meta_fields(record: RecordDefinition, *, enabled: bool = True) -> MetaFieldSet:
    """
    Scan the top-level fields of `record` for the reserved meta fields.

    Outcomes:
        - all present with the expected types -> enabled
        - none present                        -> disabled
        - anything in between                 -> IncompleteMetaFields

    A present field with the wrong type is logged and counted as not matched.
    With `enabled=False` the scan is skipped and the set is disabled.

    Raises:
        IncompleteMetaFields: the reserved set is only partially satisfied.
    """
    if not enabled:
        return MetaFieldSet()

    top_level = [f for f in record.fields if f.name in META_FIELDS]
    declared: Dict[str, str] = {f.name: f.type.type_name for f in top_level}
    if not declared:
        return MetaFieldSet()

    mistyped: List[str] = []
    for name, got in declared.items():
        expected = META_FIELDS[name]
        if got != expected:
            logger.warning("%s in meta fields should be %s, but got %s", name, expected, got)
            mistyped.append(name)

    missing = [name for name in META_FIELDS if name not in declared]
    if not missing and not mistyped:
        return MetaFieldSet(enabled=True, fields=tuple(META_FIELDS))

    problems = []
    if missing:
        problems.append(f"missing {', '.join(missing)}")
    if mistyped:
        problems.append(
            "mistyped " + ", ".join(f"{n} (expected {META_FIELDS[n]})" for n in mistyped)
        )
    raise IncompleteMetaFields(
        f"meta fields of {record.name!r} are incomplete: {'; '.join(problems)}; "
        f"declare all of {', '.join(META_FIELDS)} or none of them",
        missing=tuple(missing),
        mistyped=tuple(mistyped),
        position=_blame(record, top_level, mistyped),
    )
