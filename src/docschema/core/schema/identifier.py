#!/usr/bin/env python3
"""
Purpose:
    Validates the field carrying the identifier directive and records it as the
    schema's identifier, producing the document-identifier field record used
    for identifier-based lookups.
"""
from __future__ import annotations

from typing import Optional

from docschema.core import constants as C
from docschema.core.errors import (
    DuplicateIdentifierField,
    InvalidIdentifierDirective,
    MissingOmitOnIdentifier,
    NonStringIdentifier,
)
from docschema.core.schema.model import FieldRecord, IdentifierDescriptor, IdentifierMode
from docschema.core.schema.walker import WalkedField
from docschema.core.utils import to_lower_camel


class IdentifierResolver:
    """Accepts at most one identifier field per schema."""

    def __init__(self) -> None:
        self._descriptor: Optional[IdentifierDescriptor] = None
        self._path: Optional[str] = None

    @property
    def descriptor(self) -> Optional[IdentifierDescriptor]:
        return self._descriptor

    def resolve(self, walked: WalkedField) -> FieldRecord:
        """
        Validate `walked` and register it as the identifier.

        Raises:
            DuplicateIdentifierField: an identifier was already accepted
            InvalidIdentifierDirective: directive value is not '' or 'auto'
            MissingOmitOnIdentifier: storage slot is not the omit sentinel
            NonStringIdentifier: declared type is not string
        """
        pos = walked.position
        value = walked.directives.identifier

        if self._descriptor is not None:
            raise DuplicateIdentifierField(
                f"{walked.path!r} declares an identifier, but {self._path!r} already is one; "
                "only one identifier field is allowed",
                position=pos, field=walked.path,
            )

        if value == "":
            mode = IdentifierMode.MANUAL
        elif value == C.AUTO_SENTINEL:
            mode = IdentifierMode.AUTO
        else:
            raise InvalidIdentifierDirective(
                f"the {C.DIRECTIVE_IDENTIFIER!r} directive of {walked.path!r} must be empty "
                f"or {C.AUTO_SENTINEL!r}, got {value!r}",
                position=pos, field=walked.path,
            )

        if walked.directives.storage_name != C.OMIT_SENTINEL:
            raise MissingOmitOnIdentifier(
                f"identifier field {walked.path!r} must use {C.OMIT_SENTINEL!r} as its storage name "
                f"(e.g. \"{C.OMIT_SENTINEL},{C.DIRECTIVE_IDENTIFIER}={value}\")",
                position=pos, field=walked.path,
            )

        if walked.type_name != C.TYPE_STRING:
            raise NonStringIdentifier(
                f"identifier field {walked.path!r} must be {C.TYPE_STRING!r}, got {walked.type_name!r}",
                position=pos, field=walked.path,
            )

        name = walked.definition.name
        self._descriptor = IdentifierDescriptor(
            field_name=name,
            field_type=walked.type_name,
            mode=mode,
            accessor_name=to_lower_camel(name),
        )
        self._path = walked.path

        return FieldRecord(
            path=walked.path,
            type_name=walked.type_name,
            optional_ancestors=walked.optional_ancestors,
            is_identifier=True,
            is_document_id=True,
            position=pos,
        )
