#!/usr/bin/env python3
"""
Purpose:
    Error taxonomy for schema synthesis.

    `MalformedAnnotation` is per-field and recoverable: the walker turns it
    into a diagnostic and moves on. Everything deriving from `SchemaError` is
    a structural violation that aborts the build for that record.
"""
from __future__ import annotations

from typing import Optional


class MalformedAnnotation(ValueError):
    """Raised when a raw annotation string is not valid directive syntax."""

    def __init__(self, annotation: str, reason: str):
        self.annotation = annotation
        self.reason = reason
        super().__init__(f"malformed annotation {annotation!r}: {reason}")


class SchemaError(ValueError):
    """
    Fatal schema violation.

    Attributes:
        rule:     human-readable statement of the violated rule
        position: source position of the offending field (if known)
        field:    logical path of the offending field (if known)
    """

    def __init__(self, rule: str, *, position: Optional[str] = None, field: Optional[str] = None):
        self.rule = rule
        self.position = position
        self.field = field
        super().__init__(f"{position}: {rule}" if position else rule)


class InvalidIdentifierDirective(SchemaError):
    pass


class NonStringIdentifier(SchemaError):
    pass


class MissingOmitOnIdentifier(SchemaError):
    pass


class DuplicateIdentifierField(SchemaError):
    pass


class UnsupportedUniqueFieldType(SchemaError):
    pass


class IncompleteMetaFields(SchemaError):
    """Some, but not all, of the reserved bookkeeping fields are declared correctly."""

    def __init__(self, rule: str, *, missing: tuple[str, ...] = (), mistyped: tuple[str, ...] = (),
                 position: Optional[str] = None):
        self.missing = missing
        self.mistyped = mistyped
        super().__init__(rule, position=position)
