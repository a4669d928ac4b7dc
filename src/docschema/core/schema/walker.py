#!/usr/bin/env python3
"""
Purpose:
    Flattens a record's field-definition tree into an ordered sequence of
    walked leaf fields, each carrying its logical path, storage path, the
    optional-record containers it sits under, its decoded directives and the
    route the builder should send it down.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from docschema.core import constants as C
from docschema.core.errors import MalformedAnnotation
from docschema.core.schema.annotation import AnnotationDirectives, is_ignored, parse_annotation
from docschema.core.schema.diagnostics import DiagnosticSink
from docschema.core.schema.field_definition import FieldDefinition, RecordDefinition
from docschema.core.utils import join_path


class FieldRoute(str, Enum):
    """Where a walked leaf goes next."""

    INDEX_REGISTRY = "index_registry"
    IDENTIFIER = "identifier"
    ORDINARY = "ordinary"


@dataclass(frozen=True)
class WalkedField:
    definition: FieldDefinition
    path: str
    storage_path: str
    optional_ancestors: Tuple[str, ...]
    directives: AnnotationDirectives
    route: FieldRoute
    depth: int

    @property
    def type_name(self) -> str:
        return self.definition.type.type_name

    @property
    def position(self) -> str:
        return str(self.definition.position)


@dataclass(frozen=True)
class WalkResult:
    fields: Tuple[WalkedField, ...]
    has_sequence_field: bool
    has_optional_nested_field: bool


class SchemaWalker:
    """
    Depth-first, declaration-ordered walk over one record.

    Path and optional-ancestor state travels down as call arguments; the only
    instance state is the output list and the two monotonic schema-wide flags.
    """

    def __init__(self, record: RecordDefinition, sink: DiagnosticSink):
        self._record = record
        self._sink = sink
        self._out: List[WalkedField] = []
        self._has_sequence = False
        self._has_optional_nested = False

    def walk(self) -> WalkResult:
        self._out = []
        self._has_sequence = False
        self._has_optional_nested = False
        self._walk_fields(self._record.fields, "", "", (), 0)
        return WalkResult(
            fields=tuple(self._out),
            has_sequence_field=self._has_sequence,
            has_optional_nested_field=self._has_optional_nested,
        )

    # --- Recursion --- #

    def _walk_fields(
        self,
        fields: Iterable[FieldDefinition],
        parent_path: str,
        parent_storage: str,
        optional_ancestors: Tuple[str, ...],
        depth: int,
    ) -> None:
        for fd in sorted(fields, key=lambda f: f.order):
            self._walk_field(fd, parent_path, parent_storage, optional_ancestors, depth)

    def _walk_field(
        self,
        fd: FieldDefinition,
        parent_path: str,
        parent_storage: str,
        optional_ancestors: Tuple[str, ...],
        depth: int,
    ) -> None:
        path = join_path(parent_path, fd.name)

        try:
            directives = parse_annotation(fd.annotation)
        except MalformedAnnotation as e:
            self._sink.report(
                position=str(fd.position),
                field=path,
                message=f"skipped field: {e.reason}",
                annotation=fd.annotation,
            )
            return

        if directives.storage_name in C.DIRECTIVE_KEYS:
            self._sink.report(
                position=str(fd.position),
                field=path,
                message=f"storage name {directives.storage_name!r} is also a directive key; "
                        f"write \",{directives.storage_name}\" to apply the directive",
                annotation=fd.annotation,
            )

        storage_path = join_path(parent_storage, directives.storage_name or fd.name)

        nested = fd.type.nested_record()
        if nested is not None:
            if fd.type.is_optional_record():
                self._has_optional_nested = True
                optional_ancestors = optional_ancestors + (path,)
            self._walk_fields(nested.fields, path, storage_path, optional_ancestors, depth + 1)
            return

        if fd.type.is_sequence():
            self._has_sequence = True

        if is_ignored(directives):
            return

        self._out.append(WalkedField(
            definition=fd,
            path=path,
            storage_path=storage_path,
            optional_ancestors=optional_ancestors,
            directives=directives,
            route=self._route(fd, directives, depth),
            depth=depth,
        ))

    @staticmethod
    def _route(fd: FieldDefinition, directives: AnnotationDirectives, depth: int) -> FieldRoute:
        if (
            depth == 0
            and fd.name == C.INDEX_FIELD_NAME
            and fd.type.type_name == C.TYPE_BOOL_MAP
            and not directives.has_identifier
        ):
            return FieldRoute.INDEX_REGISTRY
        if directives.has_identifier:
            return FieldRoute.IDENTIFIER
        return FieldRoute.ORDINARY
