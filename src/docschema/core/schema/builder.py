#!/usr/bin/env python3
"""
Purpose:
    Builds a `SchemaModel` from a `RecordDefinition`.

    Two result channels are kept apart:
      - non-fatal findings go to a `DiagnosticSink` and come back on the
        `SchemaBuildResult`;
      - structural violations raise a `SchemaError` and abort the build for
        that record only.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from docschema.core.errors import SchemaError
from docschema.core.schema.diagnostics import Diagnostic, DiagnosticSink
from docschema.core.schema.field_definition import RecordDefinition
from docschema.core.schema.identifier import IdentifierResolver
from docschema.core.schema.indexes import IndexAggregator
from docschema.core.schema.meta_fields import detect_meta_fields
from docschema.core.schema.model import FieldRecord, SchemaModel
from docschema.core.schema.walker import FieldRoute, SchemaWalker

logger = logging.getLogger(__name__)


# --- Options & results --- #

class BuildOptions(BaseModel):
    """Per-build switches."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    disable_meta_fields_detection: bool = Field(default=False, description="Skip meta-field detection.")
    collection_name: Optional[str] = Field(default=None, description="Defaults to the record name.")
    subcollection: bool = Field(default=False, description="Record lives in a subcollection.")


@dataclass(frozen=True)
class SchemaBuildResult:
    model: SchemaModel
    diagnostics: Tuple[Diagnostic, ...]


@dataclass(frozen=True)
class BuildOutcome:
    """Result of one record in a batch: exactly one of `result`/`error` is set."""
    record_name: str
    result: Optional[SchemaBuildResult] = None
    error: Optional[SchemaError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# --- Public API --- #

def build_schema(record: RecordDefinition, options: Optional[BuildOptions] = None) -> SchemaBuildResult:
    """
    Synthesize the schema model for `record`.

    Raises:
        SchemaError: any structural violation (identifier, meta fields, unique).
    """
    opts = options or BuildOptions()
    sink = DiagnosticSink(record.name)

    meta = detect_meta_fields(record, enabled=not opts.disable_meta_fields_detection)

    walk = SchemaWalker(record, sink).walk()

    resolver = IdentifierResolver()
    aggregator = IndexAggregator()
    fields: List[FieldRecord] = []

    for walked in walk.fields:
        if walked.route is FieldRoute.INDEX_REGISTRY:
            aggregator.register_index_field(walked)
        elif walked.route is FieldRoute.IDENTIFIER:
            fields.append(resolver.resolve(walked))
        else:
            fields.append(aggregator.add_field(walked))

    if aggregator.indexes and aggregator.index_field is None:
        first = next(f for f in fields if f.indexes)
        sink.report(
            position=first.position,
            field=first.path,
            message="index directives found but the record has no index-registry field; "
                    "indexes will not be maintained",
        )

    model = SchemaModel(
        record_name=record.name,
        package=record.package,
        collection_name=opts.collection_name or record.name,
        is_subcollection=opts.subcollection,
        fields=tuple(fields),
        identifier=resolver.descriptor,
        meta_fields=meta,
        uniques=aggregator.uniques,
        indexes=aggregator.indexes,
        index_field=aggregator.index_field,
        has_sequence_field=walk.has_sequence_field,
        has_optional_nested_field=walk.has_optional_nested_field,
    )
    logger.debug(
        "built schema for %s: %d field(s), %d diagnostic(s)",
        record.name, len(model.fields), len(sink),
    )
    return SchemaBuildResult(model=model, diagnostics=sink.items())


def build_schemas(
    records: Iterable[RecordDefinition],
    options: Optional[BuildOptions] = None,
) -> List[BuildOutcome]:
    """
    Build every record independently; a failure in one never affects another.
    """
    outcomes: List[BuildOutcome] = []
    for record in records:
        try:
            result = build_schema(record, options)
        except SchemaError as e:
            logger.error("%s: %s", record.name, e)
            outcomes.append(BuildOutcome(record_name=record.name, error=e))
            continue
        outcomes.append(BuildOutcome(record_name=record.name, result=result))
    return outcomes
