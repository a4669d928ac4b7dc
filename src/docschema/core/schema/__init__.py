# core/schema/__init__.py
from .field_definition import FieldDefinition, RecordDefinition, SourcePosition
from .field_type import TypeKind, TypeRef
from .model import SchemaModel, FieldRecord, IdentifierDescriptor, IdentifierMode
from .builder import BuildOptions, BuildOutcome, SchemaBuildResult, build_schema, build_schemas

__all__ = [
    "FieldDefinition", "RecordDefinition", "SourcePosition",
    "TypeKind", "TypeRef",
    "SchemaModel", "FieldRecord", "IdentifierDescriptor", "IdentifierMode",
    "BuildOptions", "BuildOutcome", "SchemaBuildResult", "build_schema", "build_schemas",
]
