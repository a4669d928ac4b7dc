#!/usr/bin/env python3
"""
Purpose:
    Aggregates uniqueness constraints and secondary indexes across the walked
    fields of a record, assigns each storable field a schema-unique label, and
    records the reserved index-registry field.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from docschema.core import constants as C
from docschema.core.errors import UnsupportedUniqueFieldType
from docschema.core.schema.model import FieldRecord, IndexDescriptor, IndexField, UniqueEntry
from docschema.core.schema.walker import WalkedField


class NameDisambiguator:
    """
    Hands out unique names in first-occurrence order: the first request for
    a name gets it unchanged, later ones get a numeric suffix starting at 2.

        status, status -> status, status2
    """

    def __init__(self) -> None:
        self._seen: Dict[str, int] = {}

    def claim(self, name: str) -> str:
        count = self._seen.get(name, 0) + 1
        self._seen[name] = count
        if count == 1:
            return name
        candidate = f"{name}{count}"
        # a suffixed name may itself already be taken
        while candidate in self._seen:
            count += 1
            candidate = f"{name}{count}"
        self._seen[name] = count
        self._seen[candidate] = 1
        return candidate


class IndexAggregator:
    """Builds ordinary field records and the unique/index registries."""

    def __init__(self) -> None:
        self._labels = NameDisambiguator()
        self._index_names = NameDisambiguator()
        self._uniques: List[UniqueEntry] = []
        self._indexes: List[IndexDescriptor] = []
        self._index_field: Optional[IndexField] = None

    # --- Registration --- #

    def add_field(self, walked: WalkedField) -> FieldRecord:
        """
        Build the FieldRecord for an ordinary field, registering its unique
        and index directives.

        Raises:
            UnsupportedUniqueFieldType: `unique` on a non-string field.
        """
        directives = walked.directives
        if directives.unique and walked.type_name != C.TYPE_STRING:
            raise UnsupportedUniqueFieldType(
                f"{walked.path!r} is {walked.type_name!r}; the only field type that may use "
                f"the {C.DIRECTIVE_UNIQUE!r} directive is {C.TYPE_STRING!r}",
                position=walked.position, field=walked.path,
            )

        label = self._labels.claim(walked.storage_path)

        if directives.unique:
            self._uniques.append(UniqueEntry(field=walked.path, storage_name=label))

        indexes: Tuple[IndexDescriptor, ...] = ()
        if directives.index is not None:
            name = self._index_names.claim(directives.index.name or label)
            descriptor = IndexDescriptor(name=name, field=walked.path, storage_name=label)
            self._indexes.append(descriptor)
            indexes = (descriptor,)

        return FieldRecord(
            path=walked.path,
            storage_path=walked.storage_path,
            type_name=walked.type_name,
            optional_ancestors=walked.optional_ancestors,
            is_unique=directives.unique,
            is_sequence=walked.definition.type.is_sequence(),
            indexes=indexes,
            label=label,
            position=walked.position,
        )

    def register_index_field(self, walked: WalkedField) -> IndexField:
        """Enable index support; the field's storage name overrides the default."""
        self._index_field = IndexField(
            field=walked.path,
            storage_name=walked.directives.storage_name or C.INDEX_FIELD_NAME,
            type_name=walked.type_name,
        )
        return self._index_field

    # --- Query --- #

    @property
    def uniques(self) -> Tuple[UniqueEntry, ...]:
        return tuple(self._uniques)

    @property
    def indexes(self) -> Tuple[IndexDescriptor, ...]:
        return tuple(self._indexes)

    @property
    def index_field(self) -> Optional[IndexField]:
        return self._index_field
