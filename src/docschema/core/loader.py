#!/usr/bin/env python3
"""
Purpose:
    Loads record definitions from a YAML or JSON file.

    File shape:

        records:
          - name: Task
            fields:
              - name: ID
                type: string
                annotation: "-,id=auto"
              - name: Detail
                type:
                  kind: optional
                  inner:
                    kind: record
                    name: Detail
                    fields:
                      - {name: Status, type: string, annotation: status}

    Missing `order` values default to the list index and missing positions
    default to the file name.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from docschema.core.constants import DEFAULT_TEXT_ENCODING, SUPPORTED_DEFINITION_EXT
from docschema.core.schema.field_definition import RecordDefinition


def load_definitions(path: Union[str, Path]) -> List[RecordDefinition]:
    """
    Load every record definition in `path`.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: unsupported extension or unparseable content
        ValidationError: if a definition fails model validation
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"The file {str(p)!r} does not exist")
    if p.suffix.lower() not in SUPPORTED_DEFINITION_EXT:
        raise ValueError(
            f"Invalid definition file extension for {p.name!r}; expected one of {sorted(SUPPORTED_DEFINITION_EXT)}"
        )

    data = _read_payload(p)
    records = data.get("records") if isinstance(data, dict) else None
    if not isinstance(records, list):
        raise ValueError(f"{p.name!r} must contain a top-level 'records' list")

    return [RecordDefinition.model_validate(_with_positions(r, p.name)) for r in records]


# --- Internals --- #

def _read_payload(p: Path) -> Any:
    text = p.read_text(encoding=DEFAULT_TEXT_ENCODING)
    if p.suffix.lower() == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Invalid JSON in {str(p)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
            ) from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {str(p)!r}: {e}") from e


def _with_positions(record: Any, filename: str) -> Any:
    """Fill in default source positions so diagnostics can point somewhere."""
    if not isinstance(record, dict):
        return record
    record = dict(record)
    record.setdefault("position", {"filename": filename})
    if isinstance(record.get("fields"), list):
        record["fields"] = _fields_with_positions(record["fields"], filename)
    return record


def _fields_with_positions(fields: List[Any], filename: str) -> List[Any]:
    out = []
    for f in fields:
        if isinstance(f, dict):
            f = dict(f)
            f.setdefault("position", {"filename": filename})
            nested = f.get("type")
            if isinstance(nested, dict):
                f["type"] = _type_with_positions(nested, filename)
        out.append(f)
    return out


def _type_with_positions(node: Dict[str, Any], filename: str) -> Dict[str, Any]:
    node = dict(node)
    if isinstance(node.get("fields"), list):
        node["fields"] = _fields_with_positions(node["fields"], filename)
    for part in ("inner", "item", "key", "value"):
        if isinstance(node.get(part), dict):
            node[part] = _type_with_positions(node[part], filename)
    return node
