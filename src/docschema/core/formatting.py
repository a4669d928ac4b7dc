#!/usr/bin/env python3
"""
Formatting helpers for user-facing error output.

- One-line messages for Pydantic v2 `ValidationError`s raised while loading
  definitions.
- One-line messages for fatal `SchemaError`s.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence

from docschema.core.errors import SchemaError


# --- Public API --- #

def format_error_lines(exc: Exception) -> List[str]:
    """
    Return stable one-line messages for any error the CLI surfaces.

    Examples:
        records[0].fields[1].name: Value error, The field name 'a b' must match ...
        tasks.yaml:0:0: identifier field 'ID' must be 'string', got 'int'
    """
    if isinstance(exc, SchemaError):
        return [str(exc)]

    errors: Sequence[dict[str, Any]] | None = None
    if hasattr(exc, "errors") and callable(getattr(exc, "errors")):
        try:
            errors = exc.errors()  # type: ignore[assignment]
        except (TypeError, ValueError):
            errors = None

    if not errors:
        return [str(exc).splitlines()[0]] if str(exc) else [type(exc).__name__]

    msgs: List[str] = []
    for err in errors:
        path = _format_error_loc(err.get("loc", ()))
        msgs.append(f"{path}: {err.get('msg', 'Validation error')}")
    return msgs


# --- Internals --- #

def _format_error_loc(loc: Iterable[Any]) -> str:
    """
    Convert a Pydantic error `loc` tuple into a dotted path with index suffixes.

    Examples:
        ('fields', 1, 'name') -> "fields[1].name"
        ()                    -> "<root>"
    """
    parts: List[str] = []
    for seg in loc:
        if isinstance(seg, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{seg}]"
            else:
                parts.append(f"[{seg}]")
        else:
            parts.append(str(seg))
    return ".".join(parts) if parts else "<root>"
