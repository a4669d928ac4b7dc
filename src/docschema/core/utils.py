#!/usr/bin/env python3
"""
Purpose:
    Provides common utility functions such as name validation, dotted path
    joining, case conversion, dictionary merge, and file I/O utilities.
"""

import json
import re
from pathlib import Path
from typing import Dict, Any, Optional

from docschema.core.constants import (
    FIELDNAME_ALLOWED_RE, DEFAULT_TEXT_ENCODING, PATH_SEPARATOR
)

# Upper-case runs (acronyms), capitalized words, lower-case words and digit runs
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z]|[^A-Za-z]|$)|[A-Z]?[a-z]+|[A-Z]+|\d+")


# --- Validation Helpers --- #

def is_valid_fieldname_pattern(name: str) -> bool:
    """Return True if the field name fully matches the allowed pattern."""
    return bool(FIELDNAME_ALLOWED_RE.fullmatch(name))


# --- Path & Naming Helpers --- #

def join_path(*segments: Optional[str]) -> str:
    """
    Dot-join path segments, dropping empty or missing ones.

    Examples:
        join_path("", "Name")          -> "Name"
        join_path("Detail", "Status")  -> "Detail.Status"
    """
    return PATH_SEPARATOR.join(s for s in segments if s)


def to_lower_camel(name: str) -> str:
    """
    Convert an identifier to lowerCamelCase, keeping inner acronyms intact.

    Examples:
        "ID"        -> "id"
        "UserID"    -> "userID"
        "user_name" -> "userName"
        "HTTPCode"  -> "httpCode"
    """
    words = _WORD_RE.findall(name)
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(w if w.isupper() else w.capitalize() for w in tail)


def to_snake(name: str) -> str:
    """
    Convert an identifier or dotted path to snake_case.

    Examples:
        "UserID"        -> "user_id"
        "Detail.Status" -> "detail_status"
    """
    return "_".join(w.lower() for w in _WORD_RE.findall(name))


# --- Generic Utilities --- #

def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries (values from 'override' take precedence).
    Non-dict values are overwritten; dict values are merged depth-first.
    """
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# --- File I/O Helpers --- #

def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON file from 'path'. Returns an empty dict if the file is missing.

    Raises:
        ValueError: if the file exists but contains invalid JSON.
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding=DEFAULT_TEXT_ENCODING) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {str(path)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e
