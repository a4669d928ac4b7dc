#!/usr/bin/env python3
"""
docschema configuration loader.
"""

import os
from pathlib import Path
from typing import Any, Dict, Final, List

from docschema.core.schema.builder import BuildOptions
from docschema.core.utils import merge_dicts, load_json_file

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "render_template_paths": [str(Path("./templates").resolve())],
    "output_dir": ".",
    "disable_meta_fields_detection": False,
    "logging": {"level": "INFO"},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "docschema" / "config.json"

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load docschema configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/docschema/config.json)
        3. Project config (./docschema.json)
        4. Environment overrides:
           - DOCSCHEMA_TEMPLATE_PATHS (pathsep-separated list)
           - DOCSCHEMA_DISABLE_META_FIELDS (1/true/yes/on)
           - DOCSCHEMA_LOG_LEVEL

    Returns:
        A merged configuration dictionary.
    """
    # 1) start with defaults
    config = dict(DEFAULT_CONFIG)

    # 2) global config
    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    # 3) project config
    project_path = Path.cwd() / "docschema.json"
    config = merge_dicts(config, load_json_file(project_path))

    # 4) environment overrides
    template_paths_env = os.getenv("DOCSCHEMA_TEMPLATE_PATHS")
    if template_paths_env:
        config["render_template_paths"] = _split_paths_env(template_paths_env)

    disable_meta_env = os.getenv("DOCSCHEMA_DISABLE_META_FIELDS")
    if disable_meta_env is not None:
        config["disable_meta_fields_detection"] = disable_meta_env.strip().lower() in _TRUTHY

    log_level_env = os.getenv("DOCSCHEMA_LOG_LEVEL")
    if log_level_env:
        config.setdefault("logging", {})["level"] = log_level_env

    return config


def build_options(config: Dict[str, Any], **overrides: Any) -> BuildOptions:
    """
    Derive `BuildOptions` from a merged config. Keyword overrides (e.g. from
    CLI flags) win over config values; None overrides are ignored.
    """
    values = {
        "disable_meta_fields_detection": bool(config.get("disable_meta_fields_detection", False)),
        "collection_name": config.get("collection_name"),
        "subcollection": bool(config.get("subcollection", False)),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return BuildOptions(**values)


# --- Internals --- #

def _split_paths_env(value: str) -> List[str]:
    """
    Split a path-list env var on os.pathsep, trimming empties and expanding '~'.
    """
    parts = [p.strip() for p in value.split(os.pathsep)]
    return [str(Path(p).expanduser()) for p in parts if p]
