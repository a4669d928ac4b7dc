#!/usr/bin/env python3
"""
Purpose:
    Wires together the docschema application context: merged configuration,
    derived build options and template search roots.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from docschema.core.config import build_options, load_config
from docschema.core.schema.builder import BuildOptions


# --- Data model --- #

@dataclass(frozen=True)
class AppContext:
    """Immutable container for configuration and what is derived from it."""
    config: Dict[str, Any]
    options: BuildOptions
    template_roots: List[Path]

    @property
    def output_dir(self) -> Path:
        return Path(self.config.get("output_dir") or ".")


# --- Factory --- #

def build_context(
    *,
    config: Optional[Dict[str, Any]] = None,
    template_roots: Optional[Iterable[Path]] = None,
) -> AppContext:
    """
    Build an `AppContext`.

    Args:
        config:
            Pre-merged configuration. If omitted, `load_config()` is used.
        template_roots:
            Optional override for template search paths. Defaults to
            `config['render_template_paths']`.
    """
    cfg = config or load_config()

    roots = template_roots or cfg.get("render_template_paths", [])
    if isinstance(roots, str):
        roots = [roots]
    template_paths = [Path(p) for p in roots]

    return AppContext(config=cfg, options=build_options(cfg), template_roots=template_paths)
