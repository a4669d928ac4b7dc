#!/usr/bin/env python3
"""
Purpose:
    Provides a module-level accessor for the docschema AppContext, with
    optional reload and overrides for configuration and template roots.
"""
from typing import Optional, Dict, Any, Iterable
from pathlib import Path

from docschema.core.app_context import AppContext, build_context

# --- Module state --- #

_CTX: Optional[AppContext] = None


# --- Public API --- #

def get_context(
    *,
    force_reload: bool = False,
    config_override: Optional[Dict[str, Any]] = None,
    template_roots_override: Optional[Iterable[Path]] = None,
) -> AppContext:
    """
    Return the process-wide `AppContext`, building it on first use or when
    a reload/override is requested.
    """
    global _CTX
    if _CTX is None or force_reload or config_override or template_roots_override:
        _CTX = build_context(config=config_override, template_roots=template_roots_override)
    return _CTX
