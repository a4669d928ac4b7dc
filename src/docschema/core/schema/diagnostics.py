#!/usr/bin/env python3
"""
Purpose:
    Append-only sink for non-fatal, per-field problems found while building a
    schema. Every report is also logged at WARNING.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """
    One non-fatal finding.
    - position:   source position of the field
    - record:     record name the field belongs to
    - field:      logical path of the field
    - annotation: raw annotation string (if relevant)
    - message:    what happened
    """
    position: str
    record: str
    field: str
    message: str
    annotation: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.position}: {self.message} (field {self.field!r} in record {self.record!r})"


class DiagnosticSink:
    """Collects diagnostics for one schema build."""

    def __init__(self, record: str):
        self._record = record
        self._items: List[Diagnostic] = []

    def report(self, *, position: str, field: str, message: str, annotation: Optional[str] = None) -> Diagnostic:
        d = Diagnostic(
            position=position,
            record=self._record,
            field=field,
            message=message,
            annotation=annotation,
        )
        self._items.append(d)
        logger.warning("%s", d)
        return d

    def items(self) -> Tuple[Diagnostic, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)
