#!/usr/bin/env python3

import json
from typing import List, Optional

from pydantic import ValidationError

from docschema.core.app_context import AppContext
from docschema.core.config import build_options
from docschema.core.formatting import format_error_lines
from docschema.core.loader import load_definitions
from docschema.core.schema import BuildOutcome, RecordDefinition, build_schemas


def register(subparsers):
    bp = subparsers.add_parser("build", help="Build schema models from record definitions")
    bp.add_argument("definitions", help="Path to a .yaml/.yml/.json definitions file")
    bp.add_argument("--record", action="append", help="Only build this record (repeatable)")
    bp.add_argument("--json", action="store_true", help="JSON output")
    bp.add_argument(
        "--disable-meta-fields-detection",
        action="store_true",
        default=None,
        help="Do not detect reserved bookkeeping fields",
    )
    bp.set_defaults(func=build_command)


def build_command(args, ctx: AppContext) -> int:
    outcomes = build_from_args(args, ctx)
    if outcomes is None:
        return 1

    if args.json:
        print(json.dumps([_outcome_payload(o) for o in outcomes], indent=2))
        return 0 if all(o.ok for o in outcomes) else 1

    for o in outcomes:
        print(_format_outcome(o))
    return 0 if all(o.ok for o in outcomes) else 1


# --- Shared with `render` --- #

def build_from_args(args, ctx: AppContext) -> Optional[List[BuildOutcome]]:
    """Load definitions and build the selected records; None if loading failed."""
    try:
        records = load_definitions(args.definitions)
    except (OSError, ValueError, ValidationError) as e:
        print(f"Cannot load definitions {args.definitions!r}:")
        for line in format_error_lines(e):
            print(f"  {line}")
        return None

    records = _select_records(records, args.record)
    if records is None:
        print(f"No record named {', '.join(args.record)} in {args.definitions!r}")
        return None

    options = build_options(
        ctx.config,
        disable_meta_fields_detection=getattr(args, "disable_meta_fields_detection", None),
    )
    return build_schemas(records, options)


def _select_records(records: List[RecordDefinition], names: Optional[List[str]]) -> Optional[List[RecordDefinition]]:
    if not names:
        return records
    wanted = set(names)
    selected = [r for r in records if r.name in wanted]
    return selected or None


# --- Output --- #

def _outcome_payload(o: BuildOutcome) -> dict:
    if not o.ok:
        return {"record": o.record_name, "ok": False, "error": format_error_lines(o.error)[0]}
    return {
        "record": o.record_name,
        "ok": True,
        "schema": o.result.model.model_dump(mode="json"),
        "diagnostics": [str(d) for d in o.result.diagnostics],
    }


def _format_outcome(o: BuildOutcome) -> str:
    if not o.ok:
        return f"✗ {o.record_name}: {format_error_lines(o.error)[0]}"

    model = o.result.model
    ident = "none"
    if model.identifier:
        ident = f"{model.identifier.field_name} ({model.identifier.mode.value})"
    lines = [
        f"✓ {model.record_name}: {len(model.fields)} field(s), identifier {ident}, "
        f"meta fields {'on' if model.meta_fields.enabled else 'off'}, "
        f"indexes {'on' if model.indexes_enabled else 'off'}"
    ]
    for f in model.fields:
        flags = [n for n, on in (("id", f.is_identifier), ("unique", f.is_unique), ("indexed", bool(f.indexes))) if on]
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        lines.append(f"    - {f.path:28} {f.storage_path or '<document id>':28} {f.type_name}{suffix}")
    for d in o.result.diagnostics:
        lines.append(f"    ! {d}")
    return "\n".join(lines)
