#!/usr/bin/env python3

from pathlib import Path

from jinja2 import TemplateError

from docschema.cli.build import build_from_args
from docschema.core.app_context import AppContext
from docschema.core.constants import DEFAULT_TEMPLATE
from docschema.core.formatting import format_error_lines
from docschema.core.render.engine import render_schema


def register(subparsers):
    rp = subparsers.add_parser("render", help="Render schema models through a template")
    rp.add_argument("definitions", help="Path to a .yaml/.yml/.json definitions file")
    rp.add_argument("--record", action="append", help="Only render this record (repeatable)")
    rp.add_argument("--template", default=DEFAULT_TEMPLATE, help=f"Template name (default: {DEFAULT_TEMPLATE})")
    rp.add_argument("--output-dir", help="Directory for generated files (default: config 'output_dir')")
    rp.add_argument("--app-version", default="", help="Version string stamped into generated files")
    rp.set_defaults(func=render_command)


def render_command(args, ctx: AppContext) -> int:
    outcomes = build_from_args(args, ctx)
    if outcomes is None:
        return 1

    output_dir = Path(args.output_dir) if args.output_dir else ctx.output_dir
    status = 0
    for o in outcomes:
        if not o.ok:
            print(f"✗ {o.record_name}: {format_error_lines(o.error)[0]}")
            status = 1
            continue
        try:
            out = render_schema(
                o.result.model,
                template_name=args.template,
                templates_roots=ctx.template_roots,
                output_dir=output_dir,
                app_version=args.app_version,
            )
        except (TemplateError, OSError) as e:
            print(f"✗ {o.record_name}: rendering failed: {e}")
            status = 1
            continue
        print(f"✓ {o.record_name} -> {out}")
    return status
