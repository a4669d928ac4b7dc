#!/usr/bin/env python3

import argparse
import sys

from docschema.core.app import get_context
from docschema.core.log import configure_logging
from docschema.cli import build, config, render

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="docschema", description="Document-store schema synthesis")
    subparsers = parser.add_subparsers(dest="command")

    build.register(subparsers)
    render.register(subparsers)
    config.register(subparsers)

    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        ctx = get_context()  # built once
        configure_logging(ctx.config)
        return args.func(args, ctx)
    parser.print_help()
    return 1

if __name__ == "__main__":
    sys.exit(main())
