# docschema/cli/config.py
#!/usr/bin/env python3
import json
from docschema.core.app_context import AppContext

def register(subparsers):
    sp = subparsers.add_parser("config", help="Config utilities")
    sps = sp.add_subparsers(dest="config_cmd")

    def config_default(args, ctx: AppContext) -> int:
        sp.print_help()
        return 1
    sp.set_defaults(func=config_default)

    showp = sps.add_parser("show", help="Show effective config and build options")
    showp.set_defaults(func=show_config)

def show_config(args, ctx: AppContext) -> int:
    payload = {
        "config": ctx.config,
        "options": ctx.options.model_dump(mode="json"),
    }
    print(json.dumps(payload, indent=2))
    return 0
