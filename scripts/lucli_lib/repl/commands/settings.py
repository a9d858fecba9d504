"""
Settings subcommands: `settings list|get|set`.
"""

import json

from rich.console import Console

from lucli_lib.common import log, error


def parse_value(raw: str):
    """Interpret a command-line value as JSON, falling back to the raw string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def cmd_settings_list(ctx, args) -> int:
    Console().print_json(json.dumps(ctx.settings.all()))
    return 0


def cmd_settings_get(ctx, args) -> int:
    value = ctx.settings.get(args.key)
    if value is None:
        error(f"Setting not found: {args.key}")
        return 1
    if isinstance(value, dict):
        Console().print_json(json.dumps(value))
    else:
        print(json.dumps(value))
    return 0


def cmd_settings_set(ctx, args) -> int:
    value = parse_value(args.value)
    ctx.settings.set(args.key, value)
    log(f"{args.key} = {json.dumps(value)}")
    return 0
