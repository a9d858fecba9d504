"""
Module management subcommands: `modules list|init|run|install|uninstall`.

Handlers print directly; the framework does not capture them.
"""

import requests
from rich.console import Console
from rich.table import Table

from lucli_lib.common import log, warn, error, info
from lucli_lib.modules import ModuleValidationError


def cmd_modules_list(ctx, args) -> int:
    """List installed modules."""
    modules = ctx.registry.list_modules()
    if not modules:
        info(f"No modules installed in {ctx.registry.root}")
        info("Create one with 'modules init <name>'")
        return 0

    table = Table(title="Installed modules")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Description")
    for module in modules:
        table.add_row(module.name, module.version, module.description)
    Console().print(table)
    return 0


def cmd_modules_init(ctx, args) -> int:
    try:
        directory = ctx.registry.init_module(args.name, args.description or "")
    except (FileExistsError, ModuleValidationError) as e:
        error(str(e))
        return 1
    log(f"Created module '{args.name}' in {directory}")
    return 0


def cmd_modules_run(ctx, args) -> int:
    if not ctx.registry.exists(args.name):
        error(f"Module not found: {args.name}")
        return 1
    return ctx.registry.execute_by_name(args.name, args.args)


def cmd_modules_install(ctx, args) -> int:
    try:
        definition = ctx.registry.install(args.source, name=args.name)
    except FileExistsError as e:
        warn(str(e))
        return 1
    except (FileNotFoundError, ModuleValidationError, requests.RequestException) as e:
        error(f"Install failed: {e}")
        return 1
    log(f"Installed module '{definition.name}' ({definition.version})")
    return 0


def cmd_modules_uninstall(ctx, args) -> int:
    try:
        directory = ctx.registry.uninstall(args.name)
    except FileNotFoundError as e:
        error(str(e))
        return 1
    log(f"Removed {directory}")
    return 0
