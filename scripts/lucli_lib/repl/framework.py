"""
Subcommand framework for LuCLI.

Structured commands with flags (`modules ...`, `settings ...`) are parsed
with argparse. The parser never exits the process: usage errors and
`--help` turn into a return code so the REPL keeps running.
"""

import argparse
from dataclasses import dataclass
from typing import Sequence

from .commands import modules as module_commands
from .commands import settings as settings_commands


USAGE_ERROR = 2


class FrameworkExit(Exception):
    """Raised in place of sys.exit() by the framework's parsers."""

    def __init__(self, status: int, message: str = ""):
        super().__init__(message)
        self.status = status
        self.message = message


class _Parser(argparse.ArgumentParser):
    def exit(self, status=0, message=None):
        raise FrameworkExit(status, message or "")

    def error(self, message):
        raise FrameworkExit(USAGE_ERROR, f"{self.format_usage()}{self.prog}: error: {message}")


@dataclass
class FrameworkContext:
    """Collaborators the subcommand handlers need."""
    settings: object
    registry: object


def build_parser():
    """Return the top-level parser and its subcommand action."""
    parser = _Parser(prog="lucli", add_help=False)
    commands = parser.add_subparsers(dest="command", parser_class=_Parser)
    commands.required = True

    # modules
    modules = commands.add_parser("modules", help="Manage module shortcuts")
    module_actions = modules.add_subparsers(dest="action", parser_class=_Parser)
    module_actions.required = True

    p = module_actions.add_parser("list", help="List installed modules")
    p.set_defaults(handler=module_commands.cmd_modules_list)

    p = module_actions.add_parser("init", help="Scaffold a new module")
    p.add_argument("name")
    p.add_argument("-d", "--description", default="")
    p.set_defaults(handler=module_commands.cmd_modules_init)

    p = module_actions.add_parser("run", help="Run a module")
    p.add_argument("name")
    p.add_argument("args", nargs=argparse.REMAINDER)
    p.set_defaults(handler=module_commands.cmd_modules_run)

    p = module_actions.add_parser("install", help="Install from a directory, zip or URL")
    p.add_argument("source")
    p.add_argument("--name", default=None)
    p.set_defaults(handler=module_commands.cmd_modules_install)

    p = module_actions.add_parser("uninstall", help="Remove an installed module")
    p.add_argument("name")
    p.set_defaults(handler=module_commands.cmd_modules_uninstall)

    # settings
    settings = commands.add_parser("settings", help="Show or change settings")
    setting_actions = settings.add_subparsers(dest="action", parser_class=_Parser)
    setting_actions.required = True

    p = setting_actions.add_parser("list", help="Show all settings")
    p.set_defaults(handler=settings_commands.cmd_settings_list)

    p = setting_actions.add_parser("get", help="Show one setting (dotted keys allowed)")
    p.add_argument("key")
    p.set_defaults(handler=settings_commands.cmd_settings_get)

    p = setting_actions.add_parser("set", help="Change a setting; values are parsed as JSON")
    p.add_argument("key")
    p.add_argument("value")
    p.set_defaults(handler=settings_commands.cmd_settings_set)

    return parser, commands


class SubcommandFramework:
    """Registry and executor for structured subcommands."""

    def __init__(self, ctx: FrameworkContext):
        self.ctx = ctx
        self.parser, self._commands = build_parser()

    def names(self) -> list[str]:
        return sorted(self._commands.choices)

    def execute(self, argv: Sequence[str]) -> int:
        """Parse argv and run its handler; output is printed, not returned."""
        argv = list(argv)
        if argv:
            argv[0] = argv[0].lower()
        try:
            args = self.parser.parse_args(argv)
        except FrameworkExit as e:
            if e.message:
                print(e.message.rstrip())
            return e.status

        status = args.handler(self.ctx, args)
        return status if isinstance(status, int) else 0
