"""
Command resolver for the LuCLI shell.

Every input line takes exactly one path, tried in a fixed order:

    1. a leading `lucli` is dropped (bare `lucli` does nothing)
    2. empty line
    3. shell meta: help, version, python-version
    4. `py <code>` through the embedded evaluator
    5. terminal builtins (ls, cd, cat, run, ...)
    6. framework subcommands (modules, settings)
    7. module shortcuts from the module registry
    8. the host shell

dispatch() never raises; failures come back as a single `[ERROR]` line.
"""

from lucli_lib import PROGRAM_NAME, __version__
from lucli_lib.common import capture_output, format_error
from .command_table import (
    ENGINE_VERSION_NAMES,
    HELP_NAMES,
    SCRIPT_KEYWORD,
    VERSION_NAMES,
    Capability,
    is_builtin,
    names_with,
)
from .tokenizer import tokenize


INTERRUPT_INDICATOR = "^C"

HELP_TEXT = """
LuCLI Terminal Commands:

Python Execution:
  py <code>            Evaluate Python (e.g., py 2 ** 10)
  run <file> [args]    Run a .py/.pyw/.pyz file or a .lucli script

Module Management:
  modules list         List installed modules
  modules init <name>  Create a new module
  modules run <name>   Run a module
  <module-name>        Module shortcut

Settings:
  settings list        Show all settings
  settings set <k> <v> Change a setting
  prompt [name]        List or switch prompt templates

File System:
  ls, cd, pwd          Navigate directories
  mkdir, rmdir, touch  Create and remove directories and files
  rm, cp, mv           File operations
  cat, head, tail      View files
  find, wc             Search and count
  edit <file>          Open a file in $EDITOR

Terminal:
  help                 Show this help
  version              Show version
  python-version       Show the embedded Python version
  exit, quit           Exit terminal
  Ctrl-C               Interrupt command
  Ctrl-D               Exit terminal
"""


class CommandResolver:
    """Route one input line to the component that handles it."""

    def __init__(self, ctx, builtins, framework, modules, evaluator, external):
        self.ctx = ctx
        self.builtins = builtins
        self.framework = framework
        self.modules = modules
        self.evaluator = evaluator
        self.external = external
        self._check_tiers()

    def _check_tiers(self) -> None:
        """Refuse to start if one name belongs to two precedence tiers."""
        tiers = {
            "shell meta": set(names_with(Capability.SHELL_META)),
            "script keyword": {SCRIPT_KEYWORD},
            "builtin": set(names_with(Capability.BUILTIN)),
            "framework": {name.lower() for name in self.framework.names()},
        }
        seen: dict[str, str] = {}
        for tier, names in tiers.items():
            for name in names:
                if name in seen:
                    raise ValueError(
                        f"Command '{name}' is registered as both {seen[name]} and {tier}"
                    )
                seen[name] = tier

    def dispatch(self, line: str) -> str:
        """Execute a line and return the text to display ("" for nothing)."""
        try:
            return self._dispatch(line)
        except KeyboardInterrupt:
            return INTERRUPT_INDICATOR
        except SystemExit as e:
            return format_error(f"exit requested (status {e.code})", self.ctx.use_colors)
        except Exception as e:
            return format_error(str(e) or type(e).__name__, self.ctx.use_colors)

    def _dispatch(self, line: str) -> str:
        parts = tokenize(line)

        # A user typing the shell's own name must not re-enter it
        if parts and parts[0].lower() == PROGRAM_NAME:
            parts = parts[1:]
            if not parts:
                return ""
            stripped = line.lstrip()
            if stripped.lower().startswith(PROGRAM_NAME):
                line = stripped[len(PROGRAM_NAME):].lstrip()
            else:
                line = " ".join(parts)

        if not parts:
            return ""

        command = parts[0].lower()

        if command in HELP_NAMES:
            return HELP_TEXT
        if command in VERSION_NAMES:
            return f"LuCLI {__version__}"
        if command in ENGINE_VERSION_NAMES:
            return f"Python Version: {self.evaluator.get_version()}"

        if command == SCRIPT_KEYWORD:
            if len(parts) < 2:
                return f"Usage: {SCRIPT_KEYWORD} <expression>"
            return self._evaluate(self._script_source(line))

        if is_builtin(command):
            return self.builtins.execute(line)

        if command in self.framework.names():
            self.framework.execute(parts)
            return ""

        if self.modules.exists(command):
            return self._run_module(command, parts[1:])

        return self.external.execute(line)

    @staticmethod
    def _script_source(line: str) -> str:
        """Text after the script keyword and one following space."""
        stripped = line.lstrip()
        return stripped[len(SCRIPT_KEYWORD) + 1:]

    def _evaluate(self, source: str) -> str:
        with capture_output() as buffer:
            self.evaluator.evaluate(source)
        return buffer.getvalue().rstrip()

    def _run_module(self, name: str, argv: list[str]) -> str:
        try:
            with capture_output() as buffer:
                self.modules.execute_by_name(name, argv)
        except Exception as e:
            return format_error(f"Module '{name}' failed: {e}", self.ctx.use_colors)
        return buffer.getvalue().strip()
