#!/usr/bin/env python3
"""
lucli_repl.py - Interactive shell for LuCLI

Runs the LuCLI REPL: filesystem builtins, `py` Python evaluation, module
shortcuts and the `modules`/`settings` subcommands, falling back to the
host shell for anything else.

    lucli                 start the interactive shell
    lucli <command ...>   run one command and exit
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from prompt_toolkit.styles import Style

from lucli_lib import __version__
from lucli_lib.common import Colors, is_error
from lucli_lib.config import HISTORY_FILE_NAME, MODULES_DIR_NAME, Settings
from lucli_lib.modules import ModuleRegistry
from lucli_lib.repl import (
    CompletionEngine,
    FileSystemState,
    LucliCompleter,
    PromptConfig,
    ShellContext,
)
from lucli_lib.repl.command_table import EXIT_NAMES
from lucli_lib.repl.commands import BuiltinExecutor, ExternalProcessExecutor
from lucli_lib.repl.dispatcher import INTERRUPT_INDICATOR, CommandResolver
from lucli_lib.repl.framework import FrameworkContext, SubcommandFramework
from lucli_lib.script.engine import PythonEvaluator
from lucli_lib.script.runner import ScriptRunner


# =============================================================================
# Colors and Styling
# =============================================================================

LUCLI_STYLE = Style.from_dict({
    'prompt': '#00aa00 bold',
    'completion-menu.completion': 'bg:#303030 #ffffff',
    'completion-menu.completion.current': 'bg:#0088ff #ffffff',
    'completion-menu.meta.completion': 'bg:#202020 #888888',
})
FAREWELL = "Goodbye!"


# =============================================================================
# Wiring
# =============================================================================

@dataclass
class Shell:
    """One fully wired LuCLI session."""
    ctx: ShellContext
    settings: Settings
    evaluator: PythonEvaluator
    prompt_config: PromptConfig
    resolver: CommandResolver
    completion: CompletionEngine


def build_shell(home: Optional[Path] = None, cwd: Optional[Path] = None) -> Shell:
    """Create settings, executors and the resolver for a session."""
    settings = Settings(home)
    ctx = ShellContext(fs=FileSystemState(cwd=cwd), settings=settings)
    evaluator = PythonEvaluator()
    prompt_config = PromptConfig(settings)
    registry = ModuleRegistry(settings.home / MODULES_DIR_NAME)
    framework = SubcommandFramework(FrameworkContext(settings=settings, registry=registry))

    resolver: Optional[CommandResolver] = None

    def make_script_runner() -> ScriptRunner:
        return ScriptRunner(resolver.dispatch)

    builtins = BuiltinExecutor(
        ctx,
        evaluator=evaluator,
        prompt_config=prompt_config,
        script_runner_factory=make_script_runner,
    )
    resolver = CommandResolver(
        ctx,
        builtins=builtins,
        framework=framework,
        modules=registry,
        evaluator=evaluator,
        external=ExternalProcessExecutor(ctx),
    )
    completion = CompletionEngine(
        ctx,
        function_source=evaluator.function_names,
        is_builtin_function=evaluator.is_builtin_name,
        extra_commands=framework.names,
        module_source=registry.names,
    )
    return Shell(ctx, settings, evaluator, prompt_config, resolver, completion)


# =============================================================================
# REPL
# =============================================================================

def run_repl(shell: Optional[Shell] = None, session=None) -> int:
    """Main REPL entry point."""
    shell = shell or build_shell()
    if session is None:
        session = PromptSession(
            history=FileHistory(str(shell.settings.home / HISTORY_FILE_NAME)),
            completer=LucliCompleter(shell.completion),
            style=LUCLI_STYLE,
        )

    print()
    print(f"{Colors.BOLD}LuCLI {__version__}{Colors.NC}")
    print("Type 'help' for commands, 'exit' to quit")
    print()

    while True:
        try:
            line = session.prompt(shell.prompt_config.render(shell.ctx.fs))
        except KeyboardInterrupt:
            print(INTERRUPT_INDICATOR)
            continue
        except EOFError:
            print()
            break

        if not line.strip():
            continue
        if line.strip().lower() in EXIT_NAMES:
            break

        result = shell.resolver.dispatch(line)
        shell.ctx.last_result = result
        if result:
            print(result)
        sys.stdout.flush()

    print(FAREWELL)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the `lucli` console script."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        return run_repl()

    shell = build_shell()
    result = shell.resolver.dispatch(" ".join(argv))
    if result:
        print(result)
    return 1 if is_error(result) else 0


if __name__ == "__main__":
    sys.exit(main())
