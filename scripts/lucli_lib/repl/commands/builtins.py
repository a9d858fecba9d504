"""
Builtin executor for the LuCLI shell.

Routes a raw builtin line (ls, cd, cat, run, ...) to its handler. The
filesystem verbs live in filesystem.py; this module adds the verbs that
need collaborators beyond the shell context: edit, prompt and run.
"""

import os
import shlex
import subprocess
from pathlib import Path
from typing import Callable, Optional

from lucli_lib.common import capture_output
from ..command_table import BATCH_EXTENSIONS, is_builtin, is_script_file
from ..context import ShellContext
from ..tokenizer import tokenize
from . import filesystem


DEFAULT_EDITOR = "vi"

FILESYSTEM_HANDLERS: dict[str, Callable[[ShellContext, list[str]], str]] = {
    "ls": filesystem.cmd_ls,
    "dir": filesystem.cmd_ls,
    "cd": filesystem.cmd_cd,
    "pwd": filesystem.cmd_pwd,
    "mkdir": filesystem.cmd_mkdir,
    "rmdir": filesystem.cmd_rmdir,
    "rm": filesystem.cmd_rm,
    "cp": filesystem.cmd_cp,
    "mv": filesystem.cmd_mv,
    "cat": filesystem.cmd_cat,
    "touch": filesystem.cmd_touch,
    "find": filesystem.cmd_find,
    "wc": filesystem.cmd_wc,
    "head": filesystem.cmd_head,
    "tail": filesystem.cmd_tail,
}


class BuiltinExecutor:
    """Execute terminal-only builtin commands."""

    def __init__(self, ctx: ShellContext, evaluator=None, prompt_config=None,
                 script_runner_factory: Optional[Callable[[], object]] = None):
        self.ctx = ctx
        self.evaluator = evaluator
        self.prompt_config = prompt_config
        self.script_runner_factory = script_runner_factory
        self.handlers: dict[str, Callable[[list[str]], str]] = {
            name: (lambda args, fn=fn: fn(self.ctx, args))
            for name, fn in FILESYSTEM_HANDLERS.items()
        }
        self.handlers.update({
            "edit": self.cmd_edit,
            "prompt": self.cmd_prompt,
            "run": self.cmd_run,
        })

        missing = [name for name in self.handlers if not is_builtin(name)]
        if missing:
            raise ValueError(f"Handlers registered for non-builtin commands: {missing}")

    def names(self) -> list[str]:
        return sorted(self.handlers)

    def execute(self, raw_line: str) -> str:
        parts = tokenize(raw_line.strip())
        if not parts:
            return ""
        command = parts[0].lower()
        handler = self.handlers.get(command)
        if handler is None:
            return f"Unknown command: {command}\nType 'help' for available commands."
        return handler(parts[1:])

    # -------------------------------------------------------------------------
    # edit
    # -------------------------------------------------------------------------

    def cmd_edit(self, args: list[str]) -> str:
        if not args:
            return "edit: missing file operand"
        editor = os.environ.get("VISUAL") or os.environ.get("EDITOR") or DEFAULT_EDITOR
        path = self.ctx.fs.resolve(args[0])
        try:
            subprocess.run(shlex.split(editor) + [str(path)], cwd=self.ctx.fs.cwd, check=False)
        except FileNotFoundError:
            return f"edit: editor not found: {editor}"
        return ""

    # -------------------------------------------------------------------------
    # prompt
    # -------------------------------------------------------------------------

    def cmd_prompt(self, args: list[str]) -> str:
        if self.prompt_config is None:
            return "prompt: prompt templates are not available"

        current = self.prompt_config.current_template().name
        if not args or args[0].lower() == "list":
            lines = ["Available prompt templates:"]
            for name in self.prompt_config.available():
                marker = "*" if name == current else " "
                template = self.prompt_config.get_template(name)
                description = template.description if template else ""
                lines.append(f"  {marker} {name:12} {description}")
            lines.append("")
            lines.append("Switch with: prompt <name>")
            return "\n".join(lines)

        name = args[0]
        if not self.prompt_config.set_current(name):
            return f"prompt: unknown template '{name}' (try 'prompt list')"
        return f"Prompt changed to '{name}'"

    # -------------------------------------------------------------------------
    # run
    # -------------------------------------------------------------------------

    def cmd_run(self, args: list[str]) -> str:
        if not args:
            return "run: usage: run <file> [args...]"
        path = self.ctx.fs.resolve(args[0])
        if not path.is_file():
            return f"run: {args[0]}: No such file"

        if is_script_file(path.name):
            if self.evaluator is None:
                return "run: Python evaluator is not available"
            saved_cwd = os.getcwd()
            status = ""
            with capture_output() as buffer:
                try:
                    os.chdir(self.ctx.fs.cwd)
                    self.evaluator.run_file(path, args[1:])
                except SystemExit as e:
                    if e.code not in (None, 0):
                        status = f"{path.name} exited with status {e.code}"
                finally:
                    os.chdir(saved_cwd)
            return "\n".join(part for part in (buffer.getvalue().rstrip(), status) if part)

        if path.name.lower().endswith(BATCH_EXTENSIONS):
            if self.script_runner_factory is None:
                return "run: script runner is not available"
            runner = self.script_runner_factory()
            return runner.run_file(Path(path), args[1:])

        return f"run: {args[0]}: not a runnable script (.py, .pyw, .pyz or .lucli)"
