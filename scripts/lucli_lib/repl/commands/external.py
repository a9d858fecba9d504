"""
External-process executor for the LuCLI shell.

Anything the resolver does not recognize is handed to the host shell,
provided the first word names a program on PATH or an executable file.
"""

import os
import shutil
import subprocess

from ..context import ShellContext
from ..tokenizer import tokenize


class ExternalProcessExecutor:
    """Run a line through the OS shell in the LuCLI working directory."""

    def __init__(self, ctx: ShellContext):
        self.ctx = ctx

    def is_runnable(self, program: str) -> bool:
        """PATH lookup for bare names; paths resolve against the shell cwd."""
        if "/" in program:
            path = self.ctx.fs.resolve(program)
            return path.is_file() and os.access(path, os.X_OK)
        return shutil.which(program) is not None

    def execute(self, line: str) -> str:
        parts = tokenize(line)
        if not parts:
            return ""

        program = parts[0]
        if not self.is_runnable(program):
            return f"Unknown command: {program}\nType 'help' for available commands."

        result = subprocess.run(
            line,
            shell=True,
            cwd=str(self.ctx.fs.cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
        output = (result.stdout or "").strip()
        if result.returncode != 0 and not output:
            return f"Command failed with exit code {result.returncode}: {line}"
        return output
