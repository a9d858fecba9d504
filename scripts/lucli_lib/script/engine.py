"""
Embedded Python evaluator for LuCLI.

`py <code>` lines and `run file.py` go through PythonEvaluator. Code runs
in one namespace that persists for the whole session, so names defined by
one line are visible to the next. Results are printed to stdout; callers
capture it.
"""

import builtins
import platform
import runpy
import sys
from pathlib import Path
from typing import Optional


class PythonEvaluator:
    """Evaluate Python expressions/statements in a persistent namespace."""

    def __init__(self, namespace: Optional[dict] = None):
        self.namespace = namespace if namespace is not None else {"__name__": "__lucli__"}

    def evaluate(self, source: str) -> None:
        """Evaluate an expression (printing its repr) or execute statements."""
        try:
            code = compile(source, "<lucli>", "eval")
        except SyntaxError:
            exec(compile(source, "<lucli>", "exec"), self.namespace)
            return

        result = eval(code, self.namespace)
        if result is not None:
            self.namespace["_"] = result
            print(repr(result) if not isinstance(result, str) else result)

    def run_file(self, path: Path, argv: Optional[list[str]] = None) -> dict:
        """Run a .py/.pyw/.pyz file as __main__ with sys.argv set."""
        saved_argv = sys.argv
        sys.argv = [str(path)] + list(argv or [])
        try:
            return runpy.run_path(str(path), run_name="__main__")
        finally:
            sys.argv = saved_argv

    def get_version(self) -> str:
        return platform.python_version()

    def function_names(self) -> list[str]:
        """Names offered by `py` completion: builtins plus session names."""
        names = {n for n in dir(builtins) if not n.startswith("_")}
        names.update(n for n in self.namespace if not n.startswith("_"))
        return sorted(names, key=str.lower)

    def is_builtin_name(self, name: str) -> bool:
        return hasattr(builtins, name) and name not in self.namespace
