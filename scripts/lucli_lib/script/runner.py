"""
LuCLI batch-script runner.

A .lucli file is a list of shell lines run top to bottom through the same
command resolver as the REPL, plus variable assignments:

    # comment
    NAME=value
    set OUT = $(ls -la)
    TOKEN=${secret:api_token}
    echo ${NAME}

`${NAME}` placeholders expand from script variables, then the process
environment; unknown names are left untouched. `${_}` is the last captured
result. Secrets are validated before the first line runs.
"""

import os
import re
from pathlib import Path
from typing import Callable, Mapping, Optional

from lucli_lib.common import is_error
from lucli_lib.repl.assignment import AssignmentKind, classify
from lucli_lib.repl.dispatcher import INTERRUPT_INDICATOR
from lucli_lib.repl.tokenizer import tokenize
from .secrets import EnvSecretStore


PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")
SECRET_MARKER = "${secret:"


class ScriptError(Exception):
    """Raised when a script cannot continue."""


def strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


class ScriptRunner:
    """Execute .lucli scripts line by line through a dispatch function."""

    def __init__(
        self,
        dispatch: Callable[[str], str],
        secrets=None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.dispatch = dispatch
        self.secrets = secrets or EnvSecretStore()
        self.environ = environ if environ is not None else os.environ
        self.variables: dict[str, str] = {}
        self.last_result = ""

    # -------------------------------------------------------------------------
    # Placeholders
    # -------------------------------------------------------------------------

    def lookup(self, name: str) -> Optional[str]:
        if name == "_":
            return self.last_result
        if name in self.variables:
            return self.variables[name]
        return self.environ.get(name)

    def expand(self, text: str) -> str:
        """Expand ${NAME} and ${secret:ID}; unknown names stay verbatim."""
        def replace(match: re.Match) -> str:
            key = match.group(1)
            if key.startswith("secret:"):
                return self.secrets.get(key[len("secret:"):])
            value = self.lookup(key)
            return match.group(0) if value is None else value

        return PLACEHOLDER_PATTERN.sub(replace, text)

    def preresolve_secrets(self, lines: list[str]) -> None:
        """Fail before running anything if a referenced secret is missing."""
        for line in lines:
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            for match in PLACEHOLDER_PATTERN.finditer(stripped):
                key = match.group(1)
                if key.startswith("secret:"):
                    self.secrets.get(key[len("secret:"):])

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def assign(self, line: str) -> bool:
        """Handle an assignment line. Returns False if it is not one."""
        assignment = classify(line)
        if not assignment.is_assignment:
            return False

        kind = assignment.kind
        if kind is AssignmentKind.COMMAND_SUBSTITUTION:
            output = self.dispatch(self.expand(assignment.variable_value)).strip()
            if is_error(output):
                raise ScriptError(f"{assignment.variable_name}=$({assignment.variable_value}) failed: {output}")
            value = output
        elif kind is AssignmentKind.SECRET_REF:
            value = self.secrets.get(assignment.secret_id)
        elif kind is AssignmentKind.ENVIRONMENT_REF:
            value = self.lookup(assignment.env_name) or ""
        else:
            value = self.expand(strip_quotes(assignment.variable_value))

        self.variables[assignment.variable_name] = value
        self.last_result = value
        return True

    def run_lines(self, lines: list[str], argv: Optional[list[str]] = None) -> str:
        """Run script lines and return the combined output."""
        for index, arg in enumerate(argv or [], start=1):
            self.variables[str(index)] = arg
        self.variables["ARGS"] = " ".join(argv or [])

        self.preresolve_secrets(lines)

        output: list[str] = []
        for raw in lines:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            tokens = tokenize(line)
            if tokens and tokens[0].lower() == "exit":
                break

            if self.assign(line):
                continue

            result = self.dispatch(self.expand(line))
            if result == INTERRUPT_INDICATOR:
                output.append(result)
                break
            if result:
                output.append(result)
                self.last_result = result.strip()

        return "\n".join(output)

    def run_file(self, path: Path, argv: Optional[list[str]] = None) -> str:
        try:
            lines = Path(path).read_text().splitlines()
        except OSError as e:
            raise ScriptError(f"Cannot read script {path}: {e.strerror or e}") from e
        return self.run_lines(lines, argv)
