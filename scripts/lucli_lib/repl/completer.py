"""
Tab completion for the LuCLI REPL.

CompletionEngine produces Candidates from the buffer and its words using
one of three strategies, picked by position and first word:

- command: first word, matched against the command table
- path: arguments of path-taking commands, filtered per command
- function: the identifier being typed after `py`

LucliCompleter adapts the engine to prompt_toolkit.
"""

import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional

from prompt_toolkit.completion import Completer, Completion

from . import command_table
from .command_table import Capability, SCRIPT_KEYWORD
from .context import ShellContext


SEP = "/"

# Anything that cannot be part of an identifier being typed
FUNCTION_DELIMITERS = re.compile(r"""[\s+\-*/=<>!&|(),;\[\]{}."']+""")


@dataclass(frozen=True)
class Candidate:
    """One completion candidate."""
    insert_text: str
    display_text: str
    group: Optional[str] = None
    description: Optional[str] = None
    complete: bool = True


class Strategy(Enum):
    NONE = "none"
    COMMAND = "command"
    PATH = "path"
    FUNCTION = "function"


# (suffixes, glyph, description) in match order; first hit wins
FILE_CATEGORIES = (
    (command_table.SCRIPT_EXTENSIONS, "⚡", "Python File"),
    ((".pyc", ".pyd", ".so"), "☕", "Compiled File"),
    ((".sh", ".js"), "🟨", "Script File"),
    ((".md", ".rst"), "📝", "Documentation"),
)
DIRECTORY_GLYPH = "📁"
FILE_GLYPH = "📄"
MODULE_GLYPH = "📦"


def file_category(filename: str) -> tuple[str, str]:
    """Return (glyph, description) for a file name."""
    lower = filename.lower()
    for suffixes, glyph, description in FILE_CATEGORIES:
        if lower.endswith(suffixes):
            return glyph, description
    return FILE_GLYPH, "File"


def choose_strategy(buffer: str, words: list[str]) -> Strategy:
    """Pick the completion strategy for a buffer."""
    if not buffer.strip() or len(words) <= 1:
        return Strategy.COMMAND
    first = words[0].lower()
    if first == SCRIPT_KEYWORD:
        return Strategy.FUNCTION
    if command_table.is_path_taking(first):
        return Strategy.PATH
    return Strategy.NONE


def current_function(expression: str) -> str:
    """The identifier being typed at the end of an expression, or ''."""
    parts = [p for p in FUNCTION_DELIMITERS.split(expression.strip()) if p]
    if not parts:
        return ""
    last = parts[-1]
    return last if last[0].isalpha() else ""


class CompletionEngine:
    """Produce completion candidates for a line being typed."""

    def __init__(
        self,
        ctx: ShellContext,
        function_source: Optional[Callable[[], Iterable[str]]] = None,
        is_builtin_function: Optional[Callable[[str], bool]] = None,
        extra_commands: Optional[Callable[[], Iterable[str]]] = None,
        module_source: Optional[Callable[[], Iterable[str]]] = None,
    ):
        self.ctx = ctx
        self.function_source = function_source
        self.is_builtin_function = is_builtin_function
        self.extra_commands = extra_commands
        self.module_source = module_source

    def complete(self, buffer: str, words: list[str]) -> list[Candidate]:
        strategy = choose_strategy(buffer, words)
        if strategy is Strategy.COMMAND:
            return self.complete_commands(words[0] if words else "")
        if strategy is Strategy.FUNCTION:
            return self.complete_functions(buffer)
        if strategy is Strategy.PATH:
            return self.complete_paths(words[-1] if len(words) > 1 else "", words[0].lower())
        return []

    # -------------------------------------------------------------------------
    # Command names
    # -------------------------------------------------------------------------

    def command_names(self) -> list[str]:
        names = command_table.names_with(Capability.COMPLETABLE)
        if self.extra_commands:
            names.extend(n for n in self.extra_commands() if n not in names)
        return names

    def complete_commands(self, partial: str) -> list[Candidate]:
        prefix = partial.lower()
        names = self.command_names()
        candidates = [Candidate(name, name) for name in names if name.lower().startswith(prefix)]

        # Installed modules; a module named like a command is shadowed by it
        if self.module_source:
            taken = {n.lower() for n in names}
            for name in sorted(self.module_source(), key=str.lower):
                if name.lower().startswith(prefix) and name.lower() not in taken:
                    display = f"{MODULE_GLYPH} {name}" if self.ctx.show_emojis else name
                    candidates.append(Candidate(name, display, "modules", "LuCLI module"))
        return candidates

    # -------------------------------------------------------------------------
    # Python names after `py`
    # -------------------------------------------------------------------------

    def complete_functions(self, buffer: str) -> list[Candidate]:
        keyword = SCRIPT_KEYWORD + " "
        if len(buffer) <= len(keyword) or not self.function_source:
            return []
        query = current_function(buffer[len(keyword):])
        if not query:
            return []

        lowered = query.lower()
        matches = sorted((n for n in self.function_source() if n.lower().startswith(lowered)), key=str.lower)
        candidates = []
        for name in matches:
            builtin = self.is_builtin_function(name) if self.is_builtin_function else True
            candidates.append(Candidate(
                name, name, "functions",
                "Python builtin" if builtin else "Python name",
            ))
        return candidates

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    def _split_partial(self, partial: str) -> tuple[Path, str, str]:
        """Return (base directory, insert prefix, filename fragment)."""
        fs = self.ctx.fs
        home = str(fs.home)

        if not partial:
            return fs.cwd, "", ""
        if partial == "~":
            return fs.home, home + SEP, ""
        if partial.startswith("~/"):
            rest = partial[2:]
            head, sep, tail = rest.rpartition(SEP)
            if sep:
                return fs.home / head, home + SEP + head + SEP, tail
            return fs.home, home + SEP, rest
        if partial.startswith(SEP):
            head, _, tail = partial.rpartition(SEP)
            if head:
                return Path(head), head + SEP, tail
            return Path(SEP), SEP, tail

        head, sep, tail = partial.rpartition(SEP)
        if sep:
            return fs.cwd / head, head + SEP, tail
        return fs.cwd, "", partial

    def complete_paths(self, partial: str, command: str) -> list[Candidate]:
        base, prefix, fragment = self._split_partial(partial)
        if not base.is_dir():
            return []

        directories_only = command_table.has(command, Capability.DIRECTORY_ONLY)
        scripts_only = command_table.has(command, Capability.SCRIPT_RUNNER)

        entries = []
        try:
            with os.scandir(base) as it:
                for entry in it:
                    name = entry.name
                    if not name.startswith(fragment):
                        continue
                    if name.startswith(".") and not fragment.startswith("."):
                        continue
                    try:
                        is_dir = entry.is_dir()
                    except OSError:
                        is_dir = False
                    if directories_only and not is_dir:
                        continue
                    if scripts_only and not (is_dir or command_table.is_script_file(name)):
                        continue
                    entries.append((name, is_dir))
        except OSError:
            return []

        entries.sort(key=lambda e: (not e[1], e[0].lower()))

        decorate = self.ctx.show_emojis
        candidates = []
        for name, is_dir in entries:
            if is_dir:
                insert = prefix + name + SEP
                display = f"{DIRECTORY_GLYPH} {insert}" if decorate else insert
                candidates.append(Candidate(insert, display, "directories", "Directory", False))
            else:
                insert = prefix + name
                glyph, description = file_category(name)
                display = f"{glyph} {insert}" if decorate else insert
                candidates.append(Candidate(insert, display, "files", description if decorate else "File", True))
        return candidates


class LucliCompleter(Completer):
    """prompt_toolkit adapter around CompletionEngine."""

    def __init__(self, engine: CompletionEngine):
        self.engine = engine

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        words = text.split()
        # A trailing space starts a new, empty word
        if text.endswith(' ') and words:
            words.append("")

        if words and words[0].lower() == SCRIPT_KEYWORD and len(words) > 1:
            word = current_function(text[len(SCRIPT_KEYWORD) + 1:])
        else:
            word = words[-1] if words else ""

        for candidate in self.engine.complete(text, words):
            yield Completion(
                candidate.insert_text,
                start_position=-len(word),
                display=candidate.display_text,
                display_meta=candidate.description or "",
            )
