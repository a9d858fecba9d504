"""
Shell context and filesystem state for the LuCLI REPL.

This module contains:
- FileSystemState: the shell's own working directory, independent of the
  process cwd, plus path resolution helpers
- ShellContext: the state shared by the resolver, executors and completer
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Any


class FileSystemState:
    """Tracks the shell's current and home directory."""

    def __init__(self, cwd: Optional[Path] = None, home: Optional[Path] = None):
        self.initial_dir = Path(cwd or os.getcwd()).absolute()
        self.cwd = self.initial_dir
        self.home = Path(home or Path.home()).absolute()
        self.previous: Optional[Path] = None

    def resolve(self, path_str: str) -> Path:
        """Resolve a path relative to the shell cwd, expanding ~."""
        if not path_str or not path_str.strip():
            return self.cwd
        path_str = path_str.strip()

        if path_str == "~":
            return self.home
        if path_str.startswith("~/"):
            return self.home / path_str[2:]

        path = Path(path_str)
        if not path.is_absolute():
            path = self.cwd / path
        return Path(os.path.normpath(path))

    def change_directory(self, target: Optional[str]) -> bool:
        """Change directory. Empty target goes home; '-' goes back."""
        if not target or not target.strip():
            resolved = self.home
        elif target.strip() == "-":
            if self.previous is None:
                return False
            resolved = self.previous
        else:
            resolved = self.resolve(target)

        if not resolved.is_dir():
            return False
        self.previous = self.cwd
        self.cwd = resolved.resolve()
        return True

    def display_path(self) -> str:
        """Current directory with the home prefix shown as ~."""
        try:
            relative = self.cwd.relative_to(self.home)
        except ValueError:
            return str(self.cwd)
        return "~" if str(relative) == "." else f"~/{relative}"


@dataclass
class ShellContext:
    """State shared across one shell session."""
    fs: FileSystemState = field(default_factory=FileSystemState)
    settings: Optional[Any] = None  # Settings when available
    last_result: str = ""

    @property
    def show_emojis(self) -> bool:
        return bool(self.settings and self.settings.show_emojis)

    @property
    def use_colors(self) -> bool:
        return self.settings.use_colors if self.settings else True
