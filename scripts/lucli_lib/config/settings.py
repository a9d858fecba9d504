"""
Persistent user settings for LuCLI.

Settings live in a single JSON document under LUCLI_HOME. Every write is
saved immediately. A missing file is created from defaults; a file that
cannot be parsed is left alone and in-memory defaults are used instead.
"""

import copy
import json
from pathlib import Path
from typing import Any, Optional

from lucli_lib.common import warn
from .constants import lucli_home, SETTINGS_FILE_NAME, PROMPTS_DIR_NAME


DEFAULT_SETTINGS = {
    "currentPrompt": "default",
    "showEmojis": True,
    "colorSupport": True,
    "historySize": 1000,
    "prompt": {
        "showPath": True,
        "showTime": False,
        "showGit": False,
        "useColors": True,
    },
}


class Settings:
    """Key/value settings backed by <LUCLI_HOME>/settings.json."""

    def __init__(self, home: Optional[Path] = None):
        self.home = Path(home) if home else lucli_home()
        self.settings_file = self.home / SETTINGS_FILE_NAME
        self.prompts_dir = self.home / PROMPTS_DIR_NAME
        self.data: dict = {}

        self._ensure_dirs()
        self._load()

    def _ensure_dirs(self) -> None:
        try:
            self.home.mkdir(parents=True, exist_ok=True)
            self.prompts_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            warn(f"Could not create settings directories: {e}")

    def _load(self) -> None:
        if not self.settings_file.exists():
            self.data = copy.deepcopy(DEFAULT_SETTINGS)
            self.save()
            return

        try:
            with open(self.settings_file) as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("settings document is not a JSON object")
            self.data = data
        except (OSError, ValueError) as e:
            warn(f"Could not load settings, using defaults: {e}")
            self.data = copy.deepcopy(DEFAULT_SETTINGS)

    def save(self) -> None:
        """Write the current document to disk."""
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, 'w') as f:
                json.dump(self.data, f, indent=2)
        except OSError as e:
            warn(f"Could not save settings: {e}")

    # -------------------------------------------------------------------------
    # Typed accessors
    # -------------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by key; dotted keys reach into nested objects."""
        node: Any = self.data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_string(self, key: str, default: str = "") -> str:
        value = self.get(key)
        return default if value is None else str(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, str):
            return value.strip().lower() in ("true", "yes", "1", "on")
        return bool(value)

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get(key)
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set a value (dotted keys create nested objects) and persist."""
        parts = key.split(".")
        node = self.data
        for part in parts[:-1]:
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value
        self.save()

    def all(self) -> dict:
        return copy.deepcopy(self.data)

    # -------------------------------------------------------------------------
    # Convenience
    # -------------------------------------------------------------------------

    @property
    def current_prompt(self) -> str:
        return self.get_string("currentPrompt", "default")

    @current_prompt.setter
    def current_prompt(self, name: str) -> None:
        self.set("currentPrompt", name)

    @property
    def show_emojis(self) -> bool:
        return self.get_bool("showEmojis", True)

    @property
    def use_colors(self) -> bool:
        return self.get_bool("colorSupport", True)
