"""
Configuration constants for LuCLI.

Paths and default values used across the configuration system. The home
directory is resolved on every call so LUCLI_HOME can be changed at runtime.
"""

import os
from pathlib import Path


SETTINGS_FILE_NAME = "settings.json"
HISTORY_FILE_NAME = "history"
PROMPTS_DIR_NAME = "prompts"
MODULES_DIR_NAME = "modules"


def lucli_home() -> Path:
    """Per-user LuCLI directory (LUCLI_HOME, default ~/.lucli)."""
    override = os.environ.get("LUCLI_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".lucli"


def modules_dir() -> Path:
    return lucli_home() / MODULES_DIR_NAME
