"""
lucli_lib.config - Paths and persistent settings for LuCLI.

This package contains:
- constants: LUCLI_HOME and the files/directories beneath it
- settings: JSON-backed Settings store
"""

from .constants import (
    SETTINGS_FILE_NAME,
    HISTORY_FILE_NAME,
    PROMPTS_DIR_NAME,
    MODULES_DIR_NAME,
    lucli_home,
    modules_dir,
)

from .settings import (
    DEFAULT_SETTINGS,
    Settings,
)

__all__ = [
    # Constants
    'SETTINGS_FILE_NAME',
    'HISTORY_FILE_NAME',
    'PROMPTS_DIR_NAME',
    'MODULES_DIR_NAME',
    'lucli_home',
    'modules_dir',
    # Settings
    'DEFAULT_SETTINGS',
    'Settings',
]
