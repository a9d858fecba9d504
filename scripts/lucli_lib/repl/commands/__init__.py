"""
lucli_lib.repl.commands - Command handlers for the LuCLI shell

This package contains command handlers organized by feature area:
- filesystem: ls, cd, cat, cp and the other filesystem verbs
- builtins: BuiltinExecutor (filesystem verbs plus edit, prompt, run)
- external: ExternalProcessExecutor (host shell fallback)
- modules: `modules` subcommands
- settings: `settings` subcommands
"""

from .builtins import BuiltinExecutor, FILESYSTEM_HANDLERS
from .external import ExternalProcessExecutor

__all__ = [
    'BuiltinExecutor',
    'FILESYSTEM_HANDLERS',
    'ExternalProcessExecutor',
]
