"""
lucli_lib.script - Embedded Python evaluation and LuCLI batch scripts.

This package contains:
- engine: PythonEvaluator (the `py` command and `run file.py`)
- runner: ScriptRunner for .lucli files with variable assignment
- secrets: ${secret:ID} lookup
"""

from .engine import PythonEvaluator
from .secrets import EnvSecretStore, SecretNotFoundError, secret_env_name
from .runner import ScriptError, ScriptRunner, strip_quotes

__all__ = [
    'PythonEvaluator',
    'EnvSecretStore',
    'SecretNotFoundError',
    'secret_env_name',
    'ScriptError',
    'ScriptRunner',
    'strip_quotes',
]
