"""
lucli_lib - Shared library for the LuCLI interactive shell

This package contains the modular components of the LuCLI shell: command
resolution, tab completion, builtin filesystem verbs, the module registry
and the embedded Python evaluator.
"""

__version__ = "1.0.0"

PROGRAM_NAME = "lucli"
