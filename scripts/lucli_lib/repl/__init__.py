"""
lucli_lib.repl - REPL components for LuCLI

This package contains the modular components for the LuCLI interactive shell:
- tokenizer: Quote-aware line splitting
- assignment: Variable-assignment classification
- command_table: Command names and their capabilities
- context: Working directory and session state
- prompt: Prompt templates
- completer: Tab completion
- commands/: Builtin, external and subcommand handlers
- framework: Subcommand framework (modules, settings)
- dispatcher: Command resolver
"""

from .tokenizer import tokenize
from .assignment import (
    AssignmentKind,
    Assignment,
    NOT_AN_ASSIGNMENT,
    classify,
)
from .command_table import (
    Capability,
    COMMANDS,
    SCRIPT_KEYWORD,
    SCRIPT_EXTENSIONS,
    capability,
    is_builtin,
    is_path_taking,
    is_script_file,
)
from .context import FileSystemState, ShellContext
from .prompt import PromptTemplate, PromptConfig, BUILTIN_TEMPLATES
from .completer import Candidate, CompletionEngine, LucliCompleter

__all__ = [
    'tokenize',
    'AssignmentKind',
    'Assignment',
    'NOT_AN_ASSIGNMENT',
    'classify',
    'Capability',
    'COMMANDS',
    'SCRIPT_KEYWORD',
    'SCRIPT_EXTENSIONS',
    'capability',
    'is_builtin',
    'is_path_taking',
    'is_script_file',
    'FileSystemState',
    'ShellContext',
    'PromptTemplate',
    'PromptConfig',
    'BUILTIN_TEMPLATES',
    'Candidate',
    'CompletionEngine',
    'LucliCompleter',
]
