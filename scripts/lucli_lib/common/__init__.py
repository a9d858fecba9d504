"""
lucli_lib.common - Shared utilities for LuCLI

This module provides:
- colors: ANSI color codes and logging functions
- capture: Scoped stdout/stderr capture
"""

from .colors import Colors, ERROR_MARKER, log, warn, error, info, format_error, is_error
from .capture import capture_output, is_capturing

__all__ = [
    'Colors', 'ERROR_MARKER', 'log', 'warn', 'error', 'info', 'format_error', 'is_error',
    'capture_output', 'is_capturing',
]
