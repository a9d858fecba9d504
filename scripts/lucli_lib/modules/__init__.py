"""
lucli_lib.modules - Module shortcuts for LuCLI.

This package contains:
- dataclasses: ModuleDefinition
- validation: Manifest validation
- loader: ModuleRegistry (discovery, execution, install/uninstall)
"""

from .dataclasses import (
    MANIFEST_NAME,
    DEFAULT_MAIN,
    ModuleDefinition,
)

from .validation import (
    ModuleValidationError,
    validate_module_name,
    validate_module_manifest,
)

from .loader import (
    parse_module_manifest,
    read_manifest,
    load_module_definition,
    ModuleRegistry,
)

__all__ = [
    'MANIFEST_NAME',
    'DEFAULT_MAIN',
    'ModuleDefinition',
    'ModuleValidationError',
    'validate_module_name',
    'validate_module_manifest',
    'parse_module_manifest',
    'read_manifest',
    'load_module_definition',
    'ModuleRegistry',
]
