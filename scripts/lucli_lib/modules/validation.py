"""
Module validation for LuCLI.

Functions for validating module manifests before they are loaded.
"""

import re
from typing import List


MODULE_NAME_PATTERN = re.compile(r'^[a-z][a-z0-9_-]*$')


class ModuleValidationError(Exception):
    """Raised when module validation fails."""
    pass


def validate_module_name(name: str) -> List[str]:
    if not MODULE_NAME_PATTERN.match(name or ""):
        return [f"Invalid module name '{name}': must start with lowercase letter, contain only a-z, 0-9, _, -"]
    return []


def validate_module_manifest(data: dict) -> List[str]:
    """
    Validate a module.yaml structure.
    Returns list of error messages (empty if valid).
    """
    errors = []

    if 'name' not in data:
        errors.append("Missing required field: name")
        return errors

    errors.extend(validate_module_name(str(data['name'])))

    main = data.get('main', 'module.py')
    if not isinstance(main, str) or not main.endswith('.py'):
        errors.append(f"Invalid main '{main}': must be a .py file")
    elif '/' in main or '\\' in main or main.startswith('.'):
        errors.append(f"Invalid main '{main}': must be a file inside the module directory")

    keywords = data.get('keywords', [])
    if not isinstance(keywords, list):
        errors.append("keywords must be a list")

    return errors
