"""
Secret lookup for ${secret:ID} references in LuCLI scripts.

Secrets are read from LUCLI_SECRET_<ID> environment variables, with the ID
upper-cased and non-alphanumerics mapped to underscores.
"""

import os
import re
from typing import Mapping, Optional


class SecretNotFoundError(KeyError):
    """Raised when a referenced secret has no value."""

    def __str__(self) -> str:
        return f"Secret not found: {self.args[0]}"


def secret_env_name(secret_id: str) -> str:
    return "LUCLI_SECRET_" + re.sub(r"[^A-Za-z0-9]", "_", secret_id).upper()


class EnvSecretStore:
    """Resolve secrets from environment variables."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = environ if environ is not None else os.environ

    def get(self, secret_id: str) -> str:
        value = self.environ.get(secret_env_name(secret_id))
        if value is None:
            raise SecretNotFoundError(secret_id)
        return value
