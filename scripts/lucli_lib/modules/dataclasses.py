"""
Module definition dataclasses for LuCLI.

A module is a directory under <LUCLI_HOME>/modules/<name>/ holding a
module.yaml manifest and a Python entry point that defines main(argv).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


MANIFEST_NAME = "module.yaml"
DEFAULT_MAIN = "module.py"


@dataclass
class ModuleDefinition:
    """A module manifest parsed from module.yaml."""
    name: str
    directory: Path
    description: str = ""
    version: str = "0.0.0"
    main: str = DEFAULT_MAIN
    author: str = ""
    keywords: List[str] = field(default_factory=list)

    @property
    def main_path(self) -> Path:
        return self.directory / self.main
