"""
Module registry for LuCLI.

Discovers, loads, scaffolds, installs and removes modules. Modules are
looked up again on every call, so a module installed mid-session is
available on the next line without restarting the shell.
"""

import importlib.util
import io
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import List, Optional, Sequence

import requests
import yaml

from lucli_lib.config import modules_dir
from .dataclasses import MANIFEST_NAME, DEFAULT_MAIN, ModuleDefinition
from .validation import (
    ModuleValidationError,
    validate_module_manifest,
    validate_module_name,
)


MODULE_TEMPLATE = '''"""
{name} - LuCLI module

Run with: {name} [args...]
"""


def main(argv):
    name = argv[0] if argv else "world"
    print(f"Hello, {{name}}! This is the {name} module.")
    return 0
'''

DOWNLOAD_TIMEOUT = 60


def parse_module_manifest(data: dict, directory: Path) -> ModuleDefinition:
    """Parse a module definition from YAML data dict."""
    return ModuleDefinition(
        name=data['name'],
        directory=directory,
        description=data.get('description', ''),
        version=str(data.get('version', '0.0.0')),
        main=data.get('main', DEFAULT_MAIN),
        author=data.get('author', ''),
        keywords=list(data.get('keywords', [])),
    )


def read_manifest(directory: Path) -> dict:
    manifest = directory / MANIFEST_NAME
    if not manifest.exists():
        raise FileNotFoundError(f"Module manifest not found: {manifest}")

    with open(manifest) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ModuleValidationError(f"YAML syntax error in {manifest}: {e}")

    if not isinstance(data, dict):
        raise ModuleValidationError(f"Module YAML must be a dict, got {type(data).__name__}")
    return data


def load_module_definition(directory: Path) -> ModuleDefinition:
    """
    Load a module definition from <directory>/module.yaml.

    Raises:
        FileNotFoundError: If module.yaml doesn't exist
        ModuleValidationError: If module.yaml is invalid
    """
    data = read_manifest(directory)
    errors = validate_module_manifest(data)
    if errors:
        raise ModuleValidationError(f"Module '{directory.name}' validation failed:\n  " + "\n  ".join(errors))
    return parse_module_manifest(data, directory)


class ModuleRegistry:
    """Filesystem-backed module registry."""

    def __init__(self, root: Optional[Path] = None):
        self._root = Path(root) if root else None

    @property
    def root(self) -> Path:
        return self._root or modules_dir()

    def ensure_root(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def find(self, name: str) -> Optional[Path]:
        """Module directory for a name (case-insensitive), or None."""
        if not name or not self.root.is_dir():
            return None
        wanted = name.lower()
        for entry in self.root.iterdir():
            if entry.is_dir() and entry.name.lower() == wanted and (entry / MANIFEST_NAME).exists():
                return entry
        return None

    def exists(self, name: str) -> bool:
        return self.find(name) is not None

    def names(self) -> List[str]:
        if not self.root.is_dir():
            return []
        return sorted(
            entry.name for entry in self.root.iterdir()
            if entry.is_dir() and (entry / MANIFEST_NAME).exists()
        )

    def list_modules(self) -> List[ModuleDefinition]:
        """All loadable modules; invalid ones are skipped."""
        modules = []
        for name in self.names():
            try:
                modules.append(load_module_definition(self.root / name))
            except (FileNotFoundError, ModuleValidationError):
                continue
        return modules

    def get(self, name: str) -> ModuleDefinition:
        directory = self.find(name)
        if directory is None:
            raise FileNotFoundError(f"Module not found: {name}")
        return load_module_definition(directory)

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def execute_by_name(self, name: str, argv: Sequence[str]) -> int:
        """Import a module's entry point and call main(argv)."""
        definition = self.get(name)
        main_path = definition.main_path
        if not main_path.exists():
            raise ModuleValidationError(f"Module '{definition.name}' has no entry point: {main_path}")

        spec = importlib.util.spec_from_file_location(f"lucli_module_{definition.name.replace('-', '_')}", main_path)
        if spec is None or spec.loader is None:
            raise ModuleValidationError(f"Cannot load module '{definition.name}' from {main_path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        entry = getattr(module, "main", None)
        if not callable(entry):
            raise ModuleValidationError(f"Module '{definition.name}' does not define main(argv)")

        result = entry(list(argv))
        return result if isinstance(result, int) else 0

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def init_module(self, name: str, description: str = "") -> Path:
        """Scaffold a new module. Raises FileExistsError if present."""
        errors = validate_module_name(name)
        if errors:
            raise ModuleValidationError(errors[0])

        directory = self.ensure_root() / name
        if directory.exists():
            raise FileExistsError(f"Module already exists: {directory}")
        directory.mkdir()

        manifest = {
            "name": name,
            "description": description or f"{name} module",
            "version": "1.0.0",
            "main": DEFAULT_MAIN,
        }
        with open(directory / MANIFEST_NAME, 'w') as f:
            yaml.safe_dump(manifest, f, sort_keys=False)
        (directory / DEFAULT_MAIN).write_text(MODULE_TEMPLATE.format(name=name))
        return directory

    def install(self, source: str, name: Optional[str] = None) -> ModuleDefinition:
        """
        Install a module from a local directory, a local .zip, or an
        http(s) URL pointing at a .zip archive.

        Raises:
            FileNotFoundError: If the source doesn't exist
            FileExistsError: If the module is already installed
            ModuleValidationError: If the source is not a valid module
            requests.RequestException: If the download fails
        """
        with tempfile.TemporaryDirectory(prefix="lucli-module-") as tmp:
            staging = Path(tmp)
            if source.startswith(("http://", "https://")):
                response = requests.get(source, timeout=DOWNLOAD_TIMEOUT)
                response.raise_for_status()
                module_dir = self._extract_zip(io.BytesIO(response.content), staging)
            else:
                path = Path(source).expanduser()
                if not path.exists():
                    raise FileNotFoundError(f"Module source not found: {path}")
                if path.is_dir():
                    module_dir = path
                elif zipfile.is_zipfile(path):
                    module_dir = self._extract_zip(path, staging)
                else:
                    raise ModuleValidationError(f"Not a module directory or zip archive: {path}")

            definition = load_module_definition(module_dir)
            target_name = name or definition.name
            errors = validate_module_name(target_name)
            if errors:
                raise ModuleValidationError(errors[0])

            target = self.ensure_root() / target_name
            if self.exists(target_name):
                raise FileExistsError(f"Module already installed: {target}")
            shutil.copytree(module_dir, target)

        return load_module_definition(target)

    def uninstall(self, name: str) -> Path:
        directory = self.find(name)
        if directory is None:
            raise FileNotFoundError(f"Module not found: {name}")
        shutil.rmtree(directory)
        return directory

    @staticmethod
    def _extract_zip(archive, staging: Path) -> Path:
        """Extract an archive and return the directory holding module.yaml."""
        with zipfile.ZipFile(archive) as zf:
            for member in zf.namelist():
                target = (staging / member).resolve()
                if staging.resolve() not in target.parents and target != staging.resolve():
                    raise ModuleValidationError(f"Unsafe path in archive: {member}")
            zf.extractall(staging)

        if (staging / MANIFEST_NAME).exists():
            return staging
        candidates = [p.parent for p in staging.glob(f"*/{MANIFEST_NAME}")]
        if len(candidates) != 1:
            raise ModuleValidationError(f"Archive must contain exactly one {MANIFEST_NAME}")
        return candidates[0]
