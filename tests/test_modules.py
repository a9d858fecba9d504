"""Tests for the module registry."""

import io
import zipfile
from pathlib import Path
from types import SimpleNamespace

import pytest
import requests
import yaml

from lucli_lib.modules import ModuleRegistry, ModuleValidationError, validate_module_manifest


def _write_module(directory: Path, name: str, body: str) -> Path:
    directory.mkdir(parents=True)
    (directory / "module.yaml").write_text(yaml.safe_dump({"name": name, "version": "2.0.0"}))
    (directory / "module.py").write_text(body)
    return directory


ECHO_MODULE = "def main(argv):\n    print('echo:' + ','.join(argv))\n"


@pytest.fixture
def registry(tmp_path: Path) -> ModuleRegistry:
    return ModuleRegistry(tmp_path / "modules")


def test_empty_registry(registry: ModuleRegistry) -> None:
    assert registry.names() == []
    assert registry.list_modules() == []
    assert not registry.exists("anything")


def test_default_root_follows_lucli_home(lucli_home: Path) -> None:
    assert ModuleRegistry().root == lucli_home / "modules"


def test_init_scaffolds_runnable_module(registry: ModuleRegistry, capsys) -> None:
    directory = registry.init_module("greet", "Say hello")

    assert (directory / "module.yaml").exists()
    assert registry.exists("GREET")
    assert registry.get("greet").description == "Say hello"

    assert registry.execute_by_name("greet", ["sam"]) == 0
    assert "Hello, sam!" in capsys.readouterr().out


def test_init_rejects_duplicates_and_bad_names(registry: ModuleRegistry) -> None:
    registry.init_module("tool")
    with pytest.raises(FileExistsError):
        registry.init_module("tool")
    with pytest.raises(ModuleValidationError):
        registry.init_module("Bad Name")


def test_registry_is_rescanned_on_every_call(registry: ModuleRegistry) -> None:
    assert not registry.exists("late")
    _write_module(registry.root / "late", "late", ECHO_MODULE)
    assert registry.exists("late")


def test_missing_main_function(registry: ModuleRegistry) -> None:
    _write_module(registry.root / "empty", "empty", "VALUE = 1\n")
    with pytest.raises(ModuleValidationError, match="main"):
        registry.execute_by_name("empty", [])


def test_invalid_manifest_is_skipped_in_listing(registry: ModuleRegistry) -> None:
    broken = registry.root / "broken"
    broken.mkdir(parents=True)
    (broken / "module.yaml").write_text("- just\n- a list\n")
    _write_module(registry.root / "good", "good", ECHO_MODULE)

    assert [m.name for m in registry.list_modules()] == ["good"]
    with pytest.raises(ModuleValidationError):
        registry.get("broken")


def test_manifest_validation() -> None:
    assert validate_module_manifest({}) == ["Missing required field: name"]
    assert validate_module_manifest({"name": "ok"}) == []
    assert validate_module_manifest({"name": "ok", "main": "../evil.py"})
    assert validate_module_manifest({"name": "ok", "main": "run.sh"})


def test_install_from_directory_and_uninstall(registry: ModuleRegistry, tmp_path: Path, capsys) -> None:
    source = _write_module(tmp_path / "src" / "echo", "echo", ECHO_MODULE)

    definition = registry.install(str(source))
    assert definition.version == "2.0.0"
    registry.execute_by_name("echo", ["a", "b"])
    assert capsys.readouterr().out == "echo:a,b\n"

    with pytest.raises(FileExistsError):
        registry.install(str(source))

    registry.uninstall("echo")
    assert not registry.exists("echo")
    with pytest.raises(FileNotFoundError):
        registry.uninstall("echo")


def _zip_bytes(name: str) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr(f"{name}-main/module.yaml", yaml.safe_dump({"name": name}))
        zf.writestr(f"{name}-main/module.py", ECHO_MODULE)
    return buffer.getvalue()


def test_install_from_zip_with_rename(registry: ModuleRegistry, tmp_path: Path) -> None:
    archive = tmp_path / "zipped.zip"
    archive.write_bytes(_zip_bytes("zipped"))

    registry.install(str(archive), name="renamed")
    assert registry.names() == ["renamed"]


def test_install_from_url(registry: ModuleRegistry, monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return SimpleNamespace(content=_zip_bytes("remote"), raise_for_status=lambda: None)

    monkeypatch.setattr(requests, "get", fake_get)
    registry.install("https://example.com/remote.zip")

    assert calls == [("https://example.com/remote.zip", 60)]
    assert registry.exists("remote")


def test_install_rejects_unsafe_archive(registry: ModuleRegistry, tmp_path: Path) -> None:
    archive = tmp_path / "evil.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("../escape/module.yaml", "name: escape\n")
    with pytest.raises(ModuleValidationError, match="Unsafe"):
        registry.install(str(archive))
