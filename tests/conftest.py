from pathlib import Path

import pytest

from lucli_lib.config import Settings
from lucli_lib.repl import FileSystemState, ShellContext


@pytest.fixture(autouse=True)
def lucli_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "lucli-home"
    monkeypatch.setenv("LUCLI_HOME", str(home))
    return home


@pytest.fixture
def settings(lucli_home: Path) -> Settings:
    return Settings(lucli_home)


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def ctx(settings: Settings, workdir: Path, tmp_path: Path) -> ShellContext:
    user_home = tmp_path / "user"
    user_home.mkdir()
    return ShellContext(fs=FileSystemState(cwd=workdir, home=user_home), settings=settings)
