"""Tests for the REPL loop and the one-shot CLI."""

from pathlib import Path

import pytest

import lucli_repl
from lucli_repl import build_shell, main, run_repl


class _FakeSession:
    def __init__(self, inputs) -> None:
        self.inputs = list(inputs)
        self.prompts: list[str] = []

    def prompt(self, message: str) -> str:
        self.prompts.append(message)
        if not self.inputs:
            raise EOFError
        item = self.inputs.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def shell(lucli_home: Path, workdir: Path):
    return build_shell(home=lucli_home, cwd=workdir)


def test_loop_dispatches_until_end_of_input(shell, capsys) -> None:
    session = _FakeSession(["py 6 * 7", "   ", "pwd"])
    assert run_repl(shell, session=session) == 0

    out = capsys.readouterr().out
    assert "42" in out
    assert str(shell.ctx.fs.cwd) in out
    assert out.rstrip().endswith("Goodbye!")
    assert len(session.prompts) == 4


def test_interrupt_reprompts(shell, capsys) -> None:
    session = _FakeSession([KeyboardInterrupt(), "version"])
    run_repl(shell, session=session)

    out = capsys.readouterr().out
    assert "^C" in out
    assert "LuCLI" in out


def test_exit_words_stop_the_loop(shell, capsys) -> None:
    session = _FakeSession(["QUIT", "version"])
    run_repl(shell, session=session)
    assert len(session.prompts) == 1
    assert "Goodbye!" in capsys.readouterr().out


def test_errors_do_not_stop_the_loop(shell, capsys) -> None:
    session = _FakeSession(["py 1/0", "py 'still here'"])
    run_repl(shell, session=session)

    out = capsys.readouterr().out
    assert "[ERROR]" in out
    assert "still here" in out


def test_shell_wiring(shell) -> None:
    assert "modules" in shell.completion.command_names()
    assert shell.resolver.dispatch("lucli") == ""
    assert shell.resolver.dispatch("python-version").startswith("Python Version: ")


def test_batch_script_runs_through_resolver(shell, workdir: Path) -> None:
    (workdir / "job.lucli").write_text("N=$(py 20 + 1)\npy ${N} * 2\n")
    assert shell.resolver.dispatch("run job.lucli") == "42"


def test_module_shortcut_end_to_end(shell, capsys) -> None:
    shell.resolver.dispatch("modules init hello")
    capsys.readouterr()
    assert shell.resolver.dispatch("hello ada") == "Hello, ada! This is the hello module."


def test_one_shot_exit_codes(monkeypatch: pytest.MonkeyPatch, workdir: Path, capsys) -> None:
    monkeypatch.chdir(workdir)
    assert main(["version"]) == 0
    assert "LuCLI" in capsys.readouterr().out
    assert main(["py", "1/0"]) == 1


def test_no_arguments_starts_repl(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lucli_repl, "run_repl", lambda: 7)
    assert main([]) == 7


def test_interrupt_while_running_keeps_the_loop(shell, capsys) -> None:
    session = _FakeSession(["py raise KeyboardInterrupt", "version"])
    run_repl(shell, session=session)

    out = capsys.readouterr().out
    assert "^C" in out
    assert "LuCLI" in out
    assert len(session.prompts) == 3


def test_modules_are_offered_as_commands(shell, capsys) -> None:
    shell.resolver.dispatch("modules init greeter")
    capsys.readouterr()

    candidates = shell.completion.complete("gree", ["gree"])
    assert [c.insert_text for c in candidates] == ["greeter"]
    assert candidates[0].group == "modules"
    assert candidates[0].description == "LuCLI module"


def test_broken_prompt_template_does_not_end_the_loop(shell, capsys) -> None:
    (shell.settings.prompts_dir / "boom.json").write_text('{"template": "{{ 1 / 0 }}"}')
    shell.settings.current_prompt = "boom"
    session = _FakeSession(["version"])
    run_repl(shell, session=session)

    assert session.prompts[0].startswith("lucli:")
    assert "LuCLI" in capsys.readouterr().out
