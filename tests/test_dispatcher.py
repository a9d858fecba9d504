"""Tests for command resolution order."""

from types import SimpleNamespace

import pytest

from lucli_lib import __version__
from lucli_lib.common import is_error
from lucli_lib.repl.dispatcher import HELP_TEXT, INTERRUPT_INDICATOR, CommandResolver


class _FakeBuiltins:
    def __init__(self) -> None:
        self.lines: list[str] = []

    def execute(self, raw_line: str) -> str:
        self.lines.append(raw_line)
        return f"builtin:{raw_line}"


class _FakeFramework:
    def __init__(self, names=("modules", "settings")) -> None:
        self._names = list(names)
        self.calls: list[list[str]] = []

    def names(self) -> list[str]:
        return self._names

    def execute(self, argv) -> int:
        self.calls.append(list(argv))
        print("framework output")
        return 0


class _FakeModules:
    def __init__(self, names=()) -> None:
        self.names = {n.lower() for n in names}
        self.calls: list[tuple[str, list[str]]] = []

    def exists(self, name: str) -> bool:
        return name.lower() in self.names

    def execute_by_name(self, name: str, argv) -> int:
        self.calls.append((name, list(argv)))
        if name == "broken":
            raise RuntimeError("module exploded")
        if name == "stuck":
            raise KeyboardInterrupt
        print(f"module {name} {' '.join(argv)}  ")
        return 0


class _FakeEvaluator:
    def __init__(self) -> None:
        self.sources: list[str] = []

    def evaluate(self, source: str) -> None:
        self.sources.append(source)
        if source == "exit()":
            raise SystemExit(0)
        if source == "spin()":
            raise KeyboardInterrupt
        print(f"evaluated {source}\n\n")

    def get_version(self) -> str:
        return "3.99.0"


class _FakeExternal:
    def __init__(self) -> None:
        self.lines: list[str] = []

    def execute(self, line: str) -> str:
        self.lines.append(line)
        if line.startswith("fail"):
            raise OSError("spawn failed\nwith details")
        return f"external:{line}"


@pytest.fixture
def parts():
    return SimpleNamespace(
        builtins=_FakeBuiltins(),
        framework=_FakeFramework(),
        modules=_FakeModules(["run", "lint", "broken", "stuck"]),
        evaluator=_FakeEvaluator(),
        external=_FakeExternal(),
    )


@pytest.fixture
def resolver(ctx, parts) -> CommandResolver:
    return CommandResolver(
        ctx,
        builtins=parts.builtins,
        framework=parts.framework,
        modules=parts.modules,
        evaluator=parts.evaluator,
        external=parts.external,
    )


def test_empty_and_blank_lines(resolver: CommandResolver) -> None:
    assert resolver.dispatch("") == ""
    assert resolver.dispatch("   ") == ""


def test_program_name_is_stripped(resolver: CommandResolver) -> None:
    assert resolver.dispatch("lucli") == ""
    assert resolver.dispatch("LUCLI version") == resolver.dispatch("version")
    assert resolver.dispatch("lucli version") == f"LuCLI {__version__}"


def test_program_name_is_stripped_before_builtins(resolver: CommandResolver, parts) -> None:
    resolver.dispatch("lucli ls -la")
    assert parts.builtins.lines == ["ls -la"]


def test_shell_meta(resolver: CommandResolver) -> None:
    assert resolver.dispatch("help") == HELP_TEXT
    assert resolver.dispatch("-h") == HELP_TEXT
    assert resolver.dispatch("--version") == f"LuCLI {__version__}"
    assert resolver.dispatch("python-version") == "Python Version: 3.99.0"
    assert resolver.dispatch("py-version") == "Python Version: 3.99.0"


def test_script_keyword_requires_code(resolver: CommandResolver, parts) -> None:
    assert resolver.dispatch("py").startswith("Usage:")
    assert parts.evaluator.sources == []


def test_script_keyword_passes_raw_remainder(resolver: CommandResolver, parts) -> None:
    result = resolver.dispatch('py print("a  b")')
    assert parts.evaluator.sources == ['print("a  b")']
    assert result == 'evaluated print("a  b")'


def test_script_exit_does_not_escape(resolver: CommandResolver) -> None:
    result = resolver.dispatch("py exit()")
    assert is_error(result)


def test_builtins_receive_original_line(resolver: CommandResolver, parts) -> None:
    assert resolver.dispatch('cat "a file.txt"') == 'builtin:cat "a file.txt"'


def test_builtin_shadows_module_with_same_name(resolver: CommandResolver, parts) -> None:
    result = resolver.dispatch("run script.py")
    assert result == "builtin:run script.py"
    assert parts.modules.calls == []


def test_framework_output_is_not_returned(resolver: CommandResolver, parts, capsys) -> None:
    assert resolver.dispatch("modules list") == ""
    assert parts.framework.calls == [["modules", "list"]]
    assert "framework output" in capsys.readouterr().out


def test_module_shortcut_output_is_captured(resolver: CommandResolver, parts, capsys) -> None:
    result = resolver.dispatch("lint src --fix")
    assert result == "module lint src --fix"
    assert parts.modules.calls == [("lint", ["src", "--fix"])]
    assert capsys.readouterr().out == ""


def test_module_failure_becomes_error_line(resolver: CommandResolver) -> None:
    result = resolver.dispatch("broken")
    assert is_error(result)
    assert "module exploded" in result


def test_unknown_command_falls_back_to_external(resolver: CommandResolver, parts) -> None:
    assert resolver.dispatch("git status") == "external:git status"
    assert parts.external.lines == ["git status"]


def test_exceptions_become_single_error_line(resolver: CommandResolver) -> None:
    result = resolver.dispatch("fail now")
    assert is_error(result)
    assert "\n" not in result
    assert "spawn failed" in result


def test_tier_collision_is_rejected(ctx, parts) -> None:
    with pytest.raises(ValueError, match="ls"):
        CommandResolver(
            ctx,
            builtins=parts.builtins,
            framework=_FakeFramework(["modules", "ls"]),
            modules=parts.modules,
            evaluator=parts.evaluator,
            external=parts.external,
        )


def test_interrupted_script_returns_indicator(resolver: CommandResolver) -> None:
    assert resolver.dispatch("py spin()") == INTERRUPT_INDICATOR
    assert resolver.dispatch("version") == f"LuCLI {__version__}"


def test_interrupted_module_returns_indicator(resolver: CommandResolver, parts) -> None:
    assert resolver.dispatch("stuck --forever") == INTERRUPT_INDICATOR
    assert parts.modules.calls[-1] == ("stuck", ["--forever"])
