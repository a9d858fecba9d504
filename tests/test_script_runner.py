"""Tests for .lucli batch scripts."""

from pathlib import Path

import pytest

from lucli_lib.common import format_error
from lucli_lib.script import (
    EnvSecretStore,
    ScriptError,
    ScriptRunner,
    SecretNotFoundError,
    secret_env_name,
    strip_quotes,
)


class _RecordingDispatch:
    def __init__(self, outputs=None) -> None:
        self.lines: list[str] = []
        self.outputs = outputs or {}

    def __call__(self, line: str) -> str:
        self.lines.append(line)
        return self.outputs.get(line, f"ran {line}")


def _runner(dispatch, environ=None, secrets=None) -> ScriptRunner:
    environ = environ if environ is not None else {}
    return ScriptRunner(dispatch, secrets=secrets or EnvSecretStore(environ), environ=environ)


def test_literal_assignment_and_expansion() -> None:
    dispatch = _RecordingDispatch()
    output = _runner(dispatch).run_lines([
        "#!/usr/bin/env lucli",
        "",
        'greeting="hello world"',
        "set target = ${greeting}!",
        "echo ${target} ${unknown}",
    ])
    assert dispatch.lines == ["echo hello world! ${unknown}"]
    assert output == "ran echo hello world! ${unknown}"


def test_command_substitution_uses_trimmed_output() -> None:
    dispatch = _RecordingDispatch({"pwd": "  /srv/app \n"})
    runner = _runner(dispatch)
    runner.run_lines(["DIR=$(pwd)", "ls ${DIR}"])
    assert runner.variables["DIR"] == "/srv/app"
    assert dispatch.lines[-1] == "ls /srv/app"


def test_failed_substitution_aborts() -> None:
    dispatch = _RecordingDispatch({"boom": format_error("bad")})
    with pytest.raises(ScriptError):
        _runner(dispatch).run_lines(["X=$(boom)", "echo never"])
    assert dispatch.lines == ["boom"]


def test_environment_reference_falls_back_to_empty() -> None:
    runner = _runner(_RecordingDispatch(), environ={"USER": "sam"})
    runner.run_lines(["WHO=${USER}", "NOBODY=${MISSING}"])
    assert runner.variables["WHO"] == "sam"
    assert runner.variables["NOBODY"] == ""


def test_secrets_resolve_from_environment() -> None:
    environ = {secret_env_name("db-pass"): "s3cret"}
    dispatch = _RecordingDispatch()
    runner = _runner(dispatch, environ=environ)
    runner.run_lines(["PASS=${secret:db-pass}", "connect --password ${secret:db-pass}"])
    assert runner.variables["PASS"] == "s3cret"
    assert dispatch.lines == ["connect --password s3cret"]


def test_missing_secret_fails_before_anything_runs() -> None:
    dispatch = _RecordingDispatch()
    with pytest.raises(SecretNotFoundError):
        _runner(dispatch).run_lines(["echo first", "T=${secret:token}"])
    assert dispatch.lines == []


def test_arguments_and_last_result() -> None:
    dispatch = _RecordingDispatch({"whoami": "root"})
    runner = _runner(dispatch)
    runner.run_lines(["whoami", "echo ${_} ${1} ${ARGS}"], argv=["a", "b"])
    assert dispatch.lines[-1] == "echo root a a b"


def test_exit_stops_the_script() -> None:
    dispatch = _RecordingDispatch()
    _runner(dispatch).run_lines(["echo one", "exit 0", "echo two"])
    assert dispatch.lines == ["echo one"]


def test_run_file(tmp_path: Path) -> None:
    script = tmp_path / "deploy.lucli"
    script.write_text("NAME=demo\necho ${NAME}\n")
    assert _runner(_RecordingDispatch()).run_file(script) == "ran echo demo"


def test_run_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ScriptError):
        _runner(_RecordingDispatch()).run_file(tmp_path / "nope.lucli")


def test_secret_env_name() -> None:
    assert secret_env_name("db.pass-1") == "LUCLI_SECRET_DB_PASS_1"


def test_strip_quotes() -> None:
    assert strip_quotes('"a b"') == "a b"
    assert strip_quotes("'x'") == "x"
    assert strip_quotes("\"mixed'") == "\"mixed'"
    assert strip_quotes('"') == '"'


def test_interrupted_line_stops_the_script() -> None:
    dispatch = _RecordingDispatch({"sleep 30": "^C"})
    output = _runner(dispatch).run_lines(["echo one", "sleep 30", "echo two"])
    assert dispatch.lines == ["echo one", "sleep 30"]
    assert output.endswith("^C")
