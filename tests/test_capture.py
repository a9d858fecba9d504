import sys

import pytest

from lucli_lib.common import capture_output, is_capturing


def test_captures_stdout_and_stderr() -> None:
    with capture_output() as buffer:
        print("out")
        print("err", file=sys.stderr)
    assert buffer.getvalue() == "out\nerr\n"
    assert not is_capturing()


def test_streams_restored_after_exception() -> None:
    stdout, stderr = sys.stdout, sys.stderr
    with pytest.raises(ValueError):
        with capture_output():
            raise ValueError("boom")
    assert sys.stdout is stdout
    assert sys.stderr is stderr
    assert not is_capturing()


def test_nesting_is_rejected() -> None:
    with capture_output():
        with pytest.raises(RuntimeError):
            with capture_output():
                pass
    assert not is_capturing()


def test_stderr_can_be_left_alone(capsys) -> None:
    with capture_output(include_stderr=False) as buffer:
        print("kept")
        print("passed through", file=sys.stderr)
    assert buffer.getvalue() == "kept\n"
    assert "passed through" in capsys.readouterr().err
