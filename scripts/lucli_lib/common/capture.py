"""
Scoped capture of the process-wide stdout/stderr sinks.

Modules and embedded scripts print directly to sys.stdout; the dispatcher
needs their output as text. capture_output() swaps both sinks for one
buffer and always puts the originals back, including on exceptions.

The redirect is process-global and therefore not reentrant: nesting
raises RuntimeError instead of silently losing the outer buffer.
"""

import io
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from typing import Iterator

_active = False


@contextmanager
def capture_output(include_stderr: bool = True) -> Iterator[io.StringIO]:
    """Capture everything printed inside the block into a StringIO."""
    global _active
    if _active:
        raise RuntimeError("output capture is not reentrant")

    buffer = io.StringIO()
    _active = True
    try:
        with redirect_stdout(buffer):
            if include_stderr:
                with redirect_stderr(buffer):
                    yield buffer
            else:
                yield buffer
    finally:
        _active = False


def is_capturing() -> bool:
    return _active
