"""
ANSI color codes and logging utilities for LuCLI.
"""


class Colors:
    """ANSI color escape codes for terminal output."""
    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    CYAN = "\033[0;36m"
    BOLD = "\033[1m"
    NC = "\033[0m"  # No Color / Reset


ERROR_MARKER = "[ERROR]"


def log(msg: str) -> None:
    """Log a success/info message in green."""
    print(f"{Colors.GREEN}[+]{Colors.NC} {msg}")


def warn(msg: str) -> None:
    """Log a warning message in yellow."""
    print(f"{Colors.YELLOW}[!]{Colors.NC} {msg}")


def error(msg: str) -> None:
    """Log an error message in red."""
    print(f"{Colors.RED}{ERROR_MARKER}{Colors.NC} {msg}")


def info(msg: str) -> None:
    """Log an informational message in cyan."""
    print(f"{Colors.CYAN}[i]{Colors.NC} {msg}")


def format_error(msg: str, color: bool = True) -> str:
    """Return a single-line error string instead of printing it."""
    first_line = str(msg).strip().splitlines()[0] if str(msg).strip() else "unknown error"
    if color:
        return f"{Colors.RED}{ERROR_MARKER}{Colors.NC} {first_line}"
    return f"{ERROR_MARKER} {first_line}"


def is_error(text: str) -> bool:
    """True if text was produced by format_error()."""
    return ERROR_MARKER in text.split("\n", 1)[0]
