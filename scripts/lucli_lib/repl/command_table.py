"""
Command table for the LuCLI shell.

One mapping from command name to capability flags. The command resolver
and the completion engine both read from here, so the set of builtins,
path-taking commands and script suffixes cannot drift apart.
"""

from enum import Flag, auto


class Capability(Flag):
    NONE = 0
    BUILTIN = auto()          # handled by the builtin executor, never shelled out
    PATH_TAKING = auto()      # arguments are completed as filesystem paths
    DIRECTORY_ONLY = auto()   # path completion offers directories only
    SCRIPT_RUNNER = auto()    # path completion offers directories and script files
    SHELL_META = auto()       # help/version handled by the resolver itself
    SCRIPT = auto()           # embedded-script invocation keyword
    COMPLETABLE = auto()      # offered by command-name completion


SCRIPT_KEYWORD = "py"

# Recognized embedded-script sources (all runnable with runpy.run_path)
SCRIPT_EXTENSIONS = (".py", ".pyw", ".pyz")

# LuCLI batch scripts run by the `run` builtin
BATCH_EXTENSIONS = (".lucli",)

HELP_NAMES = ("help", "--help", "-h")
VERSION_NAMES = ("version", "--version")
ENGINE_VERSION_NAMES = ("python-version", "--python-version", "py-version")
EXIT_NAMES = ("exit", "quit")

_B = Capability.BUILTIN | Capability.COMPLETABLE
_P = _B | Capability.PATH_TAKING

COMMANDS: dict[str, Capability] = {
    # Navigation
    "ls": _P,
    "dir": _P,
    "cd": _P | Capability.DIRECTORY_ONLY,
    "pwd": _B,
    # File manipulation
    "mkdir": _P | Capability.DIRECTORY_ONLY,
    "rmdir": _P | Capability.DIRECTORY_ONLY,
    "rm": _P,
    "cp": _P,
    "mv": _P,
    "touch": _P,
    # Viewing and search
    "cat": _P,
    "head": _P,
    "tail": _P,
    "find": _P,
    "wc": _P,
    # Editing and running
    "edit": _P,
    "prompt": _B,
    "run": _P | Capability.SCRIPT_RUNNER,
    # Embedded language
    SCRIPT_KEYWORD: Capability.SCRIPT | Capability.COMPLETABLE,
    # Shell meta
    "help": Capability.SHELL_META | Capability.COMPLETABLE,
    "--help": Capability.SHELL_META,
    "-h": Capability.SHELL_META,
    "version": Capability.SHELL_META | Capability.COMPLETABLE,
    "--version": Capability.SHELL_META,
    "python-version": Capability.SHELL_META,
    "--python-version": Capability.SHELL_META,
    "py-version": Capability.SHELL_META,
    # Offered by completion only; these fall through to the host shell
    "exit": Capability.COMPLETABLE,
    "quit": Capability.COMPLETABLE,
    "clear": Capability.COMPLETABLE,
    "history": Capability.COMPLETABLE,
    "env": Capability.COMPLETABLE,
    "echo": Capability.COMPLETABLE,
}


def capability(name: str) -> Capability:
    """Capabilities of a command name (case-insensitive)."""
    return COMMANDS.get((name or "").lower(), Capability.NONE)


def has(name: str, cap: Capability) -> bool:
    return bool(capability(name) & cap)


def names_with(cap: Capability) -> list[str]:
    """All command names carrying a capability, in table order."""
    return [name for name, caps in COMMANDS.items() if caps & cap]


def is_builtin(name: str) -> bool:
    return has(name, Capability.BUILTIN)


def is_path_taking(name: str) -> bool:
    return has(name, Capability.PATH_TAKING)


def is_script_file(filename: str) -> bool:
    return filename.lower().endswith(SCRIPT_EXTENSIONS)
