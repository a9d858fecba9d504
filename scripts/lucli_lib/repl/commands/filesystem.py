"""
Filesystem commands for the LuCLI shell.

Each cmd_* function takes the shell context and the argument list (the
command name already removed) and returns the text to display. Paths are
resolved against the shell's working directory, not the process cwd.
Usage problems and missing files come back as messages; anything else
propagates to the dispatcher.
"""

import fnmatch
import os
import shutil
import stat
from datetime import datetime
from pathlib import Path

from ..completer import DIRECTORY_GLYPH, file_category
from ..context import ShellContext


LS_WIDTH = 80
DEFAULT_LINES = 10


def split_flags(args: list[str]) -> tuple[set[str], list[str]]:
    """Split `-la`-style flags into single letters and return the rest."""
    flags: set[str] = set()
    rest: list[str] = []
    for arg in args:
        if arg.startswith("-") and len(arg) > 1 and arg != "-":
            flags.update(arg.lstrip("-"))
        else:
            rest.append(arg)
    return flags, rest


def format_size(size: int, human: bool) -> str:
    if not human:
        return str(size)
    value = float(size)
    for unit in ("B", "K", "M", "G", "T"):
        if value < 1024 or unit == "T":
            return f"{value:.0f}{unit}" if unit == "B" else f"{value:.1f}{unit}"
        value /= 1024
    return str(size)


def _sorted_entries(directory: Path, show_hidden: bool) -> list[Path]:
    entries = [p for p in directory.iterdir() if show_hidden or not p.name.startswith(".")]
    return sorted(entries, key=lambda p: (not p.is_dir(), p.name.lower()))


def _display_name(ctx: ShellContext, path: Path) -> str:
    name = path.name + ("/" if path.is_dir() else "")
    if not ctx.show_emojis:
        return name
    glyph = DIRECTORY_GLYPH if path.is_dir() else file_category(path.name)[0]
    return f"{glyph} {name}"


def _long_line(ctx: ShellContext, path: Path, human: bool) -> str:
    st = path.lstat()
    mtime = datetime.fromtimestamp(st.st_mtime).strftime("%b %d %H:%M")
    return f"{stat.filemode(st.st_mode)} {format_size(st.st_size, human):>8} {mtime} {_display_name(ctx, path)}"


def _columns(names: list[str]) -> str:
    if not names:
        return ""
    width = max(len(n) for n in names) + 2
    per_line = max(1, LS_WIDTH // width)
    lines = []
    for i in range(0, len(names), per_line):
        lines.append("".join(n.ljust(width) for n in names[i:i + per_line]).rstrip())
    return "\n".join(lines)


def cmd_ls(ctx: ShellContext, args: list[str]) -> str:
    """List directory contents."""
    flags, paths = split_flags(args)
    long_format = "l" in flags
    show_hidden = "a" in flags
    human = "h" in flags

    output = []
    for path_str in paths or ["."]:
        path = ctx.fs.resolve(path_str)
        if not path.exists():
            output.append(f"ls: {path_str}: No such file or directory")
            continue
        entries = _sorted_entries(path, show_hidden) if path.is_dir() else [path]
        if long_format:
            output.extend(_long_line(ctx, e, human) for e in entries)
        else:
            output.append(_columns([_display_name(ctx, e) for e in entries]))
    return "\n".join(line for line in output if line).rstrip()


def cmd_cd(ctx: ShellContext, args: list[str]) -> str:
    """Change the shell's working directory."""
    target = args[0] if args else ""
    if ctx.fs.change_directory(target):
        return ""
    if target == "-":
        return "cd: no previous directory"
    return f"cd: {target}: No such directory"


def cmd_pwd(ctx: ShellContext, args: list[str]) -> str:
    return str(ctx.fs.cwd)


def cmd_mkdir(ctx: ShellContext, args: list[str]) -> str:
    flags, paths = split_flags(args)
    if not paths:
        return "mkdir: missing operand"
    output = []
    for path_str in paths:
        path = ctx.fs.resolve(path_str)
        try:
            path.mkdir(parents="p" in flags, exist_ok="p" in flags)
        except FileExistsError:
            output.append(f"mkdir: {path_str}: File exists")
        except FileNotFoundError:
            output.append(f"mkdir: {path_str}: No such file or directory (use -p)")
    return "\n".join(output)


def cmd_rmdir(ctx: ShellContext, args: list[str]) -> str:
    if not args:
        return "rmdir: missing operand"
    output = []
    for path_str in args:
        path = ctx.fs.resolve(path_str)
        if not path.is_dir():
            output.append(f"rmdir: {path_str}: No such directory")
        elif any(path.iterdir()):
            output.append(f"rmdir: {path_str}: Directory not empty")
        else:
            path.rmdir()
    return "\n".join(output)


def cmd_rm(ctx: ShellContext, args: list[str]) -> str:
    flags, paths = split_flags(args)
    if not paths:
        return "rm: missing operand"
    recursive = "r" in flags or "R" in flags
    force = "f" in flags
    output = []
    for path_str in paths:
        path = ctx.fs.resolve(path_str)
        if not path.exists() and not path.is_symlink():
            if not force:
                output.append(f"rm: {path_str}: No such file or directory")
            continue
        if path.is_dir() and not path.is_symlink():
            if not recursive:
                output.append(f"rm: {path_str}: is a directory (use -r)")
                continue
            shutil.rmtree(path)
        else:
            path.unlink()
    return "\n".join(output)


def _destination(ctx: ShellContext, src: Path, dst_str: str) -> Path:
    dst = ctx.fs.resolve(dst_str)
    return dst / src.name if dst.is_dir() else dst


def cmd_cp(ctx: ShellContext, args: list[str]) -> str:
    flags, paths = split_flags(args)
    if len(paths) != 2:
        return "cp: usage: cp [-r] <source> <destination>"
    src = ctx.fs.resolve(paths[0])
    if not src.exists():
        return f"cp: {paths[0]}: No such file or directory"
    dst = _destination(ctx, src, paths[1])
    if src.is_dir():
        if "r" not in flags and "R" not in flags:
            return f"cp: {paths[0]}: is a directory (use -r)"
        shutil.copytree(src, dst)
    else:
        shutil.copy2(src, dst)
    return ""


def cmd_mv(ctx: ShellContext, args: list[str]) -> str:
    if len(args) != 2:
        return "mv: usage: mv <source> <destination>"
    src = ctx.fs.resolve(args[0])
    if not src.exists():
        return f"mv: {args[0]}: No such file or directory"
    shutil.move(str(src), str(_destination(ctx, src, args[1])))
    return ""


def _read_text(ctx: ShellContext, command: str, path_str: str) -> tuple[str, str]:
    """Return (text, error) for a file argument."""
    path = ctx.fs.resolve(path_str)
    if not path.exists():
        return "", f"{command}: {path_str}: No such file or directory"
    if path.is_dir():
        return "", f"{command}: {path_str}: Is a directory"
    return path.read_text(errors="replace"), ""


def cmd_cat(ctx: ShellContext, args: list[str]) -> str:
    if not args:
        return "cat: missing file operand"
    output = []
    for path_str in args:
        text, err = _read_text(ctx, "cat", path_str)
        output.append(err or text.rstrip("\n"))
    return "\n".join(output)


def cmd_touch(ctx: ShellContext, args: list[str]) -> str:
    if not args:
        return "touch: missing file operand"
    for path_str in args:
        ctx.fs.resolve(path_str).touch()
    return ""


def cmd_find(ctx: ShellContext, args: list[str]) -> str:
    """find [path] [-name PATTERN]"""
    pattern = None
    roots = []
    i = 0
    while i < len(args):
        if args[i] == "-name" and i + 1 < len(args):
            pattern = args[i + 1]
            i += 2
            continue
        roots.append(args[i])
        i += 1

    root_str = roots[0] if roots else "."
    root = ctx.fs.resolve(root_str)
    if not root.exists():
        return f"find: {root_str}: No such file or directory"

    results = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(dirnames + filenames):
            if pattern is None or fnmatch.fnmatch(name, pattern):
                full = Path(dirpath) / name
                rel = os.path.relpath(full, root)
                results.append(os.path.join(root_str, rel))
    return "\n".join(results)


def cmd_wc(ctx: ShellContext, args: list[str]) -> str:
    if not args:
        return "wc: missing file operand"
    output = []
    totals = [0, 0, 0]
    for path_str in args:
        path = ctx.fs.resolve(path_str)
        if not path.is_file():
            output.append(f"wc: {path_str}: No such file")
            continue
        data = path.read_bytes()
        text = data.decode(errors="replace")
        counts = [text.count("\n"), len(text.split()), len(data)]
        totals = [a + b for a, b in zip(totals, counts)]
        output.append(f"{counts[0]:>8}{counts[1]:>8}{counts[2]:>8} {path_str}")
    if len(args) > 1:
        output.append(f"{totals[0]:>8}{totals[1]:>8}{totals[2]:>8} total")
    return "\n".join(output)


def _line_count(args: list[str]) -> tuple[int, list[str], str]:
    """Parse `-n N` / `-N`; return (count, files, error)."""
    count = DEFAULT_LINES
    files = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "-n" and i + 1 < len(args):
            value = args[i + 1]
            i += 2
        elif arg.startswith("-") and arg[1:].isdigit():
            value = arg[1:]
            i += 1
        else:
            files.append(arg)
            i += 1
            continue
        if not value.isdigit():
            return 0, [], f"invalid number of lines: {value}"
        count = int(value)
    return count, files, ""


def _head_or_tail(ctx: ShellContext, command: str, args: list[str]) -> str:
    count, files, err = _line_count(args)
    if err:
        return f"{command}: {err}"
    if not files:
        return f"{command}: missing file operand"
    output = []
    for path_str in files:
        text, err = _read_text(ctx, command, path_str)
        if err:
            output.append(err)
            continue
        lines = text.splitlines()
        chosen = lines[:count] if command == "head" else lines[-count:] if count else []
        if len(files) > 1:
            output.append(f"==> {path_str} <==")
        output.extend(chosen)
    return "\n".join(output)


def cmd_head(ctx: ShellContext, args: list[str]) -> str:
    return _head_or_tail(ctx, "head", args)


def cmd_tail(ctx: ShellContext, args: list[str]) -> str:
    return _head_or_tail(ctx, "tail", args)
