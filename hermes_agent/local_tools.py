"""Local tools the agent runs directly: shell commands, file access and directory listings."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 40
_FALLBACK_PREVIEW_CHARS = 30

# Tool name -> (argument holding the preview text, default when absent).
_PREVIEW_FIELDS: dict[str, tuple[str, str]] = {
    "terminal": ("command", ""),
    "process_spawn": ("command", ""),
    "file_read": ("path", ""),
    "file_write": ("path", ""),
    "patch": ("path", ""),
    "list_directory": ("path", "."),
    "search_files": ("pattern", ""),
    "web_search": ("query", ""),
    "web_extract": ("url", ""),
    "browser_navigate": ("url", ""),
}


def _shell_argv(command: str) -> list[str]:
    if os.name == "nt":
        return ["cmd", "/C", command]
    return ["sh", "-c", command]


def execute_terminal(command: str, cwd: str | os.PathLike[str] | None = None) -> str:
    """Run a command through the system shell and report its exit code and output."""
    try:
        completed = subprocess.run(
            _shell_argv(command),
            cwd=cwd,
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        return f"Failed to execute command: {exc}"

    stdout = completed.stdout.decode("utf-8", errors="replace")
    stderr = completed.stderr.decode("utf-8", errors="replace")
    exit_code = completed.returncode if completed.returncode >= 0 else -1
    if not stderr:
        return f"Exit code: {exit_code}\n{stdout}"
    return f"Exit code: {exit_code}\n--- STDOUT ---\n{stdout}\n--- STDERR ---\n{stderr}"


def execute_file_read(path: str | os.PathLike[str]) -> str:
    """Return a file's text, or an error description."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return f"Error reading file: {exc}"


def execute_file_write(path: str | os.PathLike[str], content: str) -> str:
    """Write text to a file, creating missing parent directories."""
    target = Path(path)
    parent = target.parent
    if not parent.exists():
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return f"Error creating directory: {exc}"
    try:
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        return f"Error writing file: {exc}"
    return f"Successfully wrote to {os.fspath(path)}"


def _describe_entry(entry: os.DirEntry[str]) -> str:
    try:
        is_dir = entry.is_dir()
    except OSError:
        is_dir = False
    if is_dir:
        return f"{entry.name}/"
    try:
        size = entry.stat().st_size
    except OSError:
        size = 0
    return f"{entry.name} ({size} bytes)"


def _scan(path: str | os.PathLike[str]) -> list[str]:
    with os.scandir(path) as entries:
        return sorted(_describe_entry(e) for e in entries)


def execute_list_directory(path: str | os.PathLike[str] = ".") -> str:
    """List a directory's entries; an unreadable directory falls back to the current one."""
    try:
        entries = _scan(path)
    except OSError as exc:
        logger.error("Error listing directory: %s", exc)
        entries = _scan(".")

    shown = os.fspath(path)
    if not entries:
        return f"Empty directory: {shown}"
    listing = "\n".join(entries)
    return f"Contents of {shown} ({len(entries)} items):\n{listing}"


def _str_arg(args: Any, key: str, default: str) -> str:
    if isinstance(args, dict):
        value = args.get(key)
        if isinstance(value, str):
            return value
    return default


def tool_call_preview(name: str, arguments: str) -> str:
    """A short, human-readable rendering of a tool call for the log."""
    try:
        args: Any = json.loads(arguments)
    except ValueError:
        args = None

    if name in _PREVIEW_FIELDS:
        key, default = _PREVIEW_FIELDS[name]
        preview = _str_arg(args, key, default)[:_PREVIEW_CHARS]
    elif name in ("memory", "todo"):
        preview = f"{_str_arg(args, 'action', '?')}/{_str_arg(args, 'target', '?')}"
    elif name == "execute_code":
        preview = _str_arg(args, "language", "?")
    else:
        preview = arguments[:_FALLBACK_PREVIEW_CHARS]
    return f'{name}("{preview}")'