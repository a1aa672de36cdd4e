"""Shared utility functions for kirimase.

Provides async command execution with inherited terminal streams, file-system
helpers for writing generated files, and Rich-based console output shared by
every command.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.status import Status

console = Console()

# Progress indicator shown while a command is working.  Stopped before any
# subprocess takes over the terminal.
spinner = Status("Configuring project...", console=console)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class KirimaseError(Exception):
    """Base class for errors the CLI reports without a traceback."""


class CommandError(KirimaseError):
    """Raised when an external command exits with a non-zero code."""

    def __init__(self, command: str, args: list[str], code: int) -> None:
        self.command = command
        self.args_list = args
        self.code = code
        line = f"{command} {' '.join(args)}".strip()
        super().__init__(f'command "{line}" exited with code {code}')


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(command: str, args: list[str], cwd: str | Path | None = None) -> None:
    """Run *command* with inherited stdio and wait for it to exit.

    Empty-string arguments are dropped.  The child writes straight to the
    user's terminal, so nothing is captured.

    Raises:
        CommandError: If the process exits non-zero, or the binary cannot be
            found (reported as exit code 127).
    """
    formatted_args = [a for a in args if a != ""]
    try:
        process = await asyncio.create_subprocess_exec(
            command,
            *formatted_args,
            cwd=str(cwd) if cwd else None,
        )
    except FileNotFoundError as exc:
        raise CommandError(command, formatted_args, 127) from exc

    returncode = await process.wait()
    if returncode != 0:
        raise CommandError(command, formatted_args, returncode)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def create_file(path: str | Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories as needed."""
    file_path = Path(path).resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return file_path


def replace_file(path: str | Path, content: str, log: bool = False) -> Path:
    """Overwrite *path* with *content*.

    Identical to :func:`create_file` apart from the optional log line, kept
    separate so call sites read as what they intend.
    """
    file_path = create_file(path, content)
    if log:
        print_success(f"File replaced at {path}")
    return file_path


def create_folder(path: str | Path, log: bool = False) -> Path:
    """Create a directory (and parents) if it does not exist."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    if log:
        print_success(f"Folder created at {dir_path}")
    return dir_path.resolve()


def get_file_contents(path: str | Path) -> str:
    """Return the text of *path*, or ``""`` (with an error line) if it is missing."""
    file_path = Path(path)
    if not file_path.exists():
        print_error(f"File does not exist at {file_path}")
        return ""
    return file_path.read_text(encoding="utf-8")


def wrap_in_parenthesis(value: str) -> str:
    return "(" + value + ")"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]✔[/bold green] {escape(message)}")


def print_info(message: str) -> None:
    """Print a cyan informational message."""
    console.print(f"[bold cyan]ℹ[/bold cyan] {escape(message)}")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
