"""Shared utility functions for slicegen.

Provides the idempotent file-system primitives the scaffolder writes through,
plus Rich-based console helpers used by the CLI.  Library code never prints;
only :mod:`slicegen.cli` talks to the user.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The ``Path`` object for the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def write_if_absent(path: str | Path, content: str, force: bool = False) -> bool:
    """Write *content* to *path* unless something already exists there.

    An existing entry is left untouched and the call returns ``False``
    without raising or warning.  With *force* the file is always written.

    Args:
        path: Destination file.  Its parent directory must already exist.
        content: Text to write (UTF-8).
        force: Overwrite an existing file.

    Returns:
        ``True`` if the file was written, ``False`` if it was skipped.
    """
    file_path = Path(path)
    if file_path.exists() and not force:
        return False
    file_path.write_text(content, encoding="utf-8")
    return True


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
