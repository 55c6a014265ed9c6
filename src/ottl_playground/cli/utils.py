"""
CLI utility helpers: output formatting and input loading.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def read_text(path: Path | None) -> str:
    """Read a file argument; ``None`` means empty text."""
    if path is None:
        return ""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        err_console.print(f"[bold red]Error[/bold red]: cannot read {path}: {e.strerror}")
        raise typer.Exit(code=2) from e
    except UnicodeDecodeError as e:
        err_console.print(f"[bold red]Error[/bold red]: cannot read {path}: not valid UTF-8 ({e.reason})")
        raise typer.Exit(code=2) from e


def print_table(items: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of dicts as a Rich table."""
    if not items:
        console.print("[dim]No items.[/dim]")
        return
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in items[0]:
        table.add_column(col, overflow="fold")
    for item in items:
        table.add_row(*(str(v) for v in item.values()))
    console.print(table)


__all__ = ["console", "err_console", "read_text", "print_table"]
