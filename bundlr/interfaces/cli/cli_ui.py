#!/usr/bin/env python3
"""
Rich UI components for CLI - consistent interface across all commands.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

# Color scheme constants
COLOR_ERROR = "red"
COLOR_INFO = "cyan"


class InfoPanel:
    """
    Simple panel for displaying status/info without progress tracking.
    """

    @staticmethod
    def show(title: str, content: str, border_style: str = COLOR_INFO):
        """Show a single info panel."""
        panel = Panel(content, title=f"[bold]{title}[/bold]", border_style=border_style, box=box.ROUNDED)
        console.print(panel)


def print_table(title: str, columns: Sequence[str], rows: Sequence[Sequence[str]], numeric_from: int = 1):
    """
    Print a rounded table. Columns at index >= numeric_from are right-aligned.
    """
    table = Table(title=f"[bold]{title}[/bold]", box=box.ROUNDED, header_style=f"bold {COLOR_INFO}")
    for i, column in enumerate(columns):
        table.add_column(column, justify="right" if i >= numeric_from else "left")
    for row in rows:
        table.add_row(*row)
    console.print(table)


def print_error(message: str):
    """Print an error message."""
    console.print(f"[bold {COLOR_ERROR}]✗[/bold {COLOR_ERROR}] {message}")


def print_info(message: str):
    """Print an info message."""
    console.print(f"[{COLOR_INFO}][i][/{COLOR_INFO}] {message}")
