"""Terminal UI utilities using Rich library for formatted output.

This module provides a unified interface for terminal output, integrating
with the theme system for consistent styling.
"""

from typing import Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from utils.theme import Theme, set_theme

# Global console instance; starts on the default theme until apply_theme() runs
console = Console(theme=Theme.get_rich_theme())


def _get_colors():
    """Get current theme colors."""
    return Theme.get_colors()


def apply_theme(name: str) -> None:
    """Switch to the named theme once the configuration has been validated.

    Args:
        name: Theme name ('dark' or 'light')
    """
    set_theme(name)
    console.push_theme(Theme.get_rich_theme())


def print_table(
    title: str, columns: Sequence[str], rows: Sequence[Sequence[str]]
) -> None:
    """Print rows as a table with a bold first column.

    Args:
        title: Table title
        columns: Column headers
        rows: Row values, one sequence per row
    """
    colors = _get_colors()
    table = Table(
        title=f"[bold {colors.primary}]{title}[/bold {colors.primary}]",
        box=box.SIMPLE,
        header_style=f"bold {colors.text_secondary}",
    )
    for i, column in enumerate(columns):
        style = f"bold {colors.text_primary}" if i == 0 else colors.text_secondary
        table.add_column(column, style=style)
    for row in rows:
        table.add_row(*(escape(cell) for cell in row))
    console.print(table)


def print_error(message: str, title: str = "Error") -> None:
    """Print an error message.

    Args:
        message: Error message
        title: Error title (default: "Error")
    """
    colors = _get_colors()
    console.print(
        Panel(
            f"[{colors.error}]{escape(message)}[/{colors.error}]",
            title=f"[bold {colors.error}]{title}[/bold {colors.error}]",
            border_style=colors.error,
            box=box.ROUNDED,
        )
    )


def print_issue(severity: str, location: str, message: str) -> None:
    colors = _get_colors()
    color = colors.error if severity == "error" else colors.warning
    label = severity.upper()
    console.print(f"  [bold {color}]{label}[/bold {color}] {escape(location)} - {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message.

    Args:
        message: Warning message
    """
    colors = _get_colors()
    console.print(f"[{colors.warning}]{escape(message)}[/{colors.warning}]")


def print_success(message: str) -> None:
    """Print a success message.

    Args:
        message: Success message
    """
    colors = _get_colors()
    console.print(f"[{colors.success}]✓ {escape(message)}[/{colors.success}]")


def print_info(message: str) -> None:
    """Print an info message.

    Args:
        message: Info message
    """
    colors = _get_colors()
    console.print(f"[{colors.primary}]ℹ {escape(message)}[/{colors.primary}]")


def print_log_location(log_file: str) -> None:
    colors = _get_colors()
    console.print(f"[{colors.text_muted}]Log file: {escape(log_file)}[/{colors.text_muted}]")
