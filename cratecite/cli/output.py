"""CLI output utilities.

Status messages go to standard error so that ``--filename STDOUT``
leaves standard output holding nothing but BibTeX.
"""

from __future__ import annotations

from rich.console import Console

# Global console instance
console = Console(stderr=True)


def create_console(no_color: bool = False, width: int | None = None) -> Console:
    """Create the Rich status console with appropriate settings."""
    return Console(
        stderr=True,
        no_color=no_color,
        width=width or 120,
        highlight=not no_color,
        color_system=None if no_color else "auto",
    )


def print_success(message: str, out: Console | None = None) -> None:
    """Print success message."""
    (out or console).print(f"✅ {message}", style="green", markup=False, soft_wrap=True)


def print_error(message: str, out: Console | None = None) -> None:
    """Print error message."""
    (out or console).print(f"Error: {message}", style="red", markup=False, soft_wrap=True)


def print_warning(message: str, out: Console | None = None) -> None:
    """Print warning message."""
    (out or console).print(f"⚠️  {message}", style="yellow", markup=False, soft_wrap=True)


def print_info(message: str, out: Console | None = None) -> None:
    """Print info message."""
    (out or console).print(f"ℹ️  {message}", style="cyan", markup=False, soft_wrap=True)
