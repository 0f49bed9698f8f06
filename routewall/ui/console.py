"""Shared Rich Console for warnings and errors.

Command results go to stdout via ``click.echo``; everything else goes to
stderr via ``err_console``.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

ROUTEWALL_THEME = Theme(
    {
        "info": "cyan",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "hint": "yellow",
        "muted": "dim",
    }
)

err_console = Console(stderr=True, theme=ROUTEWALL_THEME)


def _print(markup: str) -> None:
    # Messages carry user data (paths, "[id:...]" markers); never wrap or highlight them.
    err_console.print(markup, highlight=False, soft_wrap=True)


def print_error(message: str, *, hint: str | None = None) -> None:
    _print(f"[error]Error:[/error] {escape(message)}")
    if hint:
        _print(f"[hint]{escape(hint)}[/hint]")


def print_warning(message: str) -> None:
    _print(f"[warning]Warning:[/warning] {escape(message)}")


def print_success(message: str) -> None:
    _print(f"[success]{escape(message)}[/success]")
