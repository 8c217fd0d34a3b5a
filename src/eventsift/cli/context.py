"""Shared CLI state: consoles, loaded configuration and error reporting."""

from __future__ import annotations

import typer
from rich.console import Console

from eventsift.core.config import AppConfig, ConfigError

console = Console()
err_console = Console(stderr=True)


def get_app_config(ctx: typer.Context) -> AppConfig:
    """AppConfig loaded by the main callback (defaults if none)."""
    obj = ctx.find_root().obj
    if isinstance(obj, AppConfig):
        return obj
    return AppConfig()


def report_config_error(error: ConfigError) -> None:
    """Print a ConfigError with its details."""
    err_console.print(f"[red]Error:[/red] {error}")
    if error.details:
        err_console.print(f"[dim]{error.details}[/dim]")
