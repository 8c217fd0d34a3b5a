"""
eventsift CLI - Main entry point.

Runs the extraction, processing, date parsing and venue matching pipeline
over local JSON/YAML files. No network I/O.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.traceback import install as install_rich_traceback

from eventsift import __app_name__, __version__
from eventsift.core.config import ConfigError, load_app_config
from eventsift.core.logging import setup_logging

from .context import console, report_config_error

# Load environment variables from .env (if present)
load_dotenv()

# Install rich traceback for better error display
install_rich_traceback(show_locals=False, width=120)

# Create main app
app = typer.Typer(
    name=__app_name__,
    help="Extract and normalize events from flyer and scraped data",
    rich_markup_mode="rich",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold cyan]{__app_name__}[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to app.yaml (default: configs/app.yaml)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Write JSON logs to this file",
    ),
) -> None:
    """eventsift - Event extraction and normalization."""
    if config is not None and not config.exists():
        report_config_error(ConfigError(f"Configuration file not found: {config}", path=config))
        raise typer.Exit(1)

    try:
        app_config = load_app_config(config)
    except ConfigError as e:
        report_config_error(e)
        raise typer.Exit(1)

    setup_logging(
        level=log_level or app_config.logging.level,
        log_file=log_file or app_config.logging.file,
        json_format=app_config.logging.json_format,
        rich_console=app_config.logging.rich_console,
    )

    ctx.obj = app_config


# =============================================================================
# Register commands
# =============================================================================

from .commands import events, tools  # noqa: E402

app.command("extract")(events.extract)
app.command("process")(events.process)
app.command("parse-date")(tools.parse_date)
app.command("match-venue")(tools.match_venue)


# =============================================================================
# Entry Point
# =============================================================================


def run() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run()
