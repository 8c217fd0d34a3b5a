"""
Tool commands - try the date parser and venue matcher on single inputs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from eventsift.core.config import ConfigError, load_venues
from eventsift.core.match import find_venue_candidates
from eventsift.core.normalize import parse_natural_date_time

from ..context import console, get_app_config, report_config_error


def parse_date(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Natural-language date/time text"),
    no_fallback: bool = typer.Option(
        False,
        "--no-fallback",
        help="Disable the dateparser fallback",
    ),
    format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format (table, json)",
    ),
) -> None:
    """Parse a date/time string.

    Examples:
        eventsift parse-date "SUNDAY 20TH JULY 2025 - 3PM"
    """
    config = get_app_config(ctx)
    fallback = config.extraction.date_fallback and not no_fallback

    parsed = parse_natural_date_time(text, fallback=fallback)

    if format == "json":
        console.print_json(json.dumps(parsed.to_dict()))
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date")
    table.add_column("Start", justify="center")
    table.add_column("End", justify="center")
    table.add_column("All day", justify="center")
    table.add_row(
        parsed.date or "-",
        parsed.start_time or "-",
        parsed.end_time or "-",
        "yes" if parsed.is_all_day else "no",
    )
    console.print(table)


def match_venue(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Location text to match"),
    venues: Optional[Path] = typer.Option(
        None,
        "--venues",
        help="Venue directory (YAML or JSON); defaults to venues_file in app.yaml",
    ),
    threshold: Optional[int] = typer.Option(
        None,
        "--threshold",
        "-t",
        min=0,
        max=100,
        help="Minimum match score",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        min=1,
        help="Maximum candidates to show",
    ),
) -> None:
    """Match a location string against the venue directory.

    Examples:
        eventsift match-venue "Globe Theater" --venues configs/venues.yaml
    """
    config = get_app_config(ctx)

    venue_file = venues or config.venues_file
    if venue_file is None:
        console.print("[red]No venue file given.[/red] Use --venues or set venues_file in app.yaml")
        raise typer.Exit(1)

    try:
        known_venues = load_venues(venue_file)
    except ConfigError as e:
        report_config_error(e)
        raise typer.Exit(1)

    matching = config.venue_matching
    candidates = find_venue_candidates(
        text,
        known_venues,
        threshold=matching.threshold if threshold is None else threshold,
        limit=limit or matching.candidate_limit,
    )

    if not candidates:
        console.print(f"[dim]No venue matched {text!r}.[/dim]")
        return

    table = Table(title=f"Venue matches for {text!r}", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Match", justify="center")
    table.add_column("Field", justify="center")

    for candidate in candidates:
        table.add_row(
            candidate.venue.id,
            candidate.venue.name,
            str(candidate.score),
            candidate.match_type.value,
            candidate.matched_field.value,
        )

    console.print(table)
