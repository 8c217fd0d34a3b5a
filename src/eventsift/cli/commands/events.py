"""
Event commands - extract events from scraped data and process LLM output.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table

from eventsift.core.config import ConfigError, load_raw_fields, load_venues
from eventsift.core.extract import EventTransformer, parse_llm_response
from eventsift.core.orchestrator import (
    assess_extraction,
    create_processing_summary,
    create_validation_summary,
    process_extracted_event_data,
)

from ..context import console, err_console, get_app_config, report_config_error


def extract(
    ctx: typer.Context,
    raw_file: Path = typer.Argument(..., help="JSON file holding scraped key/value data"),
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        help="Source URL the data was scraped from",
    ),
    format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format (table, json)",
    ),
) -> None:
    """Extract events from a scraped key/value JSON file.

    Examples:
        eventsift extract scraped.json --url https://example.org/whats-on
        eventsift extract scraped.json --format json
    """
    config = get_app_config(ctx)

    try:
        data = load_raw_fields(raw_file)
    except ConfigError as e:
        report_config_error(e)
        raise typer.Exit(1)

    transformer = EventTransformer(config.extraction)
    result = transformer.extract_events(data, url)

    if format == "json":
        payload = {
            "events": [event.to_dict() for event in result.events],
            "errors": result.errors,
            "warnings": result.warnings,
        }
        console.print_json(json.dumps(payload, default=str))
        return

    if result.events:
        table = Table(title=f"Events ({len(result.events)} found)", show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Title", max_width=40)
        table.add_column("Date", justify="right")
        table.add_column("Time", justify="center")
        table.add_column("Location", max_width=30)
        table.add_column("Categories")

        for event in result.events:
            if event.is_all_day:
                time_text = "all day"
            else:
                time_text = "-".join(t for t in (event.start_time, event.end_time) if t)
            table.add_row(
                event.id,
                event.title,
                event.date,
                time_text,
                event.location or "",
                ", ".join(event.categories),
            )

        console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")
    for error in result.errors:
        err_console.print(f"[red]Error:[/red] {error}")


def process(
    ctx: typer.Context,
    raw_file: Path = typer.Argument(..., help="JSON file holding LLM extraction output"),
    venues: Optional[Path] = typer.Option(
        None,
        "--venues",
        help="Venue directory (YAML or JSON) to match locations against",
    ),
    threshold: Optional[int] = typer.Option(
        None,
        "--threshold",
        "-t",
        min=0,
        max=100,
        help="Minimum venue match score",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Treat missing description/organizer as missing required fields",
    ),
    no_normalize: bool = typer.Option(
        False,
        "--no-normalize",
        help="Skip text normalization",
    ),
    format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format (table, json)",
    ),
) -> None:
    """Normalize, parse and venue-match LLM-extracted event data.

    The file may hold the full LLM response ({"eventData": ..., "confidence": ...})
    or just the event object.

    Examples:
        eventsift process flyer.json --venues configs/venues.yaml
        eventsift process flyer.json --strict --format json
    """
    config = get_app_config(ctx)

    try:
        data = load_raw_fields(raw_file)
        venue_file = venues or config.venues_file
        known_venues = load_venues(venue_file) if venue_file else []
    except ConfigError as e:
        report_config_error(e)
        raise typer.Exit(1)

    extraction = parse_llm_response(data)
    if not extraction.success or extraction.event_data is None:
        err_console.print(f"[red]Error:[/red] {extraction.error or 'No event data found'}")
        raise typer.Exit(1)

    updates: dict[str, object] = {}
    if threshold is not None:
        updates["venue_match_threshold"] = threshold
    if strict:
        updates["strict_validation"] = True
    if no_normalize:
        updates["normalize_text"] = False
    options = config.processing.model_copy(update=updates)

    processed = process_extracted_event_data(extraction.event_data, known_venues, options)
    quality = assess_extraction(extraction)

    if format == "json":
        payload = processed.to_dict()
        payload["summary"] = create_processing_summary(processed)
        payload["quality"] = quality.quality.value
        console.print_json(json.dumps(payload, default=str))
        return

    table = Table(title="Processed Event", show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan")
    table.add_column("Value", max_width=60)

    rows = [
        ("Title", processed.title),
        ("Date", processed.date or ""),
        ("Start", processed.start_time or ""),
        ("End", processed.end_time or ""),
        ("All day", "yes" if processed.is_all_day else "no"),
        ("Location", processed.location),
        ("Venue", f"{processed.matched_venue.name} ({processed.venue_match_score})" if processed.matched_venue else ""),
        ("Organizer", processed.organizer),
        ("Categories", ", ".join(processed.categories)),
        ("Tags", ", ".join(processed.tags)),
    ]
    for name, value in rows:
        table.add_row(name, value)

    console.print(table)
    console.print()
    console.print(create_processing_summary(processed))
    console.print(f"[dim]{create_validation_summary(quality)}[/dim]")

    validation = processed.validation
    style = "green" if validation.is_valid else "red"
    lines = [f"[{style}]Valid: {validation.is_valid}[/{style}]"]
    if validation.required_fields_missing:
        lines.append(f"Missing: {', '.join(validation.required_fields_missing)}")
    lines.extend(f"[red]Error:[/red] {error}" for error in validation.errors)
    lines.extend(f"[yellow]Warning:[/yellow] {warning}" for warning in validation.warnings)

    console.print(Panel.fit("\n".join(lines), title="[bold]Validation[/bold]", border_style=style))
