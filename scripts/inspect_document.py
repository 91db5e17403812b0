#!/usr/bin/env python3
"""
Inspect how the extractor sees one captured JSON document.

Shows the candidate score, the day-map days (if any), the keyword groups found
in the first days on or after the start date, and the generic day arrays.
Useful when an upstream shape drifts and extraction starts failing.

Usage:
    python scripts/inspect_document.py menu.json
    python scripts/inspect_document.py menu.json --start-date 2026-02-10 --days 3
"""

import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from menumine.config.config_resolver import load_config
from menumine.contexts.extraction.day_index import index_date_map, iter_on_or_after
from menumine.contexts.extraction.generic import extract_from_tree, find_candidate_day_arrays
from menumine.contexts.extraction.group_filter import find_groups
from menumine.contexts.extraction.item_extractor import extract_pairs
from menumine.contexts.intake.candidates import make_candidate
from menumine.utils.json_tree import TreeDepthExceeded
from menumine.utils.timestamp import today_iso

load_dotenv()

app = typer.Typer(help="Inspect extraction on one JSON document.")


@app.command()
def main(
    document: Path = typer.Argument(..., help="JSON document", exists=True, dir_okay=False),
    start_date: Optional[str] = typer.Option(None, "--start-date", "-s", help="ISO start date"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    days: int = typer.Option(2, "--days", help="Number of days to show groups for"),
):
    """Display candidate score, days, groups and the extraction result."""
    try:
        raw = json.loads(document.read_text(encoding="utf-8"))
    except ValueError as e:
        typer.echo(f"ERROR: Not valid JSON: {document} ({e})", err=True)
        raise typer.Exit(1)

    config = load_config(config_path)
    start_date = start_date or today_iso(config.timezone)

    typer.echo(f"Loading {document.name}")
    typer.echo(f"Start date: {start_date}")

    try:
        candidate = make_candidate(str(document), raw, start_date, config)
    except TreeDepthExceeded as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    # Candidate
    typer.echo("\n=== Candidate ===")
    typer.echo(f"  bytes: {candidate.byte_length}")
    typer.echo(f"  keyword match: {candidate.has_keyword_match}")
    typer.echo(f"  direct result: {candidate.has_direct_result}")
    typer.echo(f"  score: {candidate.score}")

    # Day-map
    index = index_date_map(raw)
    typer.echo(f"\n=== Day-map days ({len(index)}) ===")
    for record in index[:10]:
        marker = "*" if record.date >= start_date else " "
        typer.echo(f"  {marker} {record.date}")
    if len(index) > 10:
        typer.echo(f"    ... {len(index) - 10} more")

    # Groups per upcoming day
    for record in list(iter_on_or_after(index, start_date))[:days]:
        groups = find_groups(record.value, config.keyword, max_depth=config.max_depth)
        typer.echo(f"\n=== Groups on {record.date} ({len(groups)}) ===")
        for position, group in enumerate(groups):
            pairs = extract_pairs(group, config)
            status = "ok" if len(pairs) >= config.min_group_pairs else "below minimum"
            typer.echo(f"  [{position}] {type(group).__name__}: {len(pairs)} pairs ({status})")
            for pair in pairs[:5]:
                typer.echo(f"      {pair.name} @ {pair.section or '-'}")

    # Generic
    day_arrays = find_candidate_day_arrays(raw, config)
    typer.echo(f"\n=== Generic day arrays ({len(day_arrays)}) ===")
    for candidate_array in day_arrays[: config.max_day_arrays]:
        typer.echo(
            f"  score {candidate_array.score}: {len(candidate_array.days)} elements, "
            f"{len(candidate_array.unique_dates)} dates, {candidate_array.keyword_hits} keyword hits"
        )

    # Result
    result = candidate.direct_result or extract_from_tree(raw, start_date, config)
    typer.echo("\n=== Result ===")
    if result is None:
        typer.secho("  No matching day found", fg=typer.colors.YELLOW)
        raise typer.Exit(1)

    typer.echo(f"  date: {result.date}")
    for section in result.sections:
        typer.echo(f"  {section.name}: {', '.join(section.items)}")
    if result.fallback_items:
        typer.echo(f"  (unlabeled): {', '.join(result.fallback_items)}")

    typer.secho(f"\n✓ {result.item_count()} items", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
