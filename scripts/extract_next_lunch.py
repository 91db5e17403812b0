#!/usr/bin/env python3
"""
Next-Lunch Extraction CLI

Runs the extraction pipeline over saved JSON documents (the responses a menu
page made, captured to disk) and emits the compacted webhook payload.

Each file is one document; its source identifier is the file path unless a
bundle is given. A bundle is a single JSON file holding captured responses:

    {"captured": [{"url": "https://.../getMenu?menuId=42", "data": {...}}, ...]}

Bundle URLs are what fallback probing reads menu identifiers from.

Usage:
    # Print the payload for today (in the configured timezone)
    python scripts/extract_next_lunch.py menu.json analytics.json

    # Captured bundle, fixed start date, custom config, payload written to disk
    python scripts/extract_next_lunch.py --bundle capture.json --start-date 2026-02-10 \\
        --config configs/menumine.yaml --output outs/payload.json

    # Offline: never contact the fallback endpoint
    python scripts/extract_next_lunch.py menu.json --no-fallback

    # Console logging only, no run log file
    python scripts/extract_next_lunch.py menu.json --no-log-file
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Tuple

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from menumine.config.config_resolver import load_config
from menumine.contexts.intake.fetcher import fetch_json
from menumine.contexts.orchestration import run_pipeline
from menumine.contexts.orchestration.logger import setup_pipeline_logger

load_dotenv()

app = typer.Typer(
    help="Extract the next matching menu day from captured JSON and print the payload",
    add_completion=False,
)


def load_documents(files: List[Path], bundle: Optional[Path]) -> List[Tuple[str, Any]]:
    """
    Read (source, parsed JSON) pairs from plain files and an optional bundle.

    Unreadable plain files are reported and skipped. An unreadable bundle
    ends the run with exit code 2.

    Args:
        files: Plain JSON files, one document each
        bundle: Optional capture bundle file

    Returns:
        Documents in discovery order (bundle first)

    Raises:
        typer.Exit: If the bundle cannot be read or is not valid JSON
    """
    documents = []

    if bundle:
        try:
            data = json.loads(bundle.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            typer.secho(f"ERROR: Unreadable bundle {bundle}: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(2)

        entries = data.get("captured", []) if isinstance(data, dict) else []
        for index, entry in enumerate(entries):
            if isinstance(entry, dict) and "data" in entry:
                documents.append((entry.get("url") or f"{bundle.name}#{index}", entry["data"]))

    for path in files:
        try:
            documents.append((str(path), json.loads(path.read_text(encoding="utf-8"))))
        except (OSError, ValueError) as e:
            typer.secho(f"Skipping {path}: {e}", fg=typer.colors.YELLOW, err=True)

    return documents


@app.command()
def main(
    files: Annotated[
        Optional[List[Path]],
        typer.Argument(help="Captured JSON documents", exists=True, dir_okay=False, resolve_path=True),
    ] = None,
    bundle: Annotated[
        Optional[Path],
        typer.Option("--bundle", "-b", help="Capture bundle with URLs", exists=True, dir_okay=False),
    ] = None,
    start_date: Annotated[
        Optional[str],
        typer.Option("--start-date", "-s", help="ISO start date (default: today in the configured timezone)"),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML config file", exists=True, dir_okay=False),
    ] = None,
    keyword: Annotated[
        Optional[str],
        typer.Option("--keyword", "-k", help="Keyword regex (case-insensitive), e.g. '\\bdinner\\b'"),
    ] = None,
    budget: Annotated[
        Optional[int],
        typer.Option("--budget", help="Payload byte budget"),
    ] = None,
    no_fallback: Annotated[
        bool,
        typer.Option("--no-fallback", help="Do not probe the alternate menu endpoint"),
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the payload here instead of stdout", dir_okay=False),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Directory for the run log"),
    ] = None,
    no_log_file: Annotated[
        bool,
        typer.Option("--no-log-file", help="Log to stderr only"),
    ] = False,
):
    """Run the pipeline and emit {"merge_variables": envelope}."""
    if start_date:
        try:
            datetime.strptime(start_date, "%Y-%m-%d")
        except ValueError:
            raise typer.BadParameter(f"Not an ISO date: {start_date}", param_hint="--start-date")

    overrides = {}
    if keyword:
        overrides["keyword_pattern"] = keyword
    if budget is not None:
        overrides["byte_budget"] = budget

    try:
        config = load_config(config_path, overrides=overrides)
    except ValueError as e:
        typer.secho(f"ERROR: Invalid configuration: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2)

    documents = load_documents(files or [], bundle)

    if no_log_file:
        log_dir = None
    elif log_dir is None:
        log_dir = Path("outs/logs") / f"run_{datetime.now():%Y%m%d_%H%M%S}"
    log_file = setup_pipeline_logger(
        log_dir,
        run_context={
            "Start date": start_date or "today",
            "Documents": len(documents),
            "Keyword": config.keyword_pattern,
            "Budget": config.byte_budget,
            "Fallback": "off" if no_fallback else "on",
        },
    )

    outcome = run_pipeline(
        documents,
        config,
        fetch=None if no_fallback else fetch_json,
        start_date=start_date,
    )

    body = json.dumps({"merge_variables": outcome.envelope}, ensure_ascii=False, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(body + "\n", encoding="utf-8")
        typer.echo(f"Payload written to {output}", err=True)
    else:
        typer.echo(body)

    if log_file:
        typer.echo(f"Log: {log_file}", err=True)

    if outcome.status != "ok":
        typer.secho(f"✗ {outcome.error_kind}: {outcome.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    if outcome.oversize:
        typer.secho(f"✗ {outcome.oversize}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    typer.secho(
        f"✓ {outcome.result.date} via {outcome.strategy} ({outcome.compaction.byte_size} bytes)",
        fg=typer.colors.GREEN,
        err=True,
    )


if __name__ == "__main__":
    app()
