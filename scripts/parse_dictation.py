#!/usr/bin/env python3
"""
Try the dictation parser on a single utterance.

Usage:
    python scripts/parse_dictation.py "Call John tomorrow for the sales project" --project Sales
    python scripts/parse_dictation.py "Submit report by Friday" --reference 2026-02-22T10:00
    python scripts/parse_dictation.py "add to marketing project" --db data/projects.db --user u1
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv

from herald.contexts.intake.adapter import IntakeAdapter
from herald.contexts.intake.logger import setup_intake_logger
from herald.contexts.intake.project_store import SqliteProjectStore
from herald.contexts.parsing.data_structures import ProjectCandidate
from herald.contexts.parsing.dictation_parser import DictationParser
from herald.contexts.parsing.logger import setup_parsing_logger
from herald.contexts.parsing.settings import load_parser_settings

load_dotenv()
LOGS_PATH = Path(os.getenv("HERALD_LOGS_PATH", "outs/logs"))

app = typer.Typer(help="Parse a task utterance into title, date and project.")


def _format_instant(value: Optional[datetime]) -> str:
    return value.isoformat() if value else "-"


@app.command()
def main(
    text: str = typer.Argument(..., help="Utterance to parse"),
    project: List[str] = typer.Option([], "--project", "-p", help="Candidate project name (repeatable)"),
    db: Optional[Path] = typer.Option(None, "--db", help="SQLite project database"),
    user: Optional[str] = typer.Option(None, "--user", help="Owner of candidate projects (with --db)"),
    reference: Optional[str] = typer.Option(
        None, "--reference", "-r", help="Reference instant (ISO 8601, default: now)"
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Parser settings YAML"),
    as_json: bool = typer.Option(False, "--json", help="Print machine-readable JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Write a session log under HERALD_LOGS_PATH"),
):
    """Parse TEXT and display the extracted fields."""
    if db and not user:
        typer.echo("ERROR: --db requires --user", err=True)
        raise typer.Exit(1)

    try:
        reference_instant = datetime.fromisoformat(reference) if reference else None
    except ValueError:
        typer.echo(f"ERROR: Invalid reference instant: {reference}", err=True)
        raise typer.Exit(1)

    settings = load_parser_settings(config)

    if verbose:
        log_dir = LOGS_PATH / f"parse_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        if db:
            log_file = setup_intake_logger(log_dir, store_description=str(db))
        else:
            log_file = setup_parsing_logger(log_dir)
        typer.echo(f"Logging to {log_file}", err=True)

    if db:
        store = SqliteProjectStore(db)
        draft = IntakeAdapter(store, settings=settings).parse_task_input(
            text, user, reference_instant=reference_instant
        )
        result = {
            "name": draft.name,
            "scheduled_start": _format_instant(draft.scheduled_start),
            "due_date": _format_instant(draft.due_date),
            "project_id": draft.project_id,
            "date_phrase": draft.parsing.date_phrase,
            "project_phrase": draft.parsing.project_phrase,
        }
    else:
        candidates = [ProjectCandidate(id=f"p{i}", name=name) for i, name in enumerate(project, 1)]
        intake = DictationParser(settings).parse(text, candidates, reference_instant)
        result = {
            "title": intake.title,
            "scheduled_at": _format_instant(intake.scheduled_at),
            "due_at": _format_instant(intake.due_at),
            "project": intake.matched_project.name if intake.matched_project else None,
            "date_phrase": intake.trace.date_phrase,
            "project_phrase": intake.trace.project_phrase,
        }

    if as_json:
        typer.echo(json.dumps(result, indent=2))
        return

    typer.echo(f"Input: {text.strip()}")
    typer.echo("\n=== Parsed ===")
    for key, value in result.items():
        typer.echo(f"  {key}: {value if value is not None else '-'}")


if __name__ == "__main__":
    app()
