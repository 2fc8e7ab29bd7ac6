"""
Meeting Insights: CLI entry point.

Every command starts with ``_startup()`` (load ``AppConfig``, then set up
logging) and opens the store through ``open_meeting_db()``. Failures print an
``[ERROR]`` line to stderr and exit with code 1.

Install and run::

    pip install -e .
    meeting-insights --help
    meeting-insights init-db
    meeting-insights import-meetings meetings.csv --clear
    meeting-insights analytics
    meeting-insights export --out-dir data/outputs
"""

from __future__ import annotations

import json
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import NoReturn, Optional

import typer

app = typer.Typer(
    name="meeting-insights",
    help="Meeting Insights: score meeting CSVs and report on how useful they were.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _fail(message: str) -> NoReturn:
    typer.echo(f"[ERROR] {message}", err=True)
    raise typer.Exit(code=1)


def _startup(config_path: Optional[str], with_logging: bool = True):
    """Return the loaded ``AppConfig``; exit 1 if it is missing or invalid."""
    from meeting_insights.config import load_config
    from meeting_insights.utils.logging import configure_logging

    try:
        config = load_config(Path(config_path) if config_path else None)
    except FileNotFoundError as exc:
        _fail(str(exc))
    except ValueError as exc:
        _fail(f"Config validation failed: {exc}")

    if with_logging:
        configure_logging(config.logging)
    return config


_CONFIG_OPTION = typer.Option(None, "--config", help="Path to TOML config file.")
_DB_PATH_OPTION = typer.Option(None, "--db-path", help="Override DB path from config.")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("init-db")
def init_db(
    db_path: Optional[str] = _DB_PATH_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Initialize the SQLite database and apply the schema.

    Safe to run repeatedly; every statement uses IF NOT EXISTS.
    """
    from meeting_insights.db.connection import open_meeting_db
    from meeting_insights.db.schema import ALL_TABLE_NAMES, get_existing_tables

    config = _startup(config_path)

    target_path = db_path or config.database.db_path
    typer.echo(f"Initializing database at: {target_path}")

    with open_meeting_db(config.database, target_path) as conn:
        tables = get_existing_tables(conn)

    missing = sorted(set(ALL_TABLE_NAMES) - set(tables))
    if missing:
        _fail(f"Tables missing after schema apply: {missing}")

    typer.echo(f"  Tables: {len(ALL_TABLE_NAMES)} created/verified.")
    typer.echo("[OK] Database ready.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _startup(config_path, with_logging=False)

    seed = config.ingestion.random_seed
    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Database path:    {config.database.db_path}")
    typer.echo(f"  Output dir:       {config.data.output_dir}")
    typer.echo(f"  Date window:      {config.ingestion.date_window_days} day(s)")
    typer.echo(f"  Random seed:      {seed if seed is not None else '(unseeded)'}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))


@app.command("import-meetings")
def import_meetings(
    csv_file: str = typer.Argument(..., help="Path to the meetings CSV file."),
    clear: bool = typer.Option(
        False,
        "--clear",
        help="Delete all existing meetings before importing (ids restart at 1).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Validate and score rows in memory; do not write to the database.",
    ),
    db_path: Optional[str] = _DB_PATH_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Import meetings from a CSV file, scoring each row.

    \b
    Expected header (case-sensitive, any order):
      Meeting_Title, Duration_Minutes, Participants, Actual_Speakers,
      Decision_Made, Agenda_Provided, Follow_Up_Sent, Could_Be_Async
    An optional ``Date`` column (ISO-8601) pins a row's date; rows without
    one get a random date in the configured window.

    Invalid rows are reported and skipped. The import fails only when no row
    is valid, and in that case nothing is cleared.
    """
    from meeting_insights.db.connection import open_meeting_db
    from meeting_insights.db.memory_store import InMemoryMeetingStore
    from meeting_insights.db.repositories.meeting_repo import MeetingRepository
    from meeting_insights.ingestion.meeting_csv import read_meeting_csv
    from meeting_insights.pipeline.importer import BatchRejectedError, import_batch

    config = _startup(config_path)

    csv_path = Path(csv_file)
    if not csv_path.exists():
        _fail(f"CSV file not found: {csv_path}")

    typer.echo(f"Loading meetings from: {csv_path}")
    try:
        rows = read_meeting_csv(csv_path)
    except (OSError, ValueError) as exc:
        _fail(f"CSV parse failed: {exc}")

    rng = random.Random(config.ingestion.random_seed)

    def _run(store):
        return import_batch(
            store,
            rows,
            clear_existing=clear,
            rng=rng,
            date_window_days=config.ingestion.date_window_days,
        )

    try:
        if dry_run:
            result = _run(InMemoryMeetingStore())
        else:
            with open_meeting_db(config.database, db_path) as conn:
                result = _run(MeetingRepository(conn))
    except BatchRejectedError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        for warning in exc.warnings[:10]:
            typer.echo(f"  {warning}", err=True)
        if len(exc.warnings) > 10:
            typer.echo(f"  ... and {len(exc.warnings) - 10} more.", err=True)
        raise typer.Exit(code=1)

    if result.warnings:
        typer.echo(f"  Skipped {len(result.warnings)} invalid row(s):")
        for warning in result.warnings:
            typer.echo(f"    {warning}")

    if dry_run:
        typer.echo(f"[DRY RUN] {result.created_count} meeting(s) scored; none written.")
        for m in result.meetings:
            typer.echo(f"  {m.title or '(untitled)'} | score {m.usefulness_score}")
        return

    typer.echo(f"  Created {result.created_count} meeting(s).")
    typer.echo("[OK] Meetings imported.")


@app.command("analytics")
def analytics(
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the analytics view as camelCase JSON instead of text.",
    ),
    db_path: Optional[str] = _DB_PATH_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Show summary, practice metrics, weekly trend and recommendations."""
    from meeting_insights.db.connection import open_meeting_db
    from meeting_insights.db.repositories.meeting_repo import MeetingRepository
    from meeting_insights.pipeline.analytics import get_analytics
    from meeting_insights.reporting.export import analytics_to_dict
    from meeting_insights.reporting.formatters import (
        format_metrics,
        format_recommendations,
        format_summary,
        format_trends,
    )

    config = _startup(config_path)

    with open_meeting_db(config.database, db_path) as conn:
        view = get_analytics(MeetingRepository(conn))

    if as_json:
        typer.echo(json.dumps(analytics_to_dict(view), indent=2))
        return

    typer.echo(format_summary(view.summary))
    if view.summary.total_meetings == 0:
        return
    typer.echo(format_metrics(view.metrics))
    typer.echo(format_trends(view.trends))
    typer.echo(format_recommendations(view.recommendations))


@app.command("list-meetings")
def list_meetings(
    top_n: int = typer.Option(50, "--top-n", help="Maximum rows to show."),
    db_path: Optional[str] = _DB_PATH_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """List stored meetings in id order."""
    from meeting_insights.db.connection import open_meeting_db
    from meeting_insights.db.repositories.meeting_repo import MeetingRepository
    from meeting_insights.reporting.formatters import format_meeting_table

    config = _startup(config_path)

    with open_meeting_db(config.database, db_path) as conn:
        meetings = MeetingRepository(conn).get_all()

    typer.echo(format_meeting_table(meetings, top_n=top_n))


@app.command("show-meeting")
def show_meeting(
    meeting_id: int = typer.Argument(..., help="Meeting id."),
    db_path: Optional[str] = _DB_PATH_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Show every field of one meeting. Exits 1 if the id does not exist."""
    from meeting_insights.db.connection import open_meeting_db
    from meeting_insights.db.repositories.meeting_repo import MeetingRepository
    from meeting_insights.pipeline.analytics import get_meeting
    from meeting_insights.reporting.formatters import format_meeting_detail

    config = _startup(config_path)

    with open_meeting_db(config.database, db_path) as conn:
        meeting = get_meeting(MeetingRepository(conn), meeting_id)

    if meeting is None:
        _fail(f"Meeting not found: {meeting_id}")

    typer.echo(format_meeting_detail(meeting))


@app.command("clear-meetings")
def clear_meetings(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    db_path: Optional[str] = _DB_PATH_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Delete every stored meeting and restart ids at 1."""
    from meeting_insights.db.connection import open_meeting_db
    from meeting_insights.db.repositories.meeting_repo import MeetingRepository

    config = _startup(config_path)

    if not yes:
        typer.confirm("Delete all stored meetings?", abort=True)

    with open_meeting_db(config.database, db_path) as conn:
        repo = MeetingRepository(conn)
        removed = repo.count()
        repo.clear()

    typer.echo(f"[OK] Removed {removed} meeting(s).")


@app.command("export")
def export(
    out_dir: Optional[str] = typer.Option(
        None,
        "--out-dir",
        help="Directory for exported files. Defaults to config.data.output_dir.",
    ),
    db_path: Optional[str] = _DB_PATH_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Export the analytics view to JSON plus flat CSVs.

    \b
    Writes (timestamped):
      meeting_analytics_<ts>.json
      meetings_<ts>.csv
      meeting_recommendations_<ts>.csv
    """
    from meeting_insights.db.connection import open_meeting_db
    from meeting_insights.db.repositories.meeting_repo import MeetingRepository
    from meeting_insights.pipeline.analytics import get_analytics
    from meeting_insights.reporting.export import (
        MEETING_EXPORT_COLUMNS,
        RECOMMENDATION_EXPORT_COLUMNS,
        analytics_to_dict,
        export_to_csv,
        export_to_json,
        flatten_meetings_for_export,
        flatten_recommendations_for_export,
    )

    config = _startup(config_path)

    with open_meeting_db(config.database, db_path) as conn:
        view = get_analytics(MeetingRepository(conn))

    target = Path(out_dir or config.data.output_dir)
    stamp = datetime.now(tz=timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    written = [
        export_to_json(analytics_to_dict(view), target / f"meeting_analytics_{stamp}.json"),
        export_to_csv(
            flatten_meetings_for_export(view.records),
            target / f"meetings_{stamp}.csv",
            fieldnames=MEETING_EXPORT_COLUMNS,
        ),
        export_to_csv(
            flatten_recommendations_for_export(view.recommendations),
            target / f"meeting_recommendations_{stamp}.csv",
            fieldnames=RECOMMENDATION_EXPORT_COLUMNS,
        ),
    ]

    for path in written:
        typer.echo(f"  Wrote {path}")
    typer.echo(f"[OK] Exported {view.summary.total_meetings} meeting(s).")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
