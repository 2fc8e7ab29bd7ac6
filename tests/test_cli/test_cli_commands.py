"""End-to-end tests for the typer CLI against a temporary database."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from meeting_insights.cli import app

runner = CliRunner()

_CSV = """Meeting_Title,Duration_Minutes,Participants,Actual_Speakers,Decision_Made,Agenda_Provided,Follow_Up_Sent,Could_Be_Async,Date
Weekly Sync,30,4,3,YES,1,no,false,2025-03-12
Status Update,30,9,1,no,no,no,no,2025-03-05
Broken Row,abc,4,3,yes,yes,yes,no,2025-03-05
"""


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch, restore_root_logger) -> dict[str, Path]:
    """Config pointing at a temp DB with file logging disabled."""
    for name in ("MEETING_INSIGHTS_DB_PATH", "MEETING_INSIGHTS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    db_path = tmp_path / "db" / "meetings.db"
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        f"""
[database]
db_path = "{db_path.as_posix()}"

[data]
output_dir = "{(tmp_path / 'out').as_posix()}"

[ingestion]
random_seed = 1

[logging]
level = "WARNING"
log_file = ""
""",
        encoding="utf-8",
    )
    csv_path = tmp_path / "meetings.csv"
    csv_path.write_text(_CSV, encoding="utf-8")
    return {"config": config_path, "csv": csv_path, "db": db_path, "tmp": tmp_path}


def _invoke(cli_env, *args: str):
    return runner.invoke(app, [*args, "--config", str(cli_env["config"])])


def test_validate_config(cli_env) -> None:
    result = _invoke(cli_env, "validate-config")
    assert result.exit_code == 0
    assert "Random seed:      1" in result.output


def test_init_db(cli_env) -> None:
    result = _invoke(cli_env, "init-db")
    assert result.exit_code == 0
    assert cli_env["db"].exists()


def test_import_then_analytics_json(cli_env) -> None:
    result = _invoke(cli_env, "import-meetings", str(cli_env["csv"]))
    assert result.exit_code == 0, result.output
    assert "Created 2 meeting(s)." in result.output
    assert "Row 3: Invalid number for 'Duration_Minutes': 'abc'." in result.output

    result = _invoke(cli_env, "analytics", "--json")
    assert result.exit_code == 0
    wire = json.loads(result.output)
    assert wire["summary"]["totalMeetings"] == 2
    assert wire["summary"]["usefulMeetings"] == 1
    assert [t["week"] for t in wire["trends"]] == ["Week 10", "Week 11"]
    assert wire["recommendations"][0]["recommendationType"] == "decline"


def test_import_dry_run_writes_nothing(cli_env) -> None:
    result = _invoke(cli_env, "import-meetings", str(cli_env["csv"]), "--dry-run")
    assert result.exit_code == 0
    assert "[DRY RUN] 2 meeting(s) scored" in result.output

    result = _invoke(cli_env, "list-meetings")
    assert "no meetings imported" in result.output


def test_import_all_invalid_fails(cli_env) -> None:
    bad = cli_env["tmp"] / "bad.csv"
    bad.write_text("Meeting_Title,Participants\nA,-1\nB,x\n", encoding="utf-8")

    result = _invoke(cli_env, "import-meetings", str(bad))
    assert result.exit_code == 1


def test_import_missing_file(cli_env) -> None:
    result = _invoke(cli_env, "import-meetings", str(cli_env["tmp"] / "nope.csv"))
    assert result.exit_code == 1


def test_show_and_clear(cli_env) -> None:
    _invoke(cli_env, "import-meetings", str(cli_env["csv"]))

    result = _invoke(cli_env, "show-meeting", "1")
    assert result.exit_code == 0
    assert "Weekly Sync" in result.output
    assert "100/100 [HIGH]" in result.output

    assert _invoke(cli_env, "show-meeting", "99").exit_code == 1

    result = _invoke(cli_env, "clear-meetings", "--yes")
    assert result.exit_code == 0
    assert "Removed 2 meeting(s)." in result.output

    _invoke(cli_env, "import-meetings", str(cli_env["csv"]))
    assert "Weekly Sync" in _invoke(cli_env, "show-meeting", "1").output


def test_export(cli_env) -> None:
    _invoke(cli_env, "import-meetings", str(cli_env["csv"]))
    out_dir = cli_env["tmp"] / "exports"

    result = _invoke(cli_env, "export", "--out-dir", str(out_dir))
    assert result.exit_code == 0

    assert len(list(out_dir.glob("meeting_analytics_*.json"))) == 1
    assert len(list(out_dir.glob("meetings_*.csv"))) == 1
    assert len(list(out_dir.glob("meeting_recommendations_*.csv"))) == 1
