"""
Meeting Insights configuration.

Layers, lowest precedence first:
  1. ``config/default.toml``   committed defaults
  2. ``config/local.toml``     per-machine overrides next to the main file (gitignored)
  3. ``.env`` at the project root, loaded into the process environment
  4. ``MEETING_INSIGHTS_*`` environment variables (see ``ENV_OVERRIDES``)

Entry point: ``load_config(config_path=None) -> AppConfig``

Only paths, ingestion knobs and logging live here. Score thresholds and
recommendation rules are module constants under ``meeting_insights.analytics``.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ── Sections ──────────────────────────────────────────────────────────────────


class DatabaseConfig(BaseModel):
    """Where the meeting store lives and how its connection is tuned."""

    model_config = ConfigDict(frozen=True)

    db_path: str = "data/db/meetings.db"
    wal_mode: bool = True
    busy_timeout_ms: int = Field(default=5000, ge=0)


class DataConfig(BaseModel):
    """Destination directory for ``export`` output."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs"


class IngestionConfig(BaseModel):
    """CSV import settings.

    ``date_window_days`` controls how far back undated rows are spread.
    ``random_seed`` pins that spread for reproducible demos; ``None`` means
    a different spread on every import.
    """

    model_config = ConfigDict(frozen=True)

    date_window_days: int = 30
    random_seed: Optional[int] = None

    @field_validator("date_window_days")
    @classmethod
    def window_at_least_one_day(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"date_window_days must be >= 1, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Root logger level plus optional file and JSON output."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/meeting_insights.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def known_level(cls, v: str) -> str:
        name = v.strip().upper()
        if name not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'; use one of {', '.join(LOG_LEVELS)}.")
        return name


class AppConfig(BaseModel):
    """Everything a CLI command needs, as built by ``load_config()``."""

    model_config = ConfigDict(frozen=True)

    database: DatabaseConfig = DatabaseConfig()
    data: DataConfig = DataConfig()
    ingestion: IngestionConfig = IngestionConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Environment overrides ─────────────────────────────────────────────────────


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# env var → (section or None for top level, key, converter)
ENV_OVERRIDES: dict[str, tuple[Optional[str], str, Callable[[str], Any]]] = {
    "MEETING_INSIGHTS_DB_PATH": ("database", "db_path", str),
    "MEETING_INSIGHTS_LOG_LEVEL": ("logging", "level", str),
    "MEETING_INSIGHTS_RANDOM_SEED": ("ingestion", "random_seed", int),
    "MEETING_INSIGHTS_DEBUG": (None, "debug", _as_bool),
}


def _env_layer() -> dict[str, Any]:
    """Collect set, non-empty ``ENV_OVERRIDES`` variables into a config layer."""
    layer: dict[str, Any] = {}
    for var, (section, key, convert) in ENV_OVERRIDES.items():
        value = os.environ.get(var)
        if not value:
            continue
        target = layer.setdefault(section, {}) if section else layer
        target[key] = convert(value)
    return layer


# ── Loader ────────────────────────────────────────────────────────────────────


def project_root() -> Path:
    """Nearest ancestor of this package that holds ``pyproject.toml``.

    Falls back to the directory above the package when running from an
    installed copy without one.
    """
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").exists():
            return parent
    return here.parent.parent


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build the ``AppConfig`` from every layer.

    Args:
        config_path: TOML file to use instead of ``<root>/config/default.toml``.
            A ``local.toml`` beside it is still applied.

    Returns:
        Validated, frozen ``AppConfig``.

    Raises:
        FileNotFoundError: If the TOML file is missing.
        pydantic.ValidationError: If a merged value is invalid.
    """
    root = project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    main = Path(config_path) if config_path else root / "config" / "default.toml"
    if not main.exists():
        raise FileNotFoundError(
            f"Config file not found: {main}\n"
            "Create config/default.toml or pass --config."
        )

    layers = [_read_toml(main)]
    local = main.parent / "local.toml"
    if local.exists():
        layers.append(_read_toml(local))
    layers.append(_env_layer())

    merged: dict[str, Any] = {}
    for layer in layers:
        merged = _merge(merged, layer)
    return _to_app_config(merged)


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def _merge(base: dict[str, Any], top: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated by ``top``; nested tables merge key by key."""
    out = dict(base)
    for key, value in top.items():
        current = out.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            out[key] = _merge(current, value)
        else:
            out[key] = value
    return out


def _to_app_config(merged: dict[str, Any]) -> AppConfig:
    """Validate the merged tables.

    ``debug`` may be given at top level (env) or under ``[project]`` (TOML);
    the top-level value wins.
    """
    data = dict(merged)
    project = data.pop("project", {})
    if "debug" not in data and "debug" in project:
        data["debug"] = project["debug"]
    return AppConfig.model_validate(data)
