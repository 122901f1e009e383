from __future__ import annotations

import os
from pathlib import Path

APP_ENV_HOME = "DAY_TIMELINE_HOME"
APP_ENV_DB = "DAY_TIMELINE_DB"


def project_root() -> Path:
    """
    Repository/project root directory.
    Contains timeline/, api/, cli/, config/.
    """
    return Path(__file__).parent.parent.resolve()


def app_home() -> Path:
    """
    User-writable home for Day Timeline.
    Override with DAY_TIMELINE_HOME.
    """
    if os.environ.get(APP_ENV_HOME):
        return Path(os.environ[APP_ENV_HOME]).expanduser().resolve()
    return (Path.home() / ".day_timeline").resolve()


def data_dir() -> Path:
    d = app_home() / "data"
    d.mkdir(parents=True, exist_ok=True)
    return d


def db_path() -> Path:
    """
    Canonical DB path for profile documents.

    Resolution order:
    1. DAY_TIMELINE_DB env var (explicit override)
    2. ~/.day_timeline/data/day_timeline.db (default)
    """
    if os.environ.get(APP_ENV_DB):
        return Path(os.environ[APP_ENV_DB]).expanduser().resolve()
    return data_dir() / "day_timeline.db"


def config_path() -> Path:
    """Timeline YAML config shipped with the project."""
    return project_root() / "config" / "timeline.yaml"
