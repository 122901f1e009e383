"""
Centralized configuration for Day Timeline.

Deployment values come from environment variables. Day-model defaults (the
setup form's starting values, slot size, fallback habit duration) come from
config/timeline.yaml and fall back to the constants below if the file is
missing or unreadable.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from timeline import paths

logger = logging.getLogger(__name__)

# ============================================================
# Environment
# ============================================================

LOG_LEVEL: str = os.environ.get("DAY_TIMELINE_LOG_LEVEL", "INFO")
"""Root log level for API and CLI."""

LOG_JSON: str | None = os.environ.get("DAY_TIMELINE_LOG_JSON")
"""Force JSON ("1") or human ("0") log format. Unset = auto-detect from TTY."""

API_HOST: str = os.environ.get("DAY_TIMELINE_HOST", "127.0.0.1")
API_PORT: int = int(os.environ.get("DAY_TIMELINE_PORT", "8420"))

CORS_ORIGINS: str = os.environ.get("CORS_ORIGINS", "*")
"""Comma-separated list of allowed origins, or * for any."""

# ============================================================
# Day-model defaults
# ============================================================

_DEFAULT_PROFILE = {
    "sleepStart": "22:00",
    "sleepEnd": "06:00",
    "workStart": "09:00",
    "workEnd": "17:00",
    "commuteMinutes": 60,
    "morningRoutineMinutes": 30,
    "miscMinutes": 120,
}
_DEFAULT_SLOT_MINUTES = 30
_DEFAULT_HABIT_MINUTES = 15


@dataclass
class TimelineConfig:
    """Resolved day-model configuration."""

    default_profile: dict = field(default_factory=lambda: dict(_DEFAULT_PROFILE))
    slot_minutes: int = _DEFAULT_SLOT_MINUTES
    default_habit_minutes: int = _DEFAULT_HABIT_MINUTES


def _load_yaml(config_path: Path) -> dict:
    """Load YAML config, return empty dict on failure."""
    if not config_path.exists():
        logger.warning("Timeline config not found at %s, using defaults", config_path)
        return {}
    try:
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as exc:
        logger.error("Failed to load timeline config: %s", exc)
        return {}


def load_config(config_path: Path | None = None) -> TimelineConfig:
    """Read config/timeline.yaml (or *config_path*) over the built-in defaults."""
    if config_path is None:
        config_path = paths.config_path()

    raw = _load_yaml(config_path)

    profile = dict(_DEFAULT_PROFILE)
    profile.update(raw.get("default_profile") or {})

    slots = raw.get("slots") or {}
    habits = raw.get("habits") or {}

    return TimelineConfig(
        default_profile=profile,
        slot_minutes=int(slots.get("minutes", _DEFAULT_SLOT_MINUTES)),
        default_habit_minutes=int(habits.get("default_minutes", _DEFAULT_HABIT_MINUTES)),
    )


_config: TimelineConfig | None = None


def get_config() -> TimelineConfig:
    """Get the process-wide config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the file."""
    global _config
    _config = None
