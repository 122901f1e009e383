"""
Test configuration — repo root on sys.path + isolated app home.

Every test gets its own DAY_TIMELINE_HOME and DB under tmp_path, so no test
can read or write a real user's ~/.day_timeline database.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import timeline.*, api.*, cli.*
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from timeline import config as config_module  # noqa: E402
from timeline import profile_store  # noqa: E402
from timeline.engine import Profile  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the app home and DB at tmp_path and drop cached singletons."""
    monkeypatch.setenv("DAY_TIMELINE_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("DAY_TIMELINE_DB", str(tmp_path / "home" / "timeline.db"))
    profile_store.reset_store()
    config_module.reset_config()
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield tmp_path
    # CLI runs reconfigure the root logger
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    profile_store.reset_store()
    config_module.reset_config()


@pytest.fixture
def reference_doc():
    """Default setup: sleep 22:00-06:00, work 09:00-17:00, 60/30/120 buffers."""
    return {
        "sleepStart": "22:00",
        "sleepEnd": "06:00",
        "workStart": "09:00",
        "workEnd": "17:00",
        "commuteMinutes": 60,
        "morningRoutineMinutes": 30,
        "miscMinutes": 120,
        "scheduledHabits": [],
    }


@pytest.fixture
def reference_profile(reference_doc):
    return Profile.from_document(reference_doc)
