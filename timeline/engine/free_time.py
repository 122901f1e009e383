"""
Free Time Calculator - minutes of the day left after fixed obligations.

Commute is counted once in full here, while the work block splits it around
work for display. Both add exactly commute_minutes, so the two views agree.
Placements are not counted: free time describes the day model, not how much
of it has been filled.
"""

from timeline.engine.models import Profile
from timeline.engine.time_codec import MINUTES_PER_DAY
from timeline.errors import NegativeDuration


def sleep_duration(profile: Profile) -> int:
    return (profile.sleep_end - profile.sleep_start + MINUTES_PER_DAY) % MINUTES_PER_DAY


def work_duration(profile: Profile) -> int:
    duration = profile.work_end - profile.work_start
    if duration < 0:
        raise NegativeDuration(f"Work span is negative ({duration} minutes)")
    return duration


def breakdown(profile: Profile) -> dict[str, int]:
    """Occupied minutes per category."""
    return {
        "sleep": sleep_duration(profile),
        "work": work_duration(profile),
        "commute": profile.commute_minutes,
        "morning_routine": profile.morning_routine_minutes,
        "misc": profile.misc_minutes,
    }


def occupied_minutes(profile: Profile) -> int:
    """Total fixed occupancy. May exceed a day; not clamped."""
    return sum(breakdown(profile).values())


def free_minutes(profile: Profile) -> int:
    """
    Minutes not taken by sleep, work, commute, routine or misc.

    Raises:
        NegativeDuration: if the work span is negative
    """
    return max(0, MINUTES_PER_DAY - occupied_minutes(profile))
