"""
Daily Timeline Scheduling Engine.

Objects:
- Profile (fixed schedule fields + placed habits)
- Placement (a habit placed at a start time for a duration)
- TimeBlock (derived occupancy interval, never persisted)

Operations are pure: each takes a Profile and returns a new one (or a derived
value) for the caller to persist. The input Profile is never mutated.

Invariants:
- Sleep crossing midnight is two contiguous blocks
- Free time counts commute once, matching the split work block
- Placements are never rejected for overlapping
"""

from dataclasses import replace

from .assembler import Timeline, assemble, assemble_blocks
from .free_time import breakdown, free_minutes, occupied_minutes
from .ledger import PlacementLedger
from .models import DEFAULT_HABIT_MINUTES, Habit, Placement, Profile, TimeBlock
from .time_codec import day_slots, format_duration, to_minutes, to_time_string


def generate_blocks(profile: Profile) -> list[TimeBlock]:
    """Fixed blocks followed by one habit block per placement."""
    return assemble_blocks(profile)


def _with_ledger(profile: Profile, ledger: PlacementLedger) -> Profile:
    return replace(profile, scheduled_habits=ledger.placements)


def place(
    profile: Profile,
    habit: Habit,
    start_time: str,
    default_minutes: int = DEFAULT_HABIT_MINUTES,
) -> Profile:
    """Return a copy of *profile* with *habit* placed at *start_time*."""
    ledger = PlacementLedger(profile.scheduled_habits, default_minutes=default_minutes)
    ledger.place(habit, start_time)
    return _with_ledger(profile, ledger)


def remove(profile: Profile, placement_id: str) -> Profile:
    """Return a copy of *profile* without the placement *placement_id*."""
    ledger = PlacementLedger(profile.scheduled_habits)
    ledger.remove(placement_id)
    return _with_ledger(profile, ledger)


def remove_at(profile: Profile, index: int) -> Profile:
    """Return a copy of *profile* without the placement at position *index*."""
    ledger = PlacementLedger(profile.scheduled_habits)
    ledger.remove_at(index)
    return _with_ledger(profile, ledger)


def unplaced(profile: Profile, habits: list[Habit]) -> list[Habit]:
    """Catalog habits not yet placed on *profile*'s day."""
    ledger = PlacementLedger(profile.scheduled_habits)
    ledger.orphans(habits)
    return ledger.unplaced(habits)


__all__ = [
    "Habit",
    "Placement",
    "PlacementLedger",
    "Profile",
    "TimeBlock",
    "Timeline",
    "assemble",
    "breakdown",
    "day_slots",
    "format_duration",
    "free_minutes",
    "generate_blocks",
    "occupied_minutes",
    "place",
    "remove",
    "remove_at",
    "to_minutes",
    "to_time_string",
    "unplaced",
]
