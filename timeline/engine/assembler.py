"""
Timeline Assembler - merge fixed blocks and placed habits into one day.

Fixed blocks come first, then one habit block per placement in placement
order. Overlaps are kept: a lunchtime habit inside the work block is a
legitimate day.
"""

from dataclasses import dataclass
from datetime import date

from timeline.engine.fixed_blocks import generate_fixed_blocks
from timeline.engine.free_time import free_minutes
from timeline.engine.models import Placement, Profile, TimeBlock
from timeline.engine.time_codec import format_duration


def habit_blocks(placements: list[Placement]) -> list[TimeBlock]:
    return [
        TimeBlock(
            type="habit",
            start=p.start_time,
            end=p.start_time + p.duration,
            label=p.habit_name,
            habit_id=p.habit_id,
            placement_id=p.placement_id,
        )
        for p in placements
    ]


def assemble_blocks(profile: Profile) -> list[TimeBlock]:
    return generate_fixed_blocks(profile) + habit_blocks(profile.scheduled_habits)


@dataclass
class Timeline:
    """One assembled day. ``day`` is supplied by the caller, never read from the clock."""

    day: date
    blocks: list[TimeBlock]
    free_minutes: int

    def to_dict(self) -> dict:
        return {
            "day": self.day.isoformat(),
            "blocks": [b.to_dict() for b in self.blocks],
            "free_minutes": self.free_minutes,
            "free_time": format_duration(self.free_minutes),
        }


def assemble(profile: Profile, day: date) -> Timeline:
    """Build the full timeline for *profile* on reference day *day*."""
    return Timeline(
        day=day,
        blocks=assemble_blocks(profile),
        free_minutes=free_minutes(profile),
    )
