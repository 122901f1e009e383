"""
Fixed Block Generator - occupancy blocks derived from a Profile.

Produces the non-placeable blocks of the day, in this order:
- Sleep (split in two when it crosses midnight)
- Work + Commute (commute split evenly before and after work)
- Morning Routine (anchored at wake-up)

Blocks are descriptive, not a packed schedule: the routine may overlap the
work block and nothing is clipped. Misc minutes have no anchor time and only
count toward free time.
"""

import logging

from timeline.engine.models import Profile, TimeBlock
from timeline.engine.time_codec import MINUTES_PER_DAY
from timeline.errors import NegativeDuration

logger = logging.getLogger(__name__)


def sleep_blocks(profile: Profile) -> list[TimeBlock]:
    """Sleep as one block, or two contiguous blocks when it wraps past midnight."""
    start, end = profile.sleep_start, profile.sleep_end

    # waking at 00:00 still yields an empty [0, 0) continuation
    if end < start:
        return [
            TimeBlock(type="sleep", start=start, end=MINUTES_PER_DAY, label="Sleep"),
            TimeBlock(type="sleep", start=0, end=end, label="Sleep (cont.)"),
        ]

    # start == end is zero sleep, not a full day
    if end == start:
        return []

    return [TimeBlock(type="sleep", start=start, end=end, label="Sleep")]


def work_block(profile: Profile) -> TimeBlock:
    """Work span widened by half the commute on each side."""
    if profile.work_end < profile.work_start:
        raise NegativeDuration(
            f"Work ends before it starts ({profile.work_start} > {profile.work_end} minutes)"
        )

    half_commute = profile.commute_minutes / 2
    return TimeBlock(
        type="work",
        start=profile.work_start - half_commute,
        end=profile.work_end + half_commute,
        label="Work + Commute",
    )


def routine_block(profile: Profile) -> TimeBlock:
    return TimeBlock(
        type="routine",
        start=profile.sleep_end,
        end=profile.sleep_end + profile.morning_routine_minutes,
        label="Morning Routine",
    )


def generate_fixed_blocks(profile: Profile) -> list[TimeBlock]:
    """
    All fixed blocks for a profile.

    Raises:
        NegativeDuration: if the work span is negative
    """
    blocks = sleep_blocks(profile)
    blocks.append(work_block(profile))
    blocks.append(routine_block(profile))

    logger.debug("Generated %d fixed blocks", len(blocks))
    return blocks
