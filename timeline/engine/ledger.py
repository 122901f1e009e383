"""
Placement Ledger - the ordered list of habits a user has placed on the day.

Placements are keyed by a generated placement_id so removing one never
shifts the identity of another. Overlap with other placements or with fixed
blocks is allowed; warning about it is a presentation concern.
"""

import logging
from collections.abc import Iterable, Iterator

from timeline.engine.models import DEFAULT_HABIT_MINUTES, Habit, Placement
from timeline.engine.time_codec import MINUTES_PER_DAY, to_minutes
from timeline.errors import InvalidTimeFormat, PlacementNotFound

logger = logging.getLogger(__name__)


class PlacementLedger:
    """
    Manages placed habits for one profile.

    Responsibilities:
    - Append placements with a duration derived from the habit
    - Remove placements by id (or by position, for index-based callers)
    - Report which catalog habits are not placed yet
    """

    def __init__(
        self,
        placements: Iterable[Placement] = (),
        default_minutes: int = DEFAULT_HABIT_MINUTES,
    ):
        self._placements: list[Placement] = list(placements)
        self.default_minutes = default_minutes

    def __len__(self) -> int:
        return len(self._placements)

    def __iter__(self) -> Iterator[Placement]:
        return iter(self._placements)

    @property
    def placements(self) -> list[Placement]:
        """Copy of the current placements, in placement order."""
        return list(self._placements)

    def place(self, habit: Habit, start_time: str | int) -> Placement:
        """
        Place *habit* at *start_time* ("HH:MM" or day-minutes).

        Raises:
            InvalidTimeFormat: if start_time is not HH:MM or a minute-of-day
        """
        start = to_minutes(start_time) if isinstance(start_time, str) else start_time
        if not 0 <= start < MINUTES_PER_DAY:
            raise InvalidTimeFormat(f"Start time must be a minute-of-day, got {start}")

        placement = Placement(
            habit_id=habit.id,
            habit_name=habit.text,
            start_time=start,
            duration=habit.required_minutes(self.default_minutes),
        )
        self._placements.append(placement)

        logger.info(
            "Placed habit %s at minute %d for %d min (%s)",
            habit.id,
            placement.start_time,
            placement.duration,
            placement.placement_id,
        )
        return placement

    def remove(self, placement_id: str) -> Placement:
        """Remove the placement with *placement_id*."""
        for i, placement in enumerate(self._placements):
            if placement.placement_id == placement_id:
                del self._placements[i]
                logger.info("Removed placement %s (habit %s)", placement_id, placement.habit_id)
                return placement

        raise PlacementNotFound(f"Placement not found: {placement_id}")

    def remove_at(self, index: int) -> Placement:
        """Remove by position. Later placements move down one index."""
        if not 0 <= index < len(self._placements):
            raise PlacementNotFound(
                f"No placement at index {index} (ledger has {len(self._placements)})"
            )
        placement = self._placements.pop(index)
        logger.info("Removed placement %s at index %d", placement.placement_id, index)
        return placement

    def unplaced(self, habits: Iterable[Habit]) -> list[Habit]:
        """Catalog habits with no placement on the day."""
        placed = {p.habit_id for p in self._placements}
        return [h for h in habits if h.id not in placed]

    def orphans(self, habits: Iterable[Habit]) -> list[Placement]:
        """
        Placements whose habit is missing from the catalog.

        These are kept (the catalog may be stale or filtered) but have no
        bearing on unplaced().
        """
        known = {h.id for h in habits}
        orphaned = [p for p in self._placements if p.habit_id not in known]
        if orphaned:
            logger.warning(
                "%d placement(s) reference unknown habits: %s",
                len(orphaned),
                ", ".join(sorted({p.habit_id for p in orphaned})),
            )
        return orphaned
