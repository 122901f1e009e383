"""
Timeline data model.

Profile and Placement are the persisted shapes (one Profile document per
user). TimeBlock is derived on demand and never stored. Habit is a read-only
view of a record owned by the external habit catalog.

Documents use the camelCase field names and "HH:MM" strings of the stored
JSON; the dataclasses hold day-minutes.
"""

import re
import uuid
from dataclasses import dataclass, field

from timeline.engine.time_codec import MINUTES_PER_DAY, to_minutes, to_time_string
from timeline.errors import InvalidProfile, InvalidTimeFormat, NegativeDuration

DEFAULT_HABIT_MINUTES = 15

_LEADING_INT_RE = re.compile(r"([0-9]+)")


def new_placement_id() -> str:
    return f"plc_{uuid.uuid4().hex[:12]}"


def _whole(value: float) -> int | float:
    """Collapse integral floats (510.0) to int, keep real fractions (509.5)."""
    return int(value) if float(value).is_integer() else value


@dataclass
class Habit:
    id: str
    text: str
    time_required: str | None = None

    @classmethod
    def from_record(cls, record: dict) -> "Habit":
        """Build from a catalog record ({id, text, timeRequired?})."""
        return cls(
            id=str(record["id"]),
            text=str(record.get("text", "")),
            time_required=record.get("timeRequired"),
        )

    def required_minutes(self, default: int = DEFAULT_HABIT_MINUTES) -> int:
        """
        Leading integer of ``time_required`` ("30 min" -> 30).

        Absent, unparsable or zero values fall back to *default*.
        """
        if not self.time_required:
            return default
        match = _LEADING_INT_RE.match(str(self.time_required).split(" ")[0])
        if not match:
            return default
        return int(match.group(1)) or default

    def to_record(self) -> dict:
        record = {"id": self.id, "text": self.text}
        if self.time_required is not None:
            record["timeRequired"] = self.time_required
        return record


@dataclass
class Placement:
    habit_id: str
    habit_name: str
    start_time: int
    duration: int
    placement_id: str = field(default_factory=new_placement_id)

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration

    @classmethod
    def from_document(cls, doc: dict) -> "Placement":
        missing = [k for k in ("habitId", "startTime", "duration") if k not in doc]
        if missing:
            raise InvalidProfile(f"Placement missing fields: {', '.join(missing)}")

        duration = doc["duration"]
        if isinstance(duration, bool) or not isinstance(duration, int):
            raise InvalidProfile(f"Placement duration must be an integer, got {duration!r}")
        if duration < 0:
            raise NegativeDuration(f"Placement duration is negative: {duration}")

        placement = cls(
            habit_id=str(doc["habitId"]),
            habit_name=str(doc.get("habitName", "")),
            start_time=to_minutes(doc["startTime"]),
            duration=duration,
        )

        # Documents saved before placements carried ids get one here.
        if doc.get("placementId"):
            placement.placement_id = str(doc["placementId"])
        return placement

    def to_document(self) -> dict:
        return {
            "placementId": self.placement_id,
            "habitId": self.habit_id,
            "habitName": self.habit_name,
            "startTime": to_time_string(self.start_time),
            "duration": self.duration,
        }


@dataclass
class TimeBlock:
    type: str
    start: int | float
    end: int | float
    label: str
    habit_id: str | None = None
    placement_id: str | None = None

    @property
    def duration_min(self) -> int | float:
        return _whole(self.end - self.start)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "start": _whole(self.start),
            "end": _whole(self.end),
            "startTime": to_time_string(self.start),
            "endTime": to_time_string(self.end),
            "label": self.label,
            "habitId": self.habit_id,
            "placementId": self.placement_id,
        }


# Profile document field -> (attribute, kind)
_PROFILE_FIELDS = {
    "sleepStart": ("sleep_start", "time"),
    "sleepEnd": ("sleep_end", "time"),
    "workStart": ("work_start", "time"),
    "workEnd": ("work_end", "time"),
    "commuteMinutes": ("commute_minutes", "minutes"),
    "morningRoutineMinutes": ("morning_routine_minutes", "minutes"),
    "miscMinutes": ("misc_minutes", "minutes"),
}

PROFILE_KEYS = tuple(_PROFILE_FIELDS)


@dataclass
class Profile:
    """
    One user's day model: fixed schedule fields plus placed habits.

    All clock fields are day-minutes. Buffer fields are plain durations.
    """

    sleep_start: int
    sleep_end: int
    work_start: int
    work_end: int
    commute_minutes: int = 0
    morning_routine_minutes: int = 0
    misc_minutes: int = 0
    scheduled_habits: list[Placement] = field(default_factory=list)

    def __post_init__(self):
        for attr in ("sleep_start", "sleep_end", "work_start", "work_end"):
            if not 0 <= getattr(self, attr) < MINUTES_PER_DAY:
                raise InvalidTimeFormat(f"{attr} must be a minute-of-day, got {getattr(self, attr)}")
        for attr in ("commute_minutes", "morning_routine_minutes", "misc_minutes"):
            if getattr(self, attr) < 0:
                raise NegativeDuration(f"{attr} must be >= 0, got {getattr(self, attr)}")

    @classmethod
    def from_document(cls, doc: dict) -> "Profile":
        """
        Build a Profile from its stored JSON shape.

        Raises:
            InvalidProfile: missing fields, non-integer buffers or repeated placement ids
            InvalidTimeFormat: a clock field is not HH:MM
            NegativeDuration: a buffer or placement duration is negative
        """
        missing = [k for k in _PROFILE_FIELDS if k not in doc]
        if missing:
            raise InvalidProfile(f"Profile missing fields: {', '.join(missing)}")

        kwargs = {}
        for key, (attr, kind) in _PROFILE_FIELDS.items():
            if kind == "time":
                kwargs[attr] = to_minutes(doc[key])
            else:
                value = doc[key]
                whole = isinstance(value, int) or (isinstance(value, float) and value.is_integer())
                if isinstance(value, bool) or not whole:
                    raise InvalidProfile(f"{key} must be a whole number of minutes, got {value!r}")
                kwargs[attr] = int(value)

        placements = doc.get("scheduledHabits") or []
        if not isinstance(placements, list) or not all(isinstance(p, dict) for p in placements):
            raise InvalidProfile("scheduledHabits must be a list of placement objects")
        scheduled = [Placement.from_document(p) for p in placements]

        seen = set()
        for placement in scheduled:
            if placement.placement_id in seen:
                raise InvalidProfile(f"Duplicate placementId: {placement.placement_id}")
            seen.add(placement.placement_id)

        kwargs["scheduled_habits"] = scheduled
        return cls(**kwargs)

    def to_document(self) -> dict:
        doc = {}
        for key, (attr, kind) in _PROFILE_FIELDS.items():
            value = getattr(self, attr)
            doc[key] = to_time_string(value) if kind == "time" else value
        doc["scheduledHabits"] = [p.to_document() for p in self.scheduled_habits]
        return doc
