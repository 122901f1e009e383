"""
Pydantic request/response models for the timeline API.

Request bodies use the camelCase names of the stored profile document.
"""

from typing import Any

from pydantic import BaseModel, Field

# ==== Requests ====


class HabitRecord(BaseModel):
    """A habit as supplied by the external habit catalog."""

    id: str
    text: str = ""
    time_required: str | None = Field(
        default=None, alias="timeRequired", description='e.g. "30 min"; leading integer is used'
    )

    model_config = {"populate_by_name": True}

    def to_record(self) -> dict:
        return {"id": self.id, "text": self.text, "timeRequired": self.time_required}


class PlaceRequest(BaseModel):
    """Drop a habit onto a time slot."""

    habit: HabitRecord
    start_time: str = Field(alias="startTime", description="HH:MM")

    model_config = {"populate_by_name": True}


class UnplacedRequest(BaseModel):
    habits: list[HabitRecord] = Field(default_factory=list)


# ==== Responses ====


class TimeBlockModel(BaseModel):
    """Derived occupancy block. Extra keys (startTime, habitId, ...) pass through."""

    type: str = Field(description="sleep, work, routine or habit")
    start: int | float = Field(description="Start minute; may be fractional for work")
    end: int | float = Field(description="End minute; 1440 for the pre-midnight sleep half")
    label: str

    model_config = {"extra": "allow"}


class ProfileResponse(BaseModel):
    user_id: str
    profile: dict[str, Any] = Field(description="Stored profile document")
    free_minutes: int
    free_time: str = Field(description='e.g. "4h 30min"')


class TimelineResponse(BaseModel):
    user_id: str
    day: str = Field(description="Reference day, YYYY-MM-DD")
    blocks: list[TimeBlockModel]
    free_minutes: int
    free_time: str


class FreeTimeResponse(BaseModel):
    user_id: str
    free_minutes: int
    free_time: str
    occupied_minutes: int
    breakdown: dict[str, int]


class PlacementResponse(BaseModel):
    placement: dict[str, Any] | None = None
    profile: dict[str, Any]


class UnplacedResponse(BaseModel):
    items: list[dict[str, Any]] = Field(default_factory=list)
    total: int
    orphaned_placements: list[str] = Field(
        default_factory=list, description="Placement ids whose habit is not in the catalog"
    )
    orphan_error_code: str | None = Field(
        default=None, description="unknown_habit when any placement is orphaned"
    )


class SlotsResponse(BaseModel):
    slot_minutes: int
    slots: list[str]


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    error_code: str
