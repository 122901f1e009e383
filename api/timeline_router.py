"""
Timeline API Router - profile, timeline and placement endpoints.

Every mutation is load -> pure engine operation -> full save. Engine errors
propagate as TimelineError and are turned into JSON by the handler in
server.py, so a failed request never writes.

Usage in server.py:
    from api.timeline_router import timeline_router
    app.include_router(timeline_router, prefix="/api")
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from api.response_models import (
    FreeTimeResponse,
    PlaceRequest,
    PlacementResponse,
    ProfileResponse,
    SlotsResponse,
    TimelineResponse,
    UnplacedRequest,
    UnplacedResponse,
)
from timeline import engine
from timeline.config import get_config
from timeline.engine import Habit, PlacementLedger, Profile
from timeline.errors import UnknownHabit
from timeline.profile_store import ProfileStore, get_store

logger = logging.getLogger(__name__)

timeline_router = APIRouter(tags=["Timeline"])


def get_profile_store() -> ProfileStore:
    """Store dependency; tests override this."""
    return get_store()


def _require_profile(store: ProfileStore, user_id: str) -> Profile:
    profile = store.load(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"No timeline profile for {user_id}")
    return profile


def _profile_response(user_id: str, profile: Profile) -> dict:
    free = engine.free_minutes(profile)
    return {
        "user_id": user_id,
        "profile": profile.to_document(),
        "free_minutes": free,
        "free_time": engine.format_duration(free),
    }


# =============================================================================
# SETUP
# =============================================================================


@timeline_router.get("/setup/defaults", response_model=ProfileResponse)
def setup_defaults():
    """Starting values for the first-time setup form."""
    profile = Profile.from_document(get_config().default_profile)
    return _profile_response("", profile)


@timeline_router.get("/slots", response_model=SlotsResponse)
def slots():
    """Drop-target grid for placing habits."""
    slot_minutes = get_config().slot_minutes
    return {"slot_minutes": slot_minutes, "slots": engine.day_slots(slot_minutes)}


# =============================================================================
# PROFILES
# =============================================================================


@timeline_router.get("/profiles/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str, store: ProfileStore = Depends(get_profile_store)):
    return _profile_response(user_id, _require_profile(store, user_id))


@timeline_router.put("/profiles/{user_id}", response_model=ProfileResponse)
def save_profile(
    user_id: str,
    document: dict,
    store: ProfileStore = Depends(get_profile_store),
):
    """Validate and overwrite the whole profile document."""
    profile = Profile.from_document(document)
    # Reject inconsistent work hours before anything is written
    engine.free_minutes(profile)
    store.save(user_id, profile)
    return _profile_response(user_id, profile)


@timeline_router.get("/profiles/{user_id}/timeline", response_model=TimelineResponse)
def get_timeline(
    user_id: str,
    day: date | None = Query(None, description="Reference day (defaults to today)"),
    store: ProfileStore = Depends(get_profile_store),
):
    profile = _require_profile(store, user_id)
    timeline = engine.assemble(profile, day or date.today())
    return {"user_id": user_id, **timeline.to_dict()}


@timeline_router.get("/profiles/{user_id}/free-time", response_model=FreeTimeResponse)
def get_free_time(user_id: str, store: ProfileStore = Depends(get_profile_store)):
    profile = _require_profile(store, user_id)
    free = engine.free_minutes(profile)
    return {
        "user_id": user_id,
        "free_minutes": free,
        "free_time": engine.format_duration(free),
        "occupied_minutes": engine.occupied_minutes(profile),
        "breakdown": engine.breakdown(profile),
    }


# =============================================================================
# PLACEMENTS
# =============================================================================


@timeline_router.post("/profiles/{user_id}/placements", response_model=PlacementResponse)
def place_habit(
    user_id: str,
    request: PlaceRequest,
    store: ProfileStore = Depends(get_profile_store),
):
    """Place a habit at a start time. Overlaps are accepted."""
    profile = _require_profile(store, user_id)
    habit = Habit.from_record(request.habit.to_record())

    updated = engine.place(
        profile,
        habit,
        request.start_time,
        default_minutes=get_config().default_habit_minutes,
    )
    store.save(user_id, updated)

    placement = updated.scheduled_habits[-1]
    return {"placement": placement.to_document(), "profile": updated.to_document()}


@timeline_router.delete(
    "/profiles/{user_id}/placements/{placement_id}", response_model=PlacementResponse
)
def remove_placement(
    user_id: str,
    placement_id: str,
    store: ProfileStore = Depends(get_profile_store),
):
    profile = _require_profile(store, user_id)
    updated = engine.remove(profile, placement_id)
    store.save(user_id, updated)
    return {"placement": None, "profile": updated.to_document()}


@timeline_router.post("/profiles/{user_id}/unplaced", response_model=UnplacedResponse)
def list_unplaced(
    user_id: str,
    request: UnplacedRequest,
    store: ProfileStore = Depends(get_profile_store),
):
    """Which catalog habits still need a slot."""
    profile = _require_profile(store, user_id)
    habits = [Habit.from_record(h.to_record()) for h in request.habits]

    ledger = PlacementLedger(profile.scheduled_habits)
    remaining = ledger.unplaced(habits)
    orphaned = ledger.orphans(habits)

    return {
        "items": [h.to_record() for h in remaining],
        "total": len(remaining),
        "orphaned_placements": [p.placement_id for p in orphaned],
        "orphan_error_code": UnknownHabit.error_code if orphaned else None,
    }
