"""
Property-based tests for timeline invariants using Hypothesis.
"""

from hypothesis import given
from hypothesis import strategies as st

from timeline import engine
from timeline.engine import Habit, Profile
from timeline.engine.fixed_blocks import sleep_blocks
from timeline.engine.free_time import sleep_duration
from timeline.engine.time_codec import to_minutes, to_time_string

minute_of_day = st.integers(min_value=0, max_value=1439)
buffer_minutes = st.integers(min_value=0, max_value=600)

hhmm = st.builds(
    lambda h, m: f"{h:02d}:{m:02d}",
    st.integers(min_value=0, max_value=23),
    st.integers(min_value=0, max_value=59),
)


@st.composite
def profiles(draw):
    work_start = draw(minute_of_day)
    return Profile(
        sleep_start=draw(minute_of_day),
        sleep_end=draw(minute_of_day),
        work_start=work_start,
        work_end=draw(st.integers(min_value=work_start, max_value=1439)),
        commute_minutes=draw(buffer_minutes),
        morning_routine_minutes=draw(buffer_minutes),
        misc_minutes=draw(buffer_minutes),
    )


@given(hhmm)
def test_string_round_trip(s: str):
    assert to_time_string(to_minutes(s)) == s


@given(st.integers(min_value=-10**6, max_value=10**6))
def test_minutes_round_trip_after_normalization(m: int):
    normalized = ((m % 1440) + 1440) % 1440
    assert to_minutes(to_time_string(normalized)) == normalized


@given(profiles())
def test_sleep_blocks_match_sleep_duration(profile: Profile):
    blocks = sleep_blocks(profile)
    assert sum(b.end - b.start for b in blocks) == sleep_duration(profile)
    assert all(0 <= b.start <= b.end <= 1440 for b in blocks)


@given(profiles())
def test_work_block_carries_full_commute(profile: Profile):
    work = next(b for b in engine.generate_blocks(profile) if b.type == "work")
    assert work.end - work.start == profile.work_end - profile.work_start + profile.commute_minutes


@given(profiles())
def test_free_time_in_range(profile: Profile):
    assert 0 <= engine.free_minutes(profile) <= 1440


@given(profiles(), hhmm, st.integers(min_value=1, max_value=240))
def test_place_then_remove_restores_profile(profile: Profile, start: str, minutes: int):
    habit = Habit(id="h", text="Habit", time_required=f"{minutes} min")
    placed = engine.place(profile, habit, start)

    assert placed.scheduled_habits[-1].duration == minutes
    assert engine.remove_at(placed, len(placed.scheduled_habits) - 1) == profile
    assert engine.remove(placed, placed.scheduled_habits[-1].placement_id) == profile


@given(profiles(), st.lists(hhmm, min_size=1, max_size=6))
def test_every_placement_yields_a_block(profile: Profile, starts: list[str]):
    for i, start in enumerate(starts):
        profile = engine.place(profile, Habit(id=f"h{i}", text="x"), start)

    habit_blocks = [b for b in engine.generate_blocks(profile) if b.type == "habit"]
    assert len(habit_blocks) == len(starts)
