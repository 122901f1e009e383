"""
Tests for fixed block generation: sleep split, work + commute, routine.
"""

import pytest

from timeline.engine import Profile
from timeline.engine.fixed_blocks import generate_fixed_blocks, routine_block, sleep_blocks, work_block
from timeline.errors import NegativeDuration


def _profile(**overrides) -> Profile:
    fields = {
        "sleep_start": 1320,
        "sleep_end": 360,
        "work_start": 540,
        "work_end": 1020,
        "commute_minutes": 60,
        "morning_routine_minutes": 30,
        "misc_minutes": 120,
    }
    fields.update(overrides)
    return Profile(**fields)


class TestSleep:
    def test_crossing_midnight_splits_in_two(self):
        blocks = sleep_blocks(_profile(sleep_start=1320, sleep_end=360))

        assert [(b.start, b.end) for b in blocks] == [(1320, 1440), (0, 360)]
        assert [b.label for b in blocks] == ["Sleep", "Sleep (cont.)"]
        assert sum(b.end - b.start for b in blocks) == 480

    def test_same_day_sleep_is_one_block(self):
        blocks = sleep_blocks(_profile(sleep_start=360, sleep_end=840))

        assert len(blocks) == 1
        assert (blocks[0].start, blocks[0].end) == (360, 840)
        assert blocks[0].label == "Sleep"

    def test_sleep_from_midnight_does_not_split(self):
        blocks = sleep_blocks(_profile(sleep_start=0, sleep_end=420))
        assert [(b.start, b.end) for b in blocks] == [(0, 420)]

    def test_waking_at_midnight_keeps_empty_continuation(self):
        blocks = sleep_blocks(_profile(sleep_start=1320, sleep_end=0))

        assert [(b.start, b.end) for b in blocks] == [(1320, 1440), (0, 0)]
        assert [b.label for b in blocks] == ["Sleep", "Sleep (cont.)"]

    def test_equal_start_and_end_is_zero_sleep(self):
        assert sleep_blocks(_profile(sleep_start=600, sleep_end=600)) == []


class TestWork:
    def test_commute_split_around_work(self):
        block = work_block(_profile())
        assert (block.start, block.end) == (510, 1050)
        assert block.label == "Work + Commute"

    def test_odd_commute_keeps_half_minutes(self):
        block = work_block(_profile(commute_minutes=45))
        assert block.start == 517.5
        assert block.end == 1042.5
        assert block.end - block.start == 480 + 45

    def test_negative_work_span_raises(self):
        with pytest.raises(NegativeDuration):
            work_block(_profile(work_start=1020, work_end=540))


class TestRoutine:
    def test_anchored_at_wake_up(self):
        block = routine_block(_profile(sleep_end=360, morning_routine_minutes=30))
        assert (block.start, block.end) == (360, 390)

    def test_overlap_with_work_is_not_clipped(self):
        profile = _profile(sleep_end=500, morning_routine_minutes=60)
        block = routine_block(profile)
        assert (block.start, block.end) == (500, 560)
        assert block.start < work_block(profile).end

    def test_zero_routine_is_an_empty_block(self):
        block = routine_block(_profile(sleep_end=360, morning_routine_minutes=0))
        assert (block.start, block.end) == (360, 360)
        assert block.label == "Morning Routine"

    def test_zero_routine_still_listed(self):
        types = [b.type for b in generate_fixed_blocks(_profile(morning_routine_minutes=0))]
        assert types == ["sleep", "sleep", "work", "routine"]


def test_fixed_block_order():
    types = [b.type for b in generate_fixed_blocks(_profile())]
    assert types == ["sleep", "sleep", "work", "routine"]


def test_misc_is_never_a_block():
    blocks = generate_fixed_blocks(_profile(misc_minutes=500))
    assert all(b.type in ("sleep", "work", "routine") for b in blocks)
