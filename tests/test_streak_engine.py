"""Tests for the streak engine transitions.

These cover the documented toggle scenarios plus the sequences a user
actually produces: consecutive days, skipped days, and same-day undo.
"""

from __future__ import annotations

import random
from datetime import date, timedelta

import pytest

from habitstreak.models import Habit
from habitstreak.services.streaks import (
    apply_toggle,
    settle_day,
    transition,
    utc_today,
    yesterday,
)


def _habit(streak=0, completed_today=False, last_completed_date=None, **extra) -> Habit:
    return Habit(
        id=1,
        name="Stretch",
        streak=streak,
        completed_today=completed_today,
        last_completed_date=last_completed_date,
        **extra,
    )


def _public(habit: Habit) -> tuple:
    return habit.streak, habit.completed_today, habit.last_completed_date


class TestTransitionScenarios:
    def test_continuing_a_run_increments_streak(self):
        habit = _habit(streak=3, last_completed_date=date(2024, 1, 9))

        result = transition(habit, date(2024, 1, 10))

        assert _public(result) == (4, True, date(2024, 1, 10))

    def test_first_completion_starts_streak_at_one(self):
        result = transition(_habit(), date(2024, 3, 1))

        assert _public(result) == (1, True, date(2024, 3, 1))

    def test_undo_without_remembered_state_decrements_and_clears_date(self):
        habit = _habit(streak=5, completed_today=True, last_completed_date=date(2024, 3, 1))

        result = transition(habit, date(2024, 3, 1))

        assert _public(result) == (4, False, None)

    def test_broken_run_resets_to_one(self):
        habit = _habit(streak=7, last_completed_date=date(2024, 1, 5))

        result = transition(habit, date(2024, 1, 10))

        assert _public(result) == (1, True, date(2024, 1, 10))

    def test_marking_again_on_same_day_does_not_double_count(self):
        habit = _habit(streak=2, completed_today=False, last_completed_date=date(2024, 1, 10))

        result = transition(habit, date(2024, 1, 10))

        assert _public(result) == (2, True, date(2024, 1, 10))

    def test_unmarking_with_no_completion_today_only_flips_flag(self):
        habit = _habit(streak=4, completed_today=True, last_completed_date=date(2024, 1, 8))

        result = transition(habit, date(2024, 1, 10))

        assert _public(result) == (4, False, date(2024, 1, 8))

    def test_undo_never_goes_negative(self):
        habit = _habit(streak=0, completed_today=True, last_completed_date=date(2024, 1, 10))

        assert transition(habit, date(2024, 1, 10)).streak == 0


class TestTransitionPurity:
    def test_input_is_not_mutated(self):
        habit = _habit(streak=3, last_completed_date=date(2024, 1, 9))

        transition(habit, date(2024, 1, 10))

        assert _public(habit) == (3, False, date(2024, 1, 9))
        assert habit.previous_streak is None

    def test_identity_and_name_are_preserved(self):
        result = transition(_habit(), date(2024, 1, 10))

        assert result.id == 1
        assert result.name == "Stretch"


class TestUndoMemory:
    def test_done_then_undone_restores_exact_previous_state(self):
        before = _habit(streak=3, last_completed_date=date(2024, 1, 9))
        today = date(2024, 1, 10)

        restored = transition(transition(before, today), today)

        assert _public(restored) == _public(before)

    def test_undo_after_reset_restores_broken_run(self):
        before = _habit(streak=6, last_completed_date=date(2024, 1, 2))
        today = date(2024, 1, 10)

        marked = transition(before, today)
        assert marked.streak == 1

        restored = transition(marked, today)
        assert _public(restored) == (6, False, date(2024, 1, 2))

    def test_undo_memory_is_cleared_after_use(self):
        today = date(2024, 1, 10)
        restored = transition(transition(_habit(), today), today)

        assert restored.previous_streak is None
        assert restored.previous_completed_date is None

    def test_repeated_toggles_on_one_day_alternate_between_two_states(self):
        today = date(2024, 1, 10)
        start = _habit(streak=2, last_completed_date=date(2024, 1, 9))
        habit = start
        seen = []
        for _ in range(6):
            habit = transition(habit, today)
            seen.append(_public(habit))

        assert seen[0::2] == [(3, True, today)] * 3
        assert seen[1::2] == [_public(start)] * 3


class TestSettleDay:
    def test_stale_completion_flag_is_cleared(self):
        habit = _habit(
            streak=2,
            completed_today=True,
            last_completed_date=date(2024, 1, 9),
            previous_streak=1,
            previous_completed_date=date(2024, 1, 8),
        )

        settled = settle_day(habit, date(2024, 1, 10))

        assert _public(settled) == (2, False, date(2024, 1, 9))
        assert settled.previous_streak is None

    def test_current_record_is_returned_unchanged(self):
        habit = _habit(streak=2, completed_today=True, last_completed_date=date(2024, 1, 10))

        assert settle_day(habit, date(2024, 1, 10)) is habit


class TestToggleSequences:
    def test_consecutive_days_grow_streak_by_one(self):
        day = date(2024, 1, 1)
        habit = _habit()
        for expected in range(1, 6):
            habit = apply_toggle(habit, day)
            assert _public(habit) == (expected, True, day)
            day += timedelta(days=1)

    def test_skipped_day_resets_streak(self):
        day = date(2024, 1, 1)
        habit = apply_toggle(_habit(), day)
        habit = apply_toggle(habit, day + timedelta(days=1))
        assert habit.streak == 2

        habit = apply_toggle(habit, day + timedelta(days=3))

        assert _public(habit) == (1, True, day + timedelta(days=3))

    @pytest.mark.parametrize(
        "pattern",
        [
            [0, 0, 1, 2, 2, 2, 5],
            [0, 1, 1, 1, 3, 4, 4],
            [0, 0, 0, 0],
        ],
    )
    def test_date_is_null_exactly_when_streak_is_zero(self, pattern):
        """Day offsets repeat to model undo/redo on the same day."""
        start = date(2024, 2, 1)
        habit = _habit()
        for offset in pattern:
            habit = apply_toggle(habit, start + timedelta(days=offset))
            assert habit.streak >= 0
            assert (habit.last_completed_date is None) == (habit.streak == 0)
            if habit.completed_today:
                assert habit.last_completed_date == start + timedelta(days=offset)


def test_yesterday_crosses_month_and_year_boundaries():
    assert yesterday(date(2024, 3, 1)) == date(2024, 2, 29)
    assert yesterday(date(2024, 1, 1)) == date(2023, 12, 31)


def test_utc_today_returns_a_date():
    assert isinstance(utc_today(), date)


@pytest.mark.parametrize("seed", range(25))
def test_date_is_null_exactly_when_streak_is_zero_for_any_sequence(seed):
    """Walk a seeded mix of toggles and day jumps, checking after every step."""
    rng = random.Random(seed)
    day = date(2024, 1, 1)
    habit = _habit()
    for _ in range(60):
        roll = rng.random()
        if roll < 0.6:
            habit = apply_toggle(habit, day)
        elif roll < 0.9:
            day += timedelta(days=1)
        else:
            day += timedelta(days=rng.randint(2, 5))
        settled = settle_day(habit, day)
        for state in (habit, settled):
            assert state.streak >= 0
            assert (state.last_completed_date is None) == (state.streak == 0)
        if settled.completed_today:
            assert settled.last_completed_date == day
