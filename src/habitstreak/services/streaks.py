"""Streak engine: the pure state transition applied on every toggle.

Both the server and the optimistic client run these functions so the
formula lives in one place. Nothing here performs I/O or mutates its input.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from ..models.habit import Habit


def utc_today() -> date:
    """Return the shared wall-clock calendar day (UTC)."""

    return datetime.now(timezone.utc).date()


def yesterday(day: date) -> date:
    """Return the calendar day before ``day``."""

    return day - timedelta(days=1)


def settle_day(habit: Habit, today: date) -> Habit:
    """Clear a completion flag left over from an earlier day.

    A record marked done on a previous day is not done *today*; its streak
    and last completion date are kept so the run can still be continued.
    """

    if habit.completed_today and habit.last_completed_date != today:
        return habit.copy_with(
            completed_today=False,
            previous_streak=None,
            previous_completed_date=None,
        )
    return habit


def transition(habit: Habit, today: date) -> Habit:
    """Return the habit as it looks after flipping ``completed_today``."""

    last = habit.last_completed_date
    streak = habit.streak
    previous_streak = habit.previous_streak
    previous_date = habit.previous_completed_date
    completed = not habit.completed_today

    if completed:
        if last != today:
            previous_streak, previous_date = streak, last
            streak = streak + 1 if last == yesterday(today) else 1
        last = today
    elif last == today:
        if previous_streak is not None:
            streak, last = previous_streak, previous_date
        else:
            # Nothing remembered: drop today's completion and forget the date.
            streak, last = max(0, streak - 1), None
        previous_streak, previous_date = None, None

    return habit.copy_with(
        streak=streak,
        completed_today=completed,
        last_completed_date=last,
        previous_streak=previous_streak,
        previous_completed_date=previous_date,
    )


def apply_toggle(habit: Habit, today: date) -> Habit:
    """Settle ``habit`` for ``today`` and then toggle it."""

    return transition(settle_day(habit, today), today)


__all__ = ["apply_toggle", "settle_day", "transition", "utc_today", "yesterday"]
