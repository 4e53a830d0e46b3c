"""Flask CLI commands for HabitStreak."""

from __future__ import annotations

import click

from .errors import HabitStreakError


def _format(habit) -> str:
    mark = "x" if habit.completed_today else " "
    last = habit.last_completed_date.isoformat() if habit.last_completed_date else "-"
    return f"[{mark}] #{habit.id} {habit.name} (streak {habit.streak}, last {last})"


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    from .extensions import get_service

    @app.cli.command("habitstreak-list")
    def habitstreak_list() -> None:
        """List all habits."""

        try:
            habits = get_service().list()
        except HabitStreakError as exc:
            raise click.ClickException(str(exc)) from exc
        if not habits:
            click.echo("No habits yet. Start a streak today!")
        for habit in habits:
            click.echo(_format(habit))

    @app.cli.command("habitstreak-add")
    @click.argument("name")
    def habitstreak_add(name: str) -> None:
        """Create a habit called NAME."""

        try:
            habit = get_service().create(name)
        except HabitStreakError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Created {_format(habit)}")

    @app.cli.command("habitstreak-toggle")
    @click.argument("habit_id", type=int)
    def habitstreak_toggle(habit_id: int) -> None:
        """Toggle today's completion for HABIT_ID."""

        try:
            habit = get_service().toggle(habit_id)
        except HabitStreakError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(_format(habit))

    @app.cli.command("habitstreak-remove")
    @click.argument("habit_id", type=int)
    def habitstreak_remove(habit_id: int) -> None:
        """Delete HABIT_ID (no error if it does not exist)."""

        try:
            get_service().remove(habit_id)
        except HabitStreakError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Removed habit #{habit_id}")
