"""Habits view implementation."""

from __future__ import annotations

import flet as ft

from ...client.board import HabitBoard, RowState
from ...models.habit import Habit

EMPTY_MESSAGE = "No habits yet. Start a streak today!"
LOADING_MESSAGE = "Loading..."


def _habit_row(board: HabitBoard, habit: Habit) -> ft.Control:
    done = bool(habit.completed_today)
    pending = board.state_of(habit.id) is RowState.OPTIMISTIC
    return ft.Card(
        content=ft.Container(
            content=ft.Row(
                controls=[
                    ft.Checkbox(
                        value=done,
                        disabled=pending,
                        on_change=lambda _e, hid=habit.id: board.toggle(hid),
                    ),
                    ft.Column(
                        controls=[
                            ft.Text(
                                habit.name,
                                size=16,
                                weight=ft.FontWeight.BOLD,
                                color=ft.Colors.ON_SURFACE_VARIANT if done else None,
                                style=ft.TextStyle(
                                    decoration=ft.TextDecoration.LINE_THROUGH if done else None
                                ),
                            ),
                            ft.Text(
                                f"🔥 {habit.streak} day streak",
                                size=12,
                                color=ft.Colors.ON_SURFACE_VARIANT,
                            ),
                        ],
                        expand=True,
                    ),
                    ft.IconButton(
                        icon=ft.Icons.DELETE_OUTLINE,
                        tooltip="Delete habit",
                        on_click=lambda _e, hid=habit.id: board.delete(hid),
                    ),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            padding=12,
        )
    )


def render_rows(board: HabitBoard) -> list[ft.Control]:
    """Return the controls for the habit list in its current state."""

    if board.loading:
        return [ft.Text(LOADING_MESSAGE, color=ft.Colors.ON_SURFACE_VARIANT)]
    if not board.habits:
        return [
            ft.Container(
                content=ft.Text(EMPTY_MESSAGE, color=ft.Colors.ON_SURFACE_VARIANT),
                padding=24,
            )
        ]
    return [_habit_row(board, habit) for habit in board.habits]


def build_habits_view(board: HabitBoard, page: ft.Page) -> ft.View:
    """Build the habits view and keep it in sync with ``board``."""

    habit_list = ft.Column(spacing=8, controls=render_rows(board))
    name_field = ft.TextField(hint_text="New habit...", expand=True)

    def _redraw(_board: HabitBoard) -> None:
        habit_list.controls = render_rows(board)
        page.update()

    def _add(_e=None) -> None:
        if board.add(name_field.value or "") is not None:
            name_field.value = ""
            page.update()

    name_field.on_submit = _add
    board.subscribe(_redraw)

    header = ft.Row(
        controls=[
            ft.Text("Habits", size=24, weight=ft.FontWeight.BOLD),
            ft.Text(board.today().strftime("%A, %b %d"), color=ft.Colors.ON_SURFACE_VARIANT),
        ],
        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
    )

    return ft.View(
        route="/",
        controls=[
            header,
            ft.Divider(),
            ft.Row(controls=[name_field, ft.FilledButton("Add", on_click=_add)]),
            habit_list,
        ],
        padding=24,
        scroll=ft.ScrollMode.AUTO,
    )


__all__ = ["EMPTY_MESSAGE", "LOADING_MESSAGE", "build_habits_view", "render_rows"]
