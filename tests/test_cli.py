"""Tests for the habitstreak Flask CLI commands."""

from __future__ import annotations

import pytest


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


def test_list_on_empty_store(runner):
    result = runner.invoke(args=["habitstreak-list"])

    assert result.exit_code == 0
    assert "No habits yet. Start a streak today!" in result.output


def test_add_then_list(runner):
    added = runner.invoke(args=["habitstreak-add", "  Stretch  "])
    listed = runner.invoke(args=["habitstreak-list"])

    assert added.exit_code == 0
    assert "Created [ ] #1 Stretch (streak 0, last -)" in added.output
    assert "[ ] #1 Stretch" in listed.output


def test_add_rejects_long_name(runner):
    result = runner.invoke(args=["habitstreak-add", "a" * 51])

    assert result.exit_code != 0
    assert "Error" in result.output


def test_toggle_marks_today(runner):
    runner.invoke(args=["habitstreak-add", "Stretch"])

    result = runner.invoke(args=["habitstreak-toggle", "1"])

    assert result.exit_code == 0
    assert "[x] #1 Stretch (streak 1, last 2024-01-10)" in result.output


def test_toggle_unknown_habit_fails(runner):
    result = runner.invoke(args=["habitstreak-toggle", "99"])

    assert result.exit_code == 1
    assert "99" in result.output


def test_remove(runner):
    runner.invoke(args=["habitstreak-add", "Stretch"])

    result = runner.invoke(args=["habitstreak-remove", "1"])

    assert result.exit_code == 0
    assert "Removed habit #1" in result.output
    assert "No habits yet" in runner.invoke(args=["habitstreak-list"]).output
