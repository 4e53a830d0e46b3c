"""Flet desktop client for HabitStreak."""
