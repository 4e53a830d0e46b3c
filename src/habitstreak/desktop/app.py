"""Main Flet desktop application entry point."""

from __future__ import annotations

import flet as ft

from ..client.api import HabitApiClient
from ..client.board import HabitBoard
from ..config import BaseConfig
from ..logging_config import setup_logging
from .views.habits import build_habits_view


def main(page: ft.Page) -> None:
    """Main entry point for the Flet desktop app."""

    config = BaseConfig()
    logger = setup_logging(config)
    logger.info("HabitStreak desktop client starting", extra={"api_url": config.API_URL})

    api = HabitApiClient(config.API_URL, timeout=config.HTTP_TIMEOUT)
    board = HabitBoard(api)

    def on_page_close(_):
        logger.info("Application closing, releasing HTTP client")
        api.close()

    page.on_close = on_page_close
    page.title = "HabitStreak"
    page.window_width = 520
    page.window_height = 720

    page.views.clear()
    page.views.append(build_habits_view(board, page))
    page.update()
    board.refresh()
