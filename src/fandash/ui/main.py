"""NiceGUI web dashboard setup and page registration."""

from __future__ import annotations

from fastapi import FastAPI
from nicegui import ui

from fandash.config import DashboardConfig


def setup_ui(fastapi_app: FastAPI, config: DashboardConfig) -> None:
    """Register NiceGUI pages with the FastAPI application."""

    @ui.page("/")
    def index():
        from fandash.ui.pages.dashboard import dashboard_page
        dashboard_page(config)

    ui.run_with(
        fastapi_app,
        title="Fan Dashboard",
        storage_secret=config.storage_secret,
    )
