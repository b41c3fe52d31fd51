"""
Launchrank - Ignis entry point.

Loads settings and history, discovers installed applications through the
Ignis ApplicationsService, and opens the search panel.

Usage:
  ignis init -c /path/to/launchrank/app.py
  ignis open-window launchrank
"""

from pathlib import Path

from ignis.app import IgnisApp
from ignis.services.applications import ApplicationsService
from loguru import logger

from launchrank.config import load_config
from launchrank.controller import QueryController
from launchrank.discovery import build_entries, info_from_application
from launchrank.panels.search import SearchPanel
from launchrank.services.history import HistoryStore


def create_controller() -> QueryController:
    """Wire settings, history and discovered apps into a controller."""
    config = load_config()
    apps = [info_from_application(app) for app in ApplicationsService.get_default().apps]

    store = HistoryStore()
    history = store.load(config.prune_history, [info.id for info in apps])
    entries = build_entries(apps, config, history)

    return QueryController(entries, config, store=store, history=history)


app = IgnisApp.get_default()

style_path = Path(__file__).parent / "styles" / "main.css"
if style_path.exists():
    try:
        app.apply_css(str(style_path))
    except Exception:
        logger.exception(f"Could not load {style_path}")

search_panel = SearchPanel(create_controller())
search_window = search_panel.create_window()
search_window.panel = search_panel

logger.info("Launchrank initialized")
