import logging
import os
import sys

import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.errors import BackendUnavailableError
from database.supabase_client import SupabaseTableClient
from services.identity import get_anonymous_user_id
from services.state import AppState, ConnectionFailed
from services.store import Store
from ui.app_window import AppWindow
from utils.app_config import load_settings
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main():
    # ── Bootstrap: pre-connection config ──────────────────────────────────────
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    # ── State ────────────────────────────────────────────────────────────────
    store = Store(AppState(user_id=get_anonymous_user_id(settings.app_id)))

    # ── Backend ──────────────────────────────────────────────────────────────
    client = None
    try:
        client = SupabaseTableClient.connect(settings)
    except BackendUnavailableError as e:
        logger.error("Backend unavailable: %s", e)
        store.dispatch(ConnectionFailed(str(e)))

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode("system")
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(store=store, client=client)
    app.mainloop()


if __name__ == "__main__":
    main()
