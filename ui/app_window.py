import logging

import customtkinter as ctk

from database.config_option_dao import ConfigOptionDAO
from database.expense_record_dao import ExpenseRecordDAO
from database.service_record_dao import ServiceRecordDAO
from database.table_client import TableClient
from services.config_binding import ConfigBinding
from services.entry_forms import ExpenseFormController, ServiceFormController
from services.history import HistoryFeed
from services.state import AppState, TabSelected
from services.store import Store
from ui.components.alert_banner import AlertBanner
from ui.tabs.config_tab import ConfigTab
from ui.tabs.expense_tab import ExpenseTab
from ui.tabs.service_tab import ServiceTab
from ui.tk_runner import TkTaskRunner
from utils.constants import (
    APP_HEIGHT, APP_NAME, APP_WIDTH, EXPENSE, EXPENSE_CATEGORIES,
    EXPENSE_CATEGORY_TABLE, SERVICE, SERVICE_TYPES, SERVICE_TYPE_TABLE, TABS,
)

logger = logging.getLogger(__name__)


class AppWindow(ctk.CTk):
    def __init__(
        self,
        store: Store,
        client: TableClient | None,
        date_format: str = "DD/MM/YYYY",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._store = store
        self._client = client
        self._date_format = date_format
        self._closed = False

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self._wire_services()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_header()
        self._build_banner_area()
        self._build_tabs()

        self._remove_listener = self._store.add_listener(self._render)
        self._render(self._store.state)

        self.protocol("WM_DELETE_WINDOW", self.on_close)
        self.after(50, self._start)

    # ── Wiring ───────────────────────────────────────────────────────────────
    def _wire_services(self):
        runner = TkTaskRunner(self)
        client = self._client
        if client is None:
            # every operation below checks state.connected before touching a DAO
            config_daos, service_dao, expense_dao = {}, None, None
        else:
            config_daos = {
                SERVICE_TYPES: ConfigOptionDAO(client, SERVICE_TYPE_TABLE),
                EXPENSE_CATEGORIES: ConfigOptionDAO(client, EXPENSE_CATEGORY_TABLE),
            }
            service_dao = ServiceRecordDAO(client)
            expense_dao = ExpenseRecordDAO(client)

        self._binding = ConfigBinding(self._store, config_daos, runner)
        self._service_ctrl = ServiceFormController(self._store, service_dao, runner)
        self._expense_ctrl = ExpenseFormController(self._store, expense_dao, runner)
        self._feeds = [
            HistoryFeed(self._store, SERVICE, service_dao, runner),
            HistoryFeed(self._store, EXPENSE, expense_dao, runner),
        ]

    def _start(self):
        if not self._store.state.connected:
            logger.warning("Starting without a backend connection")
            return
        self._binding.start()
        for feed in self._feeds:
            feed.mount()

    # ── Layout ───────────────────────────────────────────────────────────────
    def _build_header(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=52)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        ctk.CTkLabel(
            bar, text=APP_NAME, font=ctk.CTkFont(size=20, weight="bold"),
        ).pack(side="left", padx=(16, 8), pady=10)

        ctk.CTkLabel(
            bar, text=f"Anonymous User ID: {self._store.state.user_id}",
            text_color="gray60",
        ).pack(side="right", padx=16)

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=1, column=0, sticky="ew", padx=8, pady=(4, 0))
        self._banner: AlertBanner | None = None

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self, command=self._on_tab_changed)
        self._tabview.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in TABS:
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        service_name, expense_name, config_name = TABS

        self._service_tab = ServiceTab(
            self._tabview.tab(service_name),
            controller=self._service_ctrl,
            date_format=self._date_format,
        )
        self._service_tab.grid(row=0, column=0, sticky="nsew")

        self._expense_tab = ExpenseTab(
            self._tabview.tab(expense_name),
            controller=self._expense_ctrl,
            date_format=self._date_format,
        )
        self._expense_tab.grid(row=0, column=0, sticky="nsew")

        self._config_tab = ConfigTab(self._tabview.tab(config_name), binding=self._binding)
        self._config_tab.grid(row=0, column=0, sticky="nsew")

    def _on_tab_changed(self):
        self._store.dispatch(TabSelected(self._tabview.get()))

    # ── Render ───────────────────────────────────────────────────────────────
    def _render(self, state: AppState):
        if self._closed:
            return
        self._render_banner(state)
        if self._tabview.get() != state.active_tab:
            self._tabview.set(state.active_tab)
        self._service_tab.render(state)
        self._expense_tab.render(state)
        self._config_tab.render(state)

    def _render_banner(self, state: AppState):
        if state.connected:
            if self._banner is not None:
                self._banner.destroy()
                self._banner = None
            return
        text = (
            f"Not connected to the database: {state.connection_error or 'unknown error'}. "
            "Entry and configuration controls are disabled until the connection is configured."
        )
        if self._banner is None:
            self._banner = AlertBanner(
                self._banner_frame, message=text, color="#F44336", dismissible=False,
            )
            self._banner.pack(fill="x", pady=2)
        else:
            self._banner.set_message(text)

    # ── Teardown ─────────────────────────────────────────────────────────────
    def on_close(self):
        if self._closed:
            return
        self._closed = True
        self._binding.teardown()
        for feed in self._feeds:
            feed.teardown()
        self._remove_listener()
        self._store.close()
        if self._client is not None:
            try:
                self._client.close()
            except Exception:
                logger.exception("Error while closing backend client")
        self.destroy()
