import customtkinter as ctk

from services.config_binding import ConfigBinding
from services.state import AppState
from ui.components.list_manager import ListManager
from utils.constants import EXPENSE_CATEGORIES, SERVICE_TYPES


class ConfigTab(ctk.CTkFrame):
    def __init__(self, master, binding: ConfigBinding, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure((0, 1), weight=1)
        self.grid_rowconfigure(2, weight=1)

        ctk.CTkLabel(
            self, text="Application Configuration", anchor="w",
            font=ctk.CTkFont(size=20, weight="bold"),
        ).grid(row=0, column=0, columnspan=2, sticky="ew", padx=8, pady=(8, 0))
        self._status = ctk.CTkLabel(
            self, anchor="w", text_color="gray60",
            text="Define the service types and expense categories used on the entry screens.",
        )
        self._status.grid(row=1, column=0, columnspan=2, sticky="ew", padx=8, pady=(0, 8))

        self._managers = [
            ListManager(self, binding, SERVICE_TYPES, title="Manage Service Types",
                        item_label="Service Type", accent="#3F51B5"),
            ListManager(self, binding, EXPENSE_CATEGORIES, title="Manage Expense Categories",
                        item_label="Expense Category", accent="#E91E63"),
        ]
        for col, manager in enumerate(self._managers):
            manager.grid(row=2, column=col, sticky="nsew", padx=8, pady=(0, 8))

    def render(self, state: AppState):
        loading = any(state.options(kind).is_loading for kind in (SERVICE_TYPES, EXPENSE_CATEGORIES))
        if loading:
            self._status.configure(text="Loading configuration lists...")
        else:
            self._status.configure(
                text="Changes made here are updated instantly across all tabs."
            )
        for manager in self._managers:
            manager.render(state)
