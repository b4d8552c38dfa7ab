import customtkinter as ctk

from models.config_option import ConfigOption
from services.config_binding import ConfigBinding
from services.state import AppState
from services.view_models import list_manager_controls
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.message_label import MessageLabel
from utils.constants import LEVEL_COLORS


class ListManager(ctk.CTkFrame):
    """Add/delete panel for one configuration list."""

    def __init__(self, master, binding: ConfigBinding, kind: str, title: str,
                 item_label: str, accent: str, **kwargs):
        super().__init__(master, fg_color=("gray88", "gray18"), corner_radius=8, **kwargs)
        self._binding = binding
        self._kind = kind
        self._item_label = item_label
        self._rendered_options = None
        self._add_enabled = False
        self._clearing = False

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(4, weight=1)

        ctk.CTkLabel(
            self, text=title, anchor="w", text_color=accent,
            font=ctk.CTkFont(size=16, weight="bold"),
        ).grid(row=0, column=0, sticky="ew", padx=12, pady=(10, 6))

        bar = ctk.CTkFrame(self, fg_color="transparent")
        bar.grid(row=1, column=0, sticky="ew", padx=12)
        bar.grid_columnconfigure(0, weight=1)

        self._name_var = ctk.StringVar()
        self._name_var.trace_add("write", lambda *_: self._on_typing())
        self._name_entry = ctk.CTkEntry(bar, textvariable=self._name_var)
        self._name_entry.grid(row=0, column=0, sticky="ew")
        self._name_entry.bind("<Return>", lambda _e: self._on_add())
        self._add_btn = ctk.CTkButton(bar, text="+ Add", width=80, command=self._on_add)
        self._add_btn.grid(row=0, column=1, padx=(8, 0))

        self._message = MessageLabel(self)
        self._message.grid(row=2, column=0, sticky="ew", padx=12, pady=(4, 0))

        self._error_label = ctk.CTkLabel(
            self, text="", anchor="w", text_color=LEVEL_COLORS["error"],
        )
        self._error_label.grid(row=3, column=0, sticky="ew", padx=12)

        self._scroll = ctk.CTkScrollableFrame(self, height=220)
        self._scroll.grid(row=4, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)

    def _on_typing(self):
        if not self._clearing:
            self._binding.clear_message(self._kind)
        self._sync_add_button()

    def _sync_add_button(self, enabled: bool | None = None):
        if enabled is not None:
            self._add_enabled = enabled
        usable = self._add_enabled and bool(self._name_var.get().strip())
        self._add_btn.configure(state="normal" if usable else "disabled")

    def _on_add(self):
        if self._add_btn.cget("state") == "disabled":
            return
        self._binding.add_option(
            self._kind, self._name_var.get(),
            on_added=self._after_add,
        )

    def _after_add(self, _name: str):
        self._clearing = True
        try:
            self._name_var.set("")
        finally:
            self._clearing = False

    def _on_delete(self, option: ConfigOption):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            title=f"Delete {self._item_label}",
            message=f"Delete '{option.name}'?",
            detail="Existing records keep their label, but it won't appear in new dropdowns.",
        )
        if dlg.result:
            self._binding.delete_option(self._kind, option)

    def render(self, state: AppState):
        options = state.options(self._kind)
        controls = list_manager_controls(state, self._kind)

        self._name_entry.configure(state="normal" if controls.add_enabled else "disabled")
        self._sync_add_button(controls.add_enabled)
        self._message.show(options.message)
        self._error_label.configure(text=controls.error_text)

        key = (options.options, controls.delete_enabled, controls.show_empty_notice)
        if key == self._rendered_options:
            return
        self._rendered_options = key

        for w in self._scroll.winfo_children():
            w.destroy()

        if controls.show_empty_notice:
            ctk.CTkLabel(
                self._scroll, text=f"No {self._item_label.lower()}s defined yet.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        for idx, option in enumerate(options.options):
            row = ctk.CTkFrame(self._scroll, fg_color=("gray92", "gray22"), corner_radius=6)
            row.grid(row=idx, column=0, sticky="ew", padx=4, pady=2)
            row.grid_columnconfigure(0, weight=1)
            ctk.CTkLabel(row, text=option.name, anchor="w").grid(
                row=0, column=0, sticky="ew", padx=10, pady=6
            )
            ctk.CTkButton(
                row, text="Delete", width=65, height=26,
                fg_color="#F44336", hover_color="#D32F2F",
                state="normal" if controls.delete_enabled else "disabled",
                command=lambda o=option: self._on_delete(o),
            ).grid(row=0, column=1, padx=(4, 10), pady=4)
