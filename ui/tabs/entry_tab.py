import customtkinter as ctk

from services.entry_forms import EntryFormController
from services.state import AppState, parse_amount
from services.view_models import form_controls
from ui.components.date_picker import DatePickerWidget
from ui.components.message_label import MessageLabel


class EntryTab(ctk.CTkFrame):
    """Entry form on the left, history list on the right.

    Widgets push every edit to the controller; render() copies the draft back
    only where the widget disagrees with it (e.g. after a reset).
    """

    heading = ""
    submit_text = "Save"

    def __init__(self, master, controller: EntryFormController, date_format: str, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctrl = controller
        self._form = controller.form
        self._date_format = date_format
        self._vars: dict[str, ctk.StringVar] = {}
        self._syncing = False

        self.grid_columnconfigure(0, weight=0, minsize=420)
        self.grid_columnconfigure(1, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self._panel = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        self._panel.grid(row=0, column=0, sticky="nsew", padx=8, pady=8)
        self._panel.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            self._panel, text=self.heading, anchor="w",
            font=ctk.CTkFont(size=18, weight="bold"),
        ).grid(row=0, column=0, columnspan=2, sticky="ew", padx=16, pady=(12, 8))

        r = self._build_fields(1)

        self._message = MessageLabel(self._panel)
        self._message.grid(row=r, column=0, columnspan=2, sticky="ew", padx=16, pady=(8, 4))
        r += 1

        self._submit_btn = ctk.CTkButton(
            self._panel, text=self.submit_text, command=self._ctrl.submit,
        )
        self._submit_btn.grid(row=r, column=0, columnspan=2, sticky="ew", padx=16, pady=(4, 16))

        self._history = self._build_history()
        self._history.grid(row=0, column=1, sticky="nsew")

    # ── Builders ─────────────────────────────────────────────────────────────
    def _build_fields(self, start_row: int) -> int:
        raise NotImplementedError

    def _build_history(self):
        raise NotImplementedError

    def _label(self, text, row):
        ctk.CTkLabel(self._panel, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    def _entry(self, field: str, row: int) -> ctk.CTkEntry:
        var = ctk.StringVar()
        var.trace_add("write", lambda *_: self._on_text(field))
        self._vars[field] = var
        entry = ctk.CTkEntry(self._panel, textvariable=var)
        entry.grid(row=row, column=1, padx=(0, 16), pady=4, sticky="ew")
        return entry

    def _combo(self, field: str, row: int, values: list[str]) -> ctk.CTkComboBox:
        combo = ctk.CTkComboBox(
            self._panel, values=values, state="readonly",
            command=lambda value: self._ctrl.on_field_change(field, value),
        )
        combo.grid(row=row, column=1, padx=(0, 16), pady=4, sticky="ew")
        return combo

    def _date(self, field: str, row: int) -> DatePickerWidget:
        picker = DatePickerWidget(
            self._panel, date_format=self._date_format,
            on_change=lambda iso: self._ctrl.on_field_change(field, iso),
        )
        picker.grid(row=row, column=1, padx=(0, 16), pady=4, sticky="w")
        return picker

    def _on_text(self, field: str):
        if self._syncing:
            return
        self._ctrl.on_field_change(field, self._vars[field].get())

    # ── Render ───────────────────────────────────────────────────────────────
    def render(self, state: AppState):
        draft = state.draft(self._form)
        controls = form_controls(state, self._form)

        self._syncing = True
        try:
            for field, var in self._vars.items():
                value = getattr(draft, field)
                if field == "amount":
                    if parse_amount(var.get()) != value:
                        var.set("" if value == "" else f"{value:g}")
                elif var.get() != value:
                    var.set(value)
            self._sync_widgets(draft)
        finally:
            self._syncing = False

        selector = self._selector
        selector.configure(values=controls.selector_values or [controls.selector_value])
        selector.set(controls.selector_value)
        selector.configure(state="readonly" if controls.selector_enabled else "disabled")
        self._submit_btn.configure(state="normal" if controls.submit_enabled else "disabled")
        self._date_picker.configure_state(controls.inputs_enabled)

        self._message.show(state.message(self._form))
        self._history.render(state)

    def _sync_widgets(self, draft):
        """Copy non-text draft fields (dates, static combos) onto widgets."""
