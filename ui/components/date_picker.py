import tkinter as tk
from datetime import date
from tkinter import ttk

import customtkinter as ctk
from tkcalendar import Calendar

from utils.constants import LEVEL_COLORS
from utils.date_helpers import format_date, format_display_date, parse_date, parse_display_date

_NORMAL_BORDER = ("gray65", "gray35")


class DatePickerWidget(ctk.CTkFrame):
    """Date field for the entry forms: typed text in display format, or a calendar popup.

    The value exchanged with the form is always a YYYY-MM-DD string. Text that
    does not parse is passed through unchanged so the form can reject it, and
    the field border turns red until it is corrected.
    """

    def __init__(self, master, initial_date: str = "", date_format: str = "DD/MM/YYYY",
                 on_change=None, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._date_format = date_format
        self._on_change = on_change
        self._popup: ctk.CTkToplevel | None = None

        self._text = tk.StringVar()
        self._field = ctk.CTkEntry(self, textvariable=self._text, width=130)
        self._field.grid(row=0, column=0, sticky="ew")
        for seq in ("<FocusOut>", "<Return>"):
            self._field.bind(seq, self._commit)

        self._toggle = ctk.CTkButton(self, text="📅", width=32, command=self._toggle_popup)
        self._toggle.grid(row=0, column=1, padx=(4, 0))

        self.set(initial_date)

    # ── Value ────────────────────────────────────────────────────────────────
    def _typed_date(self) -> date | None:
        return parse_display_date(self._text.get(), self._date_format)

    def get(self) -> str:
        d = self._typed_date()
        return format_date(d) if d else self._text.get().strip()

    def set(self, iso: str):
        self._text.set(format_display_date(iso or "", self._date_format))
        self._mark(valid=True)

    def configure_state(self, enabled: bool):
        for widget in (self._field, self._toggle):
            widget.configure(state="normal" if enabled else "disabled")

    def _mark(self, valid: bool):
        self._field.configure(border_color=_NORMAL_BORDER if valid else LEVEL_COLORS["error"])

    def _commit(self, _event=None):
        d = self._typed_date()
        if d:
            self.set(format_date(d))
        else:
            self._mark(valid=not self._text.get().strip())
        if self._on_change:
            self._on_change(self.get())

    # ── Calendar popup ───────────────────────────────────────────────────────
    def _toggle_popup(self):
        if self._popup is not None and self._popup.winfo_exists():
            self._close_popup()
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.bind("<Escape>", lambda _e: self._close_popup())
        self._popup = popup

        dark = ctk.get_appearance_mode() == "Dark"
        bg, fg = ("#2b2b2b", "#ffffff") if dark else ("#ffffff", "#000000")
        ttk.Style(popup).theme_use("default")

        start = self._typed_date() or date.today()
        cal = Calendar(
            popup, selectmode="day", date_pattern="yyyy-mm-dd",
            year=start.year, month=start.month, day=start.day,
            background=bg, foreground=fg, bordercolor=bg,
            headersbackground=bg, headersforeground=fg,
            weekendbackground=bg, weekendforeground=fg,
            othermonthforeground="gray60", selectbackground="#1f6aa5",
        )
        cal.pack(padx=4, pady=(4, 0))
        cal.bind("<<CalendarSelected>>", lambda _e: self._pick(cal.get_date()))

        ctk.CTkButton(
            popup, text="Today", height=24,
            command=lambda: self._pick(format_date(date.today())),
        ).pack(fill="x", padx=4, pady=4)

        self._field.update_idletasks()
        popup.geometry(
            f"+{self._field.winfo_rootx()}"
            f"+{self._field.winfo_rooty() + self._field.winfo_height() + 2}"
        )

    def _pick(self, iso: str):
        # Calendar is pinned to yyyy-mm-dd
        self.set(iso)
        self._close_popup()
        if self._on_change:
            self._on_change(iso)

    def _close_popup(self):
        if self._popup is not None:
            self._popup.destroy()
        self._popup = None
