import customtkinter as ctk

from services.history import DISCONNECTED, EMPTY, LOADING, history_view_status
from services.state import AppState
from utils.constants import LEVEL_COLORS
from utils.currency import format_currency
from utils.date_helpers import format_display_date, format_timestamp


def _short_user(user_id: str) -> str:
    return f"{user_id[:8]}..." if user_id else "N/A"


class HistoryList(ctk.CTkFrame):
    """Read-only, newest-first cards for one record table."""

    def __init__(self, master, form: str, title: str, noun: str,
                 amount_color: str, date_format: str = "DD/MM/YYYY", **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._form = form
        self._title = title
        self._noun = noun
        self._amount_color = amount_color
        self._date_format = date_format
        self._rendered = None   # (status, rows) last drawn

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._title_label = ctk.CTkLabel(
            self, text=title, anchor="w",
            font=ctk.CTkFont(size=18, weight="bold"),
        )
        self._title_label.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 4))

        self._error_label = ctk.CTkLabel(
            self, text="", anchor="w", text_color=LEVEL_COLORS["error"],
        )
        self._error_label.grid(row=1, column=0, sticky="ew", padx=8)

        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def render(self, state: AppState):
        history = state.history(self._form)
        status = history_view_status(state, self._form)
        self._title_label.configure(text=f"{self._title} ({len(history.rows)})")
        self._error_label.configure(text=history.error or "")

        if self._rendered is not None and self._rendered == (status, history.rows):
            return
        self._rendered = (status, history.rows)

        for w in self._scroll.winfo_children():
            w.destroy()

        notice = {
            DISCONNECTED: "Not connected to the database.",
            LOADING: f"Loading {self._noun} history...",
            EMPTY: f"No {self._noun} records found. Start by logging a new entry!",
        }.get(status)
        if notice:
            ctk.CTkLabel(self._scroll, text=notice, text_color="gray60").grid(
                row=0, column=0, pady=40
            )
            return

        for idx, record in enumerate(history.rows):
            self._add_card(idx, record)

    def _add_card(self, idx: int, record):
        card = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        card.grid(row=idx, column=0, sticky="ew", padx=4, pady=4)
        card.grid_columnconfigure(0, weight=1)

        heading, detail, record_date, notes = self.describe(record)

        top = ctk.CTkFrame(card, fg_color="transparent")
        top.grid(row=0, column=0, sticky="ew", padx=10, pady=(8, 0))
        top.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            top, text=heading, anchor="w",
            font=ctk.CTkFont(size=15, weight="bold"),
        ).grid(row=0, column=0, sticky="w")
        ctk.CTkLabel(
            top, text=f"Date: {format_display_date(record_date, self._date_format)}",
            text_color="gray60",
        ).grid(row=0, column=1, sticky="e")

        if detail:
            ctk.CTkLabel(card, text=detail, anchor="w").grid(
                row=1, column=0, sticky="w", padx=10
            )

        ctk.CTkLabel(
            card, text=format_currency(record.amount), anchor="w",
            text_color=self._amount_color,
            font=ctk.CTkFont(size=18, weight="bold"),
        ).grid(row=2, column=0, sticky="w", padx=10)

        r = 3
        if notes:
            ctk.CTkLabel(card, text=notes, anchor="w", justify="left",
                         wraplength=420, text_color="gray50").grid(
                row=r, column=0, sticky="w", padx=10
            )
            r += 1

        ctk.CTkLabel(
            card,
            text=f"Recorded By: {_short_user(record.recorded_by)}    "
                 f"Logged: {format_timestamp(record.created_at)}",
            anchor="w", text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=r, column=0, sticky="w", padx=10, pady=(0, 8))

    def describe(self, record) -> tuple[str, str, str, str]:
        """(heading, detail line, record date, notes) for one card."""
        raise NotImplementedError


class ServiceHistoryList(HistoryList):
    def describe(self, record):
        return (
            record.registration_number,
            f"{record.service_type}  ·  {record.payment_mode}",
            record.date_of_service,
            f"Notes: {record.notes}" if record.notes else "",
        )


class ExpenseHistoryList(HistoryList):
    def describe(self, record):
        return (
            record.category,
            "",
            record.date_of_expense,
            record.description,
        )
