"""Application state and the pure transitions applied to it.

Every change to what the window shows goes through ``reduce(state, event)``.
Fetch results, insert outcomes and field edits are all events, so the whole
binding layer can be exercised without Tk or a real backend.
"""
import math
from dataclasses import dataclass, field, fields, replace

from models.config_option import ConfigOption
from models.draft import EMPTY_AMOUNT, ExpenseDraft, ServiceDraft
from models.message import Message
from utils.constants import (
    DEFAULT_USER_ID, EXPENSE, EXPENSE_CATEGORIES, SERVICE, SERVICE_TYPES, TABS,
)

LOADING = "loading"
READY = "ready"

FORM_OPTION_KIND = {
    SERVICE: SERVICE_TYPES,
    EXPENSE: EXPENSE_CATEGORIES,
}
OPTION_KIND_FORM = {kind: form for form, kind in FORM_OPTION_KIND.items()}


# ── State ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OptionListState:
    options: tuple[ConfigOption, ...] = ()
    status: str = LOADING
    error: str | None = None        # set alongside READY when a refetch failed
    requested_seq: int = 0
    applied_seq: int = 0
    message: Message | None = None  # list manager feedback

    @property
    def is_loading(self) -> bool:
        return self.status == LOADING

    @property
    def names(self) -> list[str]:
        return [o.name for o in self.options]


@dataclass(frozen=True)
class HistoryState:
    rows: tuple = ()
    status: str = LOADING
    error: str | None = None
    requested_seq: int = 0
    applied_seq: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status == LOADING


@dataclass(frozen=True)
class AppState:
    user_id: str = DEFAULT_USER_ID
    connected: bool = True
    connection_error: str | None = None
    active_tab: str = TABS[0]
    service_types: OptionListState = field(default_factory=OptionListState)
    expense_categories: OptionListState = field(default_factory=OptionListState)
    service_draft: ServiceDraft = field(default_factory=ServiceDraft)
    expense_draft: ExpenseDraft = field(default_factory=ExpenseDraft)
    service_message: Message | None = None
    expense_message: Message | None = None
    service_history: HistoryState = field(default_factory=HistoryState)
    expense_history: HistoryState = field(default_factory=HistoryState)

    def options(self, kind: str) -> OptionListState:
        return getattr(self, _option_attr(kind))

    def history(self, form: str) -> HistoryState:
        return getattr(self, _form_attr(form, "history"))

    def draft(self, form: str):
        return getattr(self, _form_attr(form, "draft"))

    def message(self, form: str) -> Message | None:
        return getattr(self, _form_attr(form, "message"))


def _option_attr(kind: str) -> str:
    if kind not in OPTION_KIND_FORM:
        raise ValueError(f"Unknown option list '{kind}'")
    return kind


def _form_attr(form: str, suffix: str) -> str:
    if form not in FORM_OPTION_KIND:
        raise ValueError(f"Unknown form '{form}'")
    return f"{form}_{suffix}"


# ── Events ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ConnectionFailed:
    reason: str


@dataclass(frozen=True)
class TabSelected:
    tab: str


@dataclass(frozen=True)
class OptionsRequested:
    kind: str


@dataclass(frozen=True)
class OptionsLoaded:
    kind: str
    options: tuple[ConfigOption, ...]
    seq: int


@dataclass(frozen=True)
class OptionsFailed:
    kind: str
    error: str
    seq: int


@dataclass(frozen=True)
class OptionMessage:
    kind: str
    message: Message | None


@dataclass(frozen=True)
class HistoryRequested:
    form: str


@dataclass(frozen=True)
class HistoryLoaded:
    form: str
    rows: tuple
    seq: int


@dataclass(frozen=True)
class HistoryFailed:
    form: str
    error: str
    seq: int


@dataclass(frozen=True)
class FieldChanged:
    form: str
    field: str
    value: object


@dataclass(frozen=True)
class SubmitStarted:
    form: str


@dataclass(frozen=True)
class SubmitRejected:
    form: str
    message: Message


@dataclass(frozen=True)
class SubmitSucceeded:
    form: str
    message: Message


@dataclass(frozen=True)
class SubmitFailed:
    form: str
    message: Message


# ── Draft helpers ────────────────────────────────────────────────────────────

def parse_amount(raw) -> float | str:
    """Float value of an amount input, or the empty sentinel if it isn't a number."""
    if isinstance(raw, bool):
        return EMPTY_AMOUNT
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw or "").strip()
        if not text:
            return EMPTY_AMOUNT
        try:
            value = float(text)
        except ValueError:
            return EMPTY_AMOUNT
    if not math.isfinite(value):
        return EMPTY_AMOUNT
    return value


def apply_field_change(draft, field_name: str, raw):
    names = {f.name for f in fields(draft)}
    if field_name not in names:
        raise ValueError(f"Unknown field '{field_name}' for {type(draft).__name__}")
    if field_name == "amount":
        value = parse_amount(raw)
    else:
        value = "" if raw is None else str(raw)
    return replace(draft, **{field_name: value})


def reconcile_default(draft, options):
    """Point the draft's selector at a current option.

    A selection that no longer exists is cleared; an empty selection takes the
    first option. A valid selection made by the user is left alone.
    """
    selector = draft.SELECTOR
    current = getattr(draft, selector)
    names = [o.name for o in options]
    value = current
    if value and value not in names:
        value = ""
    if not value and names:
        value = names[0]
    if value == current:
        return draft
    return replace(draft, **{selector: value})


def reset_draft(draft):
    """Fresh draft of the same kind that keeps the chosen selector value."""
    selector = draft.SELECTOR
    return type(draft)(**{selector: getattr(draft, selector)})


# ── Reducer ──────────────────────────────────────────────────────────────────

def _on_connection_failed(state: AppState, event: ConnectionFailed) -> AppState:
    return replace(
        state,
        connected=False,
        connection_error=event.reason,
        service_types=replace(state.service_types, status=READY),
        expense_categories=replace(state.expense_categories, status=READY),
        service_history=replace(state.service_history, status=READY),
        expense_history=replace(state.expense_history, status=READY),
    )


def _on_tab_selected(state: AppState, event: TabSelected) -> AppState:
    if event.tab not in TABS:
        raise ValueError(f"Unknown tab '{event.tab}'")
    if event.tab == state.active_tab:
        return state
    return replace(state, active_tab=event.tab)


def _on_options_requested(state: AppState, event: OptionsRequested) -> AppState:
    lst = state.options(event.kind)
    return replace(state, **{
        _option_attr(event.kind): replace(lst, requested_seq=lst.requested_seq + 1),
    })


def _on_options_loaded(state: AppState, event: OptionsLoaded) -> AppState:
    lst = state.options(event.kind)
    if event.seq <= lst.applied_seq:
        return state
    lst = replace(
        lst,
        options=tuple(event.options),
        status=READY,
        error=None,
        applied_seq=event.seq,
    )
    form = OPTION_KIND_FORM[event.kind]
    draft = reconcile_default(state.draft(form), lst.options)
    return replace(state, **{
        _option_attr(event.kind): lst,
        _form_attr(form, "draft"): draft,
    })


def _on_options_failed(state: AppState, event: OptionsFailed) -> AppState:
    lst = state.options(event.kind)
    if event.seq <= lst.applied_seq:
        return state
    # keep the previous options; the error flag rides alongside READY
    return replace(state, **{
        _option_attr(event.kind): replace(lst, status=READY, error=event.error),
    })


def _on_option_message(state: AppState, event: OptionMessage) -> AppState:
    lst = state.options(event.kind)
    return replace(state, **{_option_attr(event.kind): replace(lst, message=event.message)})


def _on_history_requested(state: AppState, event: HistoryRequested) -> AppState:
    hist = state.history(event.form)
    return replace(state, **{
        _form_attr(event.form, "history"): replace(hist, requested_seq=hist.requested_seq + 1),
    })


def _on_history_loaded(state: AppState, event: HistoryLoaded) -> AppState:
    hist = state.history(event.form)
    if event.seq <= hist.applied_seq:
        return state
    hist = replace(hist, rows=tuple(event.rows), status=READY, error=None, applied_seq=event.seq)
    return replace(state, **{_form_attr(event.form, "history"): hist})


def _on_history_failed(state: AppState, event: HistoryFailed) -> AppState:
    hist = state.history(event.form)
    if event.seq <= hist.applied_seq:
        return state
    return replace(state, **{
        _form_attr(event.form, "history"): replace(hist, status=READY, error=event.error),
    })


def _on_field_changed(state: AppState, event: FieldChanged) -> AppState:
    draft = apply_field_change(state.draft(event.form), event.field, event.value)
    return replace(state, **{_form_attr(event.form, "draft"): draft})


def _on_submit_started(state: AppState, event: SubmitStarted) -> AppState:
    if state.message(event.form) is None:
        return state
    return replace(state, **{_form_attr(event.form, "message"): None})


def _on_submit_rejected(state: AppState, event: SubmitRejected) -> AppState:
    return replace(state, **{_form_attr(event.form, "message"): event.message})


def _on_submit_succeeded(state: AppState, event: SubmitSucceeded) -> AppState:
    return replace(state, **{
        _form_attr(event.form, "draft"): reset_draft(state.draft(event.form)),
        _form_attr(event.form, "message"): event.message,
    })


_HANDLERS = {
    ConnectionFailed: _on_connection_failed,
    TabSelected: _on_tab_selected,
    OptionsRequested: _on_options_requested,
    OptionsLoaded: _on_options_loaded,
    OptionsFailed: _on_options_failed,
    OptionMessage: _on_option_message,
    HistoryRequested: _on_history_requested,
    HistoryLoaded: _on_history_loaded,
    HistoryFailed: _on_history_failed,
    FieldChanged: _on_field_changed,
    SubmitStarted: _on_submit_started,
    SubmitRejected: _on_submit_rejected,
    SubmitSucceeded: _on_submit_succeeded,
    SubmitFailed: _on_submit_rejected,
}


def reduce(state: AppState, event) -> AppState:
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unhandled event {type(event).__name__}")
    return handler(state, event)
