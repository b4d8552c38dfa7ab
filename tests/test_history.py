# tests/test_history.py
from __future__ import annotations

from database.errors import BackendError
from services.history import (
    DISCONNECTED, EMPTY, LOADING, POPULATED, HistoryFeed, history_view_status,
)
from services.state import AppState, ConnectionFailed, reduce
from database.service_record_dao import ServiceRecordDAO
from tests.fakes import DeferredRunner
from utils.constants import EXPENSE, EXPENSE_TABLE, HISTORY_LIMIT, SERVICE, SERVICE_TABLE


def service_row(reg: str, created_at: str) -> dict:
    return {
        "regNumber": reg, "serviceType": "Oil Change", "notes": "", "amount": 500,
        "paymentMode": "Cash", "dateOfService": "2024-02-01", "recordedBy": "u",
        "created_at": created_at,
    }


def test_newest_row_is_listed_first(service_feed, store, client):
    client.seed(SERVICE_TABLE, service_row("OLD-1", "2024-02-01T09:00:00+00:00"))
    client.seed(SERVICE_TABLE, service_row("NEW-2", "2024-02-01T10:00:00+00:00"))

    service_feed.mount()

    regs = [r.registration_number for r in store.state.service_history.rows]
    assert regs == ["NEW-2", "OLD-1"]
    assert history_view_status(store.state, SERVICE) == POPULATED


def test_insert_after_mount_refetches(service_feed, service_form, binding, store, client):
    client.seed("config_services", {"name": "Oil Change"})
    binding.start()
    service_feed.mount()
    assert history_view_status(store.state, SERVICE) == EMPTY

    for reg in ("T1", "T2"):
        service_form.on_field_change("registration_number", reg)
        service_form.on_field_change("amount", "100")
        service_form.submit()

    regs = [r.registration_number for r in store.state.service_history.rows]
    assert regs == ["T2", "T1"]


def test_history_is_capped(expense_feed, store, client):
    for i in range(HISTORY_LIMIT + 5):
        client.seed(EXPENSE_TABLE, {
            "dateOfExpense": "2024-01-01", "category": "Rent", "amount": i + 1,
            "description": "", "recordedBy": "u",
        })

    expense_feed.mount()

    rows = store.state.expense_history.rows
    assert len(rows) == HISTORY_LIMIT
    assert rows[0].amount == float(HISTORY_LIMIT + 5)


def test_status_precedence():
    state = AppState()
    assert history_view_status(state, SERVICE) == LOADING

    state = reduce(state, ConnectionFailed("no client"))
    assert history_view_status(state, SERVICE) == DISCONNECTED


def test_fetch_error_keeps_rows_and_sets_error(service_feed, store, client):
    client.seed(SERVICE_TABLE, service_row("A", "2024-02-01T09:00:00+00:00"))
    service_feed.mount()
    client.fail("select", SERVICE_TABLE, BackendError("timeout"))

    client.notify(SERVICE_TABLE)

    assert len(store.state.service_history.rows) == 1
    assert store.state.service_history.error == "Error loading history: timeout"


def test_expense_fetch_error_names_expenses(expense_feed, store, client):
    client.fail("select", EXPENSE_TABLE, BackendError("timeout"))

    expense_feed.mount()

    assert store.state.expense_history.error == "Error loading expenses: timeout"


def test_teardown_releases_once(service_feed, client):
    service_feed.mount()

    service_feed.teardown()
    service_feed.teardown()

    assert client.released[SERVICE_TABLE] == 1


def test_results_after_close_are_ignored(store, client):
    runner = DeferredRunner()
    feed = HistoryFeed(store, SERVICE, ServiceRecordDAO(client), runner)
    client.seed(SERVICE_TABLE, service_row("A", "2024-02-01T09:00:00+00:00"))
    feed.refresh()

    feed.teardown()
    store.close()
    runner.resolve_all()

    assert store.state.service_history.rows == ()


def test_disconnected_feed_reads_nothing(store, client, expense_feed):
    store.dispatch(ConnectionFailed("missing config"))

    expense_feed.mount()

    assert client.calls == []
    assert history_view_status(store.state, EXPENSE) == DISCONNECTED
