# tests/test_supabase_client.py
from __future__ import annotations

import asyncio
import threading

import httpx
import pytest
from postgrest.exceptions import APIError

from database.errors import BackendError
from database.expense_record_dao import ExpenseRecordDAO
from database.supabase_client import SupabaseTableClient
from services.entry_forms import ExpenseFormController
from models.config_option import ConfigOption
from services.state import FieldChanged, OptionsLoaded
from utils.constants import EXPENSE, EXPENSE_CATEGORIES, EXPENSE_TABLE


class _Query:
    def __init__(self, error: Exception | None, data=None):
        self._error = error
        self._data = data or []

    def __getattr__(self, _name):
        # select/insert/delete/order/limit/eq all chain back to the same query
        return lambda *args, **kwargs: self

    async def execute(self):
        if self._error is not None:
            raise self._error
        return type("Response", (), {"data": self._data})()


class _AsyncClient:
    def __init__(self, error: Exception | None = None, data=None):
        self.error = error
        self.data = data
        self.removed_all = threading.Event()

    def table(self, _name):
        return _Query(self.error, self.data)

    async def remove_all_channels(self):
        self.removed_all.set()


@pytest.fixture
def loop():
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()
    yield loop, thread
    if loop.is_running():
        loop.call_soon_threadsafe(loop.stop)
    thread.join(timeout=5)
    loop.close()


def test_network_error_becomes_backend_error(loop):
    client = SupabaseTableClient(
        _AsyncClient(httpx.ConnectError("[Errno 111] Connection refused")), *loop
    )

    with pytest.raises(BackendError) as exc:
        client.insert(EXPENSE_TABLE, {"category": "Rent"})

    assert "Connection refused" in exc.value.message


def test_api_error_keeps_code(loop):
    error = APIError({"message": "duplicate key", "code": "23505"})
    client = SupabaseTableClient(_AsyncClient(error), *loop)

    with pytest.raises(BackendError) as exc:
        client.select(EXPENSE_TABLE)

    assert exc.value.is_unique_violation


def test_network_error_shown_verbatim_on_submit(loop, store, runner):
    client = SupabaseTableClient(
        _AsyncClient(httpx.ConnectError("[Errno 111] Connection refused")), *loop
    )
    form = ExpenseFormController(store, ExpenseRecordDAO(client), runner)
    store.dispatch(OptionsLoaded(EXPENSE_CATEGORIES, (ConfigOption(1, "Rent"),), 1))
    store.dispatch(FieldChanged(EXPENSE, "amount", "250"))

    form.submit()

    assert store.state.expense_message.text == (
        "Error: Failed to record expense. [Errno 111] Connection refused"
    )


def test_close_does_not_wait_for_the_network(loop):
    fake = _AsyncClient()
    client = SupabaseTableClient(fake, *loop)

    client.close()

    assert fake.removed_all.wait(timeout=5)
    loop[1].join(timeout=5)
    assert not loop[1].is_alive()
