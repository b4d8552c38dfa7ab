# tests/test_entry_forms.py
from __future__ import annotations

import pytest

from database.errors import BackendError
from models.draft import EMPTY_AMOUNT, ExpenseDraft, ServiceDraft
from models.message import ERROR, SUCCESS, VALIDATION
from services.state import ConnectionFailed
from tests.conftest import TEST_USER, seed_options
from utils.constants import EXPENSE_CATEGORY_TABLE, EXPENSE_TABLE, SERVICE_TABLE, SERVICE_TYPE_TABLE


@pytest.fixture
def ready(binding, client):
    seed_options(client, SERVICE_TYPE_TABLE, "Oil Change", "Tyre Rotation")
    seed_options(client, EXPENSE_CATEGORY_TABLE, "Rent", "Utilities")
    binding.start()
    client.calls.clear()
    return binding


def fill_service(form, amount="1500"):
    form.on_field_change("registration_number", "  ka-01 ab 1234 ")
    form.on_field_change("service_type", "Tyre Rotation")
    form.on_field_change("notes", " rotated all four ")
    form.on_field_change("amount", amount)
    form.on_field_change("payment_mode", "Cash")
    form.on_field_change("date_of_service", "2024-03-05")


@pytest.mark.parametrize("amount", ["0", "-5", "-0.01", "", "abc", "nan", "inf"])
def test_non_positive_amount_never_hits_the_network(ready, store, client, service_form, amount):
    fill_service(service_form, amount)

    service_form.submit()

    assert client.calls == []
    message = store.state.service_message
    assert message.level == VALIDATION
    assert message.text == "Amount must be a positive number."


@pytest.mark.parametrize("amount", ["0", "-12", "", "twelve"])
def test_expense_non_positive_amount(ready, store, client, expense_form, amount):
    expense_form.on_field_change("amount", amount)

    expense_form.submit()

    assert client.calls == []
    assert store.state.expense_message.text == "Amount must be a positive number."


def test_missing_required_fields(ready, store, client, service_form):
    service_form.on_field_change("amount", "100")

    service_form.submit()

    assert client.calls == []
    assert store.state.service_message.text == "Please fill in required service fields."
    assert store.state.service_message.level == VALIDATION


def test_successful_submit_inserts_one_normalised_row(ready, store, client, service_form):
    fill_service(service_form)

    service_form.submit()

    assert client.calls_for("insert", SERVICE_TABLE) == 1
    row = client.tables[SERVICE_TABLE][0]
    assert row["regNumber"] == "KA-01 AB 1234"
    assert row["serviceType"] == "Tyre Rotation"
    assert row["notes"] == "rotated all four"
    assert row["amount"] == 1500.0
    assert row["paymentMode"] == "Cash"
    assert row["dateOfService"] == "2024-03-05"
    assert row["recordedBy"] == TEST_USER


def test_successful_submit_resets_all_but_service_type(ready, store, service_form):
    fill_service(service_form)
    before = store.state.service_draft.service_type

    service_form.submit()

    draft = store.state.service_draft
    defaults = ServiceDraft()
    assert draft.service_type == before
    assert draft.registration_number == defaults.registration_number
    assert draft.notes == defaults.notes
    assert draft.amount == EMPTY_AMOUNT
    assert draft.payment_mode == defaults.payment_mode
    assert draft.date_of_service == defaults.date_of_service
    message = store.state.service_message
    assert message.level == SUCCESS
    assert message.text == "Service entry successfully recorded!"
    assert message.level != ERROR


def test_expense_submit_keeps_category(ready, store, client, expense_form):
    expense_form.on_field_change("category", "Utilities")
    expense_form.on_field_change("amount", "249.5")
    expense_form.on_field_change("description", "  electricity  ")

    expense_form.submit()

    row = client.tables[EXPENSE_TABLE][0]
    assert row["category"] == "Utilities"
    assert row["description"] == "electricity"
    assert row["amount"] == 249.5
    assert store.state.expense_draft.category == "Utilities"
    assert store.state.expense_draft.amount == ExpenseDraft().amount
    assert store.state.expense_message.text == "Expense entry successfully recorded!"


def test_backend_failure_is_prefixed_and_keeps_draft(ready, store, client, service_form):
    client.fail("insert", SERVICE_TABLE, BackendError("new row violates check constraint"))
    fill_service(service_form)

    service_form.submit()

    message = store.state.service_message
    assert message.level == ERROR
    assert message.text == "Error: Failed to record service. new row violates check constraint"
    assert store.state.service_draft.registration_number == "  ka-01 ab 1234 "
    assert client.calls_for("insert") == 1  # no retry


def test_unexpected_failure_is_caught(ready, store, client, expense_form):
    client.fail("insert", EXPENSE_TABLE, RuntimeError("socket closed"))
    expense_form.on_field_change("amount", "10")

    expense_form.submit()

    assert store.state.expense_message.text == "Error: Failed to record expense. Unexpected error."


def test_submit_does_not_add_to_history_optimistically(ready, store, service_form):
    fill_service(service_form)

    service_form.submit()

    assert store.state.service_history.rows == ()


def test_stale_selection_is_rejected(ready, store, client, service_form):
    fill_service(service_form)
    service_form.on_field_change("service_type", "Engine Rebuild")

    service_form.submit()

    assert client.calls == []
    assert store.state.service_message.text == "Selected service type is no longer available."


def test_invalid_date_is_rejected(ready, store, client, expense_form):
    expense_form.on_field_change("amount", "10")
    expense_form.on_field_change("date_of_expense", "31/31/2024")

    expense_form.submit()

    assert client.calls == []
    assert store.state.expense_message.text == "Invalid date."


def test_disconnected_submit_is_refused(store, client, service_form):
    store.dispatch(ConnectionFailed("Supabase URL and key are not configured."))
    fill_service(service_form)

    service_form.submit()

    assert client.calls == []
    assert store.state.service_message.text == "Error: Database connection failed."


def test_date_is_stored_in_column_format(ready, store, client, expense_form):
    expense_form.on_field_change("amount", "10")
    expense_form.on_field_change("date_of_expense", "2024/05/01")

    expense_form.submit()

    assert client.tables[EXPENSE_TABLE][0]["dateOfExpense"] == "2024-05-01"
