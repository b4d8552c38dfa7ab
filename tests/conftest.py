# tests/conftest.py
from __future__ import annotations

import pytest

from database.config_option_dao import ConfigOptionDAO
from database.expense_record_dao import ExpenseRecordDAO
from database.service_record_dao import ServiceRecordDAO
from services.config_binding import ConfigBinding
from services.entry_forms import ExpenseFormController, ServiceFormController
from services.history import HistoryFeed
from services.state import AppState
from services.store import Store
from services.tasks import ImmediateRunner
from tests.fakes import FakeTableClient
from utils.constants import (
    EXPENSE, EXPENSE_CATEGORIES, EXPENSE_CATEGORY_TABLE, SERVICE, SERVICE_TYPES,
    SERVICE_TYPE_TABLE,
)

TEST_USER = "test-app-anon-user"


@pytest.fixture
def client() -> FakeTableClient:
    return FakeTableClient()


@pytest.fixture
def store() -> Store:
    return Store(AppState(user_id=TEST_USER))


@pytest.fixture
def runner() -> ImmediateRunner:
    return ImmediateRunner()


def make_binding(store, client, runner) -> ConfigBinding:
    """
    ConfigBinding wired to both config tables of `client`.
    """
    return ConfigBinding(
        store,
        {
            SERVICE_TYPES: ConfigOptionDAO(client, SERVICE_TYPE_TABLE),
            EXPENSE_CATEGORIES: ConfigOptionDAO(client, EXPENSE_CATEGORY_TABLE),
        },
        runner,
    )


@pytest.fixture
def binding(store, client, runner) -> ConfigBinding:
    return make_binding(store, client, runner)


@pytest.fixture
def service_form(store, client, runner) -> ServiceFormController:
    return ServiceFormController(store, ServiceRecordDAO(client), runner)


@pytest.fixture
def expense_form(store, client, runner) -> ExpenseFormController:
    return ExpenseFormController(store, ExpenseRecordDAO(client), runner)


@pytest.fixture
def service_feed(store, client, runner) -> HistoryFeed:
    return HistoryFeed(store, SERVICE, ServiceRecordDAO(client), runner)


@pytest.fixture
def expense_feed(store, client, runner) -> HistoryFeed:
    return HistoryFeed(store, EXPENSE, ExpenseRecordDAO(client), runner)


def seed_options(client: FakeTableClient, table: str, *names: str) -> None:
    client.seed(table, *({"name": n} for n in names))
