"""Live service-type and expense-category lists behind the entry form dropdowns.

Each list is fetched ordered by name, refetched in full whenever the backend
reports a change to its table, and fed through the reducer, which also keeps
the form defaults pointing at a current option.
"""
import logging

from database.config_option_dao import ConfigOptionDAO
from database.errors import BackendError, DuplicateOptionError, ValidationError
from models.config_option import ConfigOption
from models.message import Message
from services.state import (
    OptionMessage, OptionsFailed, OptionsLoaded, OptionsRequested,
)
from services.store import Store
from services.subscription import Subscription, open_subscription
from services.tasks import TaskRunner
from utils.constants import OPTION_KINDS

logger = logging.getLogger(__name__)


def validate_option_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name cannot be empty.")
    return name


class ConfigBinding:
    def __init__(self, store: Store, daos: dict[str, ConfigOptionDAO], runner: TaskRunner):
        self._store = store
        self._daos = daos
        self._runner = runner
        self._subscriptions: dict[str, Subscription] = {}

    def _dao(self, kind: str) -> ConfigOptionDAO:
        try:
            return self._daos[kind]
        except KeyError:
            raise ValueError(f"Unknown option list '{kind}'") from None

    def _say(self, kind: str, message: Message | None):
        self._store.dispatch(OptionMessage(kind, message))

    # ── Lifecycle ────────────────────────────────────────────────────────────
    def start(self):
        for kind in OPTION_KINDS:
            self.load_options(kind)
            self.subscribe(kind)

    def teardown(self):
        for sub in list(self._subscriptions.values()):
            sub.dispose()
        self._subscriptions.clear()

    # ── Fetch / subscribe ────────────────────────────────────────────────────
    def load_options(self, kind: str):
        if not self._store.state.connected:
            logger.debug("Not loading %s: backend not connected", kind)
            return
        dao = self._dao(kind)
        self._store.dispatch(OptionsRequested(kind))
        seq = self._store.state.options(kind).requested_seq

        def done(options, error):
            if error is not None:
                logger.error("Error fetching %s: %s", kind, error)
                self._store.dispatch(OptionsFailed(kind, str(error), seq))
                return
            self._store.dispatch(OptionsLoaded(kind, tuple(options), seq))

        self._runner.run(dao.get_all, done)

    def subscribe(self, kind: str) -> Subscription:
        existing = self._subscriptions.get(kind)
        if existing is not None and existing.active:
            return existing
        if not self._store.state.connected:
            sub = Subscription(kind)
        else:
            dao = self._dao(kind)
            sub = open_subscription(
                self._runner, dao.subscribe, lambda: self.load_options(kind), dao.table
            )
        self._subscriptions[kind] = sub
        return sub

    # ── Mutations ────────────────────────────────────────────────────────────
    def add_option(self, kind: str, name: str, on_added=None):
        self._say(kind, None)
        if not self._store.state.connected:
            self._say(kind, Message.error("Database not connected."))
            return
        dao = self._dao(kind)
        try:
            item = validate_option_name(name)
        except ValidationError as e:
            self._say(kind, Message.validation(str(e)))
            return

        def done(_option, error):
            if error is None:
                self._say(kind, Message.success(f'Successfully added "{item}"!'))
                self.load_options(kind)
                if on_added:
                    on_added(item)
            elif isinstance(error, DuplicateOptionError):
                self._say(kind, Message.error(f'"{item}" already exists.'))
            elif isinstance(error, BackendError):
                logger.error("Error adding %r to %s: %s", item, dao.table, error)
                self._say(kind, Message.error(f"Failed to add: {error.message}"))
            else:
                logger.error("Unexpected error adding %r to %s", item, dao.table,
                             exc_info=error)
                self._say(kind, Message.error("An unexpected error occurred."))

        self._runner.run(lambda: dao.create(item), done)

    def delete_option(self, kind: str, option: ConfigOption):
        self._say(kind, None)
        if not self._store.state.connected:
            self._say(kind, Message.error("Database not connected."))
            return
        dao = self._dao(kind)

        def done(_result, error):
            if error is None:
                self._say(kind, Message.success(f'Successfully deleted "{option.name}".'))
                self.load_options(kind)
            elif isinstance(error, BackendError):
                logger.error("Error deleting %r from %s: %s", option.name, dao.table, error)
                self._say(kind, Message.error(
                    f'Failed to delete "{option.name}". {error.message}'
                ))
            else:
                logger.error("Unexpected error deleting %r from %s", option.name, dao.table,
                             exc_info=error)
                self._say(kind, Message.error("An unexpected error occurred."))

        self._runner.run(lambda: dao.delete(option.id), done)

    def clear_message(self, kind: str):
        if self._store.state.options(kind).message is not None:
            self._say(kind, None)
