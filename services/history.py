import logging

from services.state import AppState, HistoryFailed, HistoryLoaded, HistoryRequested
from services.store import Store
from services.subscription import Subscription, open_subscription
from services.tasks import TaskRunner
from utils.constants import EXPENSE, HISTORY_LIMIT, SERVICE

logger = logging.getLogger(__name__)

DISCONNECTED = "disconnected"
LOADING = "loading"
EMPTY = "empty"
POPULATED = "populated"

_LOAD_ERROR_PREFIX = {
    SERVICE: "Error loading history",
    EXPENSE: "Error loading expenses",
}


def history_view_status(state: AppState, form: str) -> str:
    """What a history list should show, checked in a fixed precedence."""
    if not state.connected:
        return DISCONNECTED
    history = state.history(form)
    if history.is_loading:
        return LOADING
    if not history.rows:
        return EMPTY
    return POPULATED


class HistoryFeed:
    """Newest-first snapshot of one record table, refetched on every change."""

    def __init__(self, store: Store, form: str, dao, runner: TaskRunner,
                 limit: int = HISTORY_LIMIT):
        self._store = store
        self.form = form
        self._dao = dao
        self._runner = runner
        self._limit = limit
        self._subscription: Subscription | None = None

    def mount(self):
        self.refresh()
        if self._subscription is None and self._store.state.connected:
            self._subscription = open_subscription(
                self._runner, self._dao.subscribe, self.refresh, self._dao.table
            )

    def refresh(self):
        if not self._store.state.connected:
            logger.debug("Not loading %s history: backend not connected", self.form)
            return
        self._store.dispatch(HistoryRequested(self.form))
        seq = self._store.state.history(self.form).requested_seq

        def done(rows, error):
            if error is not None:
                logger.error("Error fetching %s history: %s", self.form, error)
                self._store.dispatch(HistoryFailed(
                    self.form, f"{_LOAD_ERROR_PREFIX[self.form]}: {error}", seq
                ))
                return
            self._store.dispatch(HistoryLoaded(self.form, tuple(rows), seq))

        self._runner.run(lambda: self._dao.get_recent(self._limit), done)

    def teardown(self):
        if self._subscription is not None:
            self._subscription.dispose()
