import logging
from typing import Callable

from services.state import AppState, reduce

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]


class Store:
    """Holds the current AppState and feeds events through the reducer."""

    def __init__(self, initial: AppState | None = None):
        self._state = initial or AppState()
        self._listeners: list[Listener] = []
        self._closed = False

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def dispatch(self, event):
        # results that land after teardown must not touch a destroyed view
        if self._closed:
            logger.debug("Ignoring %s after close", type(event).__name__)
            return
        new_state = reduce(self._state, event)
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def close(self):
        self._closed = True
        self._listeners.clear()
