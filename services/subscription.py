import logging
from typing import Callable

from services.tasks import TaskRunner

logger = logging.getLogger(__name__)


class Subscription:
    """Disposer for a change subscription that may still be opening.

    Disposing before the backend confirmed the subscription releases it as soon
    as it arrives. Disposing twice is a no-op.
    """

    def __init__(self, label: str):
        self.label = label
        self._release: Callable[[], None] | None = None
        self._disposed = False

    @property
    def active(self) -> bool:
        return not self._disposed

    def attach(self, release: Callable[[], None]):
        if self._disposed:
            release()
        else:
            self._release = release

    def dispose(self):
        if self._disposed:
            return
        self._disposed = True
        release, self._release = self._release, None
        if release is not None:
            release()
            logger.debug("Released subscription %s", self.label)

    __call__ = dispose


def open_subscription(
    runner: TaskRunner,
    subscribe: Callable[[Callable[[], None]], Callable[[], None]],
    on_change: Callable[[], None],
    label: str,
) -> Subscription:
    """Subscribe in the background and route notifications to the UI thread."""
    sub = Subscription(label)

    def notify():
        runner.post(lambda: on_change() if sub.active else None)

    def done(release, error):
        if error is not None:
            logger.error("Could not subscribe to %s changes: %s", label, error)
            return
        sub.attach(release)

    runner.run(lambda: subscribe(notify), done)
    return sub
