from typing import Any, Callable, Protocol

Work = Callable[[], Any]
Done = Callable[[Any, BaseException | None], None]


class TaskRunner(Protocol):
    """Where backend calls run and where their results are delivered.

    `run` performs `work` without blocking the UI and later calls
    `on_done(result, None)` or `on_done(None, error)` on the UI thread.
    `post` schedules `fn` on the UI thread.
    """

    def run(self, work: Work, on_done: Done) -> None: ...

    def post(self, fn: Callable[[], None]) -> None: ...


class ImmediateRunner:
    """Runs everything inline on the calling thread."""

    def run(self, work: Work, on_done: Done) -> None:
        try:
            result = work()
        except Exception as e:
            on_done(None, e)
            return
        on_done(result, None)

    def post(self, fn: Callable[[], None]) -> None:
        fn()
