from typing import Any, Callable, Protocol

Row = dict[str, Any]
Disposer = Callable[[], None]


class TableClient(Protocol):
    """Generic row access to named backend tables.

    Every method raises database.errors.BackendError on failure.
    `subscribe` calls `on_change` after any insert, update or delete on
    `table`, possibly from another thread, and returns a callable that
    removes the subscription.
    """

    def select(
        self,
        table: str,
        columns: str = "*",
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]: ...

    def insert(self, table: str, row: Row) -> Row: ...

    def delete(self, table: str, column: str, value: Any) -> None: ...

    def subscribe(self, table: str, on_change: Callable[[], None]) -> Disposer: ...

    def close(self) -> None: ...
