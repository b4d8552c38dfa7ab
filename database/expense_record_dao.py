from database.table_client import Disposer, TableClient
from models.expense_record import ExpenseRecord
from utils.constants import EXPENSE_TABLE, HISTORY_LIMIT


class ExpenseRecordDAO:
    def __init__(self, client: TableClient, table: str = EXPENSE_TABLE):
        self._client = client
        self.table = table

    def _row_to_model(self, row) -> ExpenseRecord:
        amount = row.get("amount")
        return ExpenseRecord(
            id=row["id"],
            date_of_expense=row.get("dateOfExpense") or "",
            category=row.get("category") or "",
            description=row.get("description") or "",
            amount=float(amount) if amount is not None else None,
            recorded_by=row.get("recordedBy") or "",
            created_at=row.get("created_at") or "",
        )

    def get_recent(self, limit: int = HISTORY_LIMIT) -> list[ExpenseRecord]:
        """Newest first by server creation time."""
        rows = self._client.select(
            self.table, order_by="created_at", descending=True, limit=limit
        )
        return [self._row_to_model(r) for r in rows]

    def create(self, row: dict) -> ExpenseRecord:
        return self._row_to_model(self._client.insert(self.table, row))

    def subscribe(self, on_change) -> Disposer:
        return self._client.subscribe(self.table, on_change)
