from database.table_client import Disposer, TableClient
from models.service_record import ServiceRecord
from utils.constants import HISTORY_LIMIT, SERVICE_TABLE


class ServiceRecordDAO:
    def __init__(self, client: TableClient, table: str = SERVICE_TABLE):
        self._client = client
        self.table = table

    def _row_to_model(self, row) -> ServiceRecord:
        amount = row.get("amount")
        return ServiceRecord(
            id=row["id"],
            registration_number=row.get("regNumber") or "",
            service_type=row.get("serviceType") or "",
            notes=row.get("notes") or "",
            amount=float(amount) if amount is not None else None,
            payment_mode=row.get("paymentMode") or "",
            date_of_service=row.get("dateOfService") or "",
            recorded_by=row.get("recordedBy") or "",
            created_at=row.get("created_at") or "",
        )

    def get_recent(self, limit: int = HISTORY_LIMIT) -> list[ServiceRecord]:
        """Newest first by server creation time."""
        rows = self._client.select(
            self.table, order_by="created_at", descending=True, limit=limit
        )
        return [self._row_to_model(r) for r in rows]

    def create(self, row: dict) -> ServiceRecord:
        return self._row_to_model(self._client.insert(self.table, row))

    def subscribe(self, on_change) -> Disposer:
        return self._client.subscribe(self.table, on_change)
