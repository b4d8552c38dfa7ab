from database.errors import BackendError, DuplicateOptionError
from database.table_client import Disposer, TableClient
from models.config_option import ConfigOption


class ConfigOptionDAO:
    """Rows of one configuration list table (service types or expense categories)."""

    def __init__(self, client: TableClient, table: str):
        self._client = client
        self.table = table

    def _row_to_model(self, row) -> ConfigOption:
        return ConfigOption(id=row["id"], name=row["name"])

    def get_all(self) -> list[ConfigOption]:
        rows = self._client.select(self.table, columns="id, name", order_by="name")
        return [self._row_to_model(r) for r in rows]

    def create(self, name: str) -> ConfigOption:
        try:
            row = self._client.insert(self.table, {"name": name})
        except BackendError as e:
            if e.is_unique_violation:
                raise DuplicateOptionError(name, e.message, e.code) from e
            raise
        return self._row_to_model(row)

    def delete(self, option_id):
        self._client.delete(self.table, "id", option_id)

    def subscribe(self, on_change) -> Disposer:
        return self._client.subscribe(self.table, on_change)
