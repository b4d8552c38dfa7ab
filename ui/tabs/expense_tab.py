from ui.components.history_list import ExpenseHistoryList
from ui.tabs.entry_tab import EntryTab


class ExpenseTab(EntryTab):
    heading = "Record New Expense"
    submit_text = "Record Expense"

    def _build_fields(self, start_row: int) -> int:
        r = start_row

        self._label("Date of Expense:", r)
        self._date_picker = self._date("date_of_expense", r)
        r += 1

        self._label("Category:", r)
        self._selector = self._combo("category", r, [])
        r += 1

        self._label("Amount (INR):", r)
        self._entry("amount", r)
        r += 1

        self._label("Description:", r)
        self._entry("description", r)
        r += 1
        return r

    def _build_history(self):
        return ExpenseHistoryList(
            self, form=self._form, title="Expense History", noun="expense",
            amount_color="#F44336", date_format=self._date_format,
        )

    def _sync_widgets(self, draft):
        if self._date_picker.get() != draft.date_of_expense:
            self._date_picker.set(draft.date_of_expense)
