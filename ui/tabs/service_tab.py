from ui.components.history_list import ServiceHistoryList
from ui.tabs.entry_tab import EntryTab
from utils.constants import PAYMENT_MODES


class ServiceTab(EntryTab):
    heading = "Log New Service Job"
    submit_text = "Record Service Entry"

    def _build_fields(self, start_row: int) -> int:
        r = start_row

        self._label("Registration No.:", r)
        self._entry("registration_number", r)
        r += 1

        self._label("Type of Service:", r)
        self._selector = self._combo("service_type", r, [])
        r += 1

        self._label("Notes:", r)
        self._entry("notes", r)
        r += 1

        self._label("Amount (INR):", r)
        self._entry("amount", r)
        r += 1

        self._label("Payment Mode:", r)
        self._payment_combo = self._combo("payment_mode", r, PAYMENT_MODES)
        r += 1

        self._label("Date of Service:", r)
        self._date_picker = self._date("date_of_service", r)
        r += 1
        return r

    def _build_history(self):
        return ServiceHistoryList(
            self, form=self._form, title="Recent Service History", noun="service",
            amount_color="#4CAF50", date_format=self._date_format,
        )

    def _sync_widgets(self, draft):
        if self._payment_combo.get() != draft.payment_mode:
            self._payment_combo.set(draft.payment_mode)
        if self._date_picker.get() != draft.date_of_service:
            self._date_picker.set(draft.date_of_service)
