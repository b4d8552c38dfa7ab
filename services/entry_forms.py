import logging

from database.errors import BackendError, ValidationError
from models.draft import EMPTY_AMOUNT, ExpenseDraft, ServiceDraft
from models.message import Message
from services.state import (
    FORM_OPTION_KIND, FieldChanged, SubmitFailed, SubmitRejected, SubmitStarted,
    SubmitSucceeded,
)
from services.store import Store
from services.tasks import TaskRunner
from utils.constants import EXPENSE, PAYMENT_MODES, SERVICE
from utils.date_helpers import parse_date

logger = logging.getLogger(__name__)


def _positive_amount(amount) -> float:
    # the draft holds EMPTY_AMOUNT while the input is blank or not a number
    if amount == EMPTY_AMOUNT or isinstance(amount, (str, bool)) or amount is None:
        raise ValidationError("Amount must be a positive number.")
    if amount <= 0:
        raise ValidationError("Amount must be a positive number.")
    return float(amount)


def _valid_date(value: str) -> str:
    d = parse_date(value)
    if d is None:
        raise ValidationError("Invalid date.")
    return d.isoformat()


def build_service_row(draft: ServiceDraft, service_types: list[str], user_id: str) -> dict:
    """Validate a service draft and return the row to insert.

    Raises ValidationError with the message to show; nothing is sent in that case.
    """
    reg_number = draft.registration_number.strip()
    if not (reg_number and draft.service_type and draft.payment_mode and draft.date_of_service):
        raise ValidationError("Please fill in required service fields.")
    if draft.service_type not in service_types:
        raise ValidationError("Selected service type is no longer available.")
    if draft.payment_mode not in PAYMENT_MODES:
        raise ValidationError("Please choose a valid payment mode.")
    date_of_service = _valid_date(draft.date_of_service)
    amount = _positive_amount(draft.amount)
    return {
        "regNumber": reg_number.upper(),
        "serviceType": draft.service_type,
        "notes": draft.notes.strip(),
        "amount": amount,
        "paymentMode": draft.payment_mode,
        "dateOfService": date_of_service,
        "recordedBy": user_id,
    }


def build_expense_row(draft: ExpenseDraft, categories: list[str], user_id: str) -> dict:
    if not (draft.date_of_expense and draft.category):
        raise ValidationError("Please fill in Date, Category, and Amount.")
    if draft.category not in categories:
        raise ValidationError("Selected category is no longer available.")
    date_of_expense = _valid_date(draft.date_of_expense)
    amount = _positive_amount(draft.amount)
    return {
        "dateOfExpense": date_of_expense,
        "category": draft.category,
        "description": draft.description.strip(),
        "amount": amount,
        "recordedBy": user_id,
    }


class EntryFormController:
    """Owns one entry form's draft: field edits, validation and the single insert."""

    form = ""
    noun = ""

    def __init__(self, store: Store, dao, runner: TaskRunner):
        self._store = store
        self._dao = dao
        self._runner = runner

    def build_row(self, draft, option_names: list[str], user_id: str) -> dict:
        raise NotImplementedError

    def on_field_change(self, field: str, raw):
        self._store.dispatch(FieldChanged(self.form, field, raw))

    def submit(self):
        self._store.dispatch(SubmitStarted(self.form))
        state = self._store.state
        if not state.connected:
            self._store.dispatch(SubmitRejected(
                self.form, Message.error("Database connection failed.")
            ))
            return

        options = state.options(FORM_OPTION_KIND[self.form])
        try:
            row = self.build_row(state.draft(self.form), options.names, state.user_id)
        except ValidationError as e:
            self._store.dispatch(SubmitRejected(self.form, Message.validation(str(e))))
            return

        def done(_record, error):
            if error is None:
                self._store.dispatch(SubmitSucceeded(
                    self.form,
                    Message.success(f"{self.noun.title()} entry successfully recorded!"),
                ))
            elif isinstance(error, BackendError):
                logger.error("Error adding %s record: %s", self.noun, error)
                self._store.dispatch(SubmitFailed(self.form, Message.error(
                    f"Failed to record {self.noun}. {error.message}"
                )))
            else:
                logger.error("Unexpected error during %s submission", self.noun,
                             exc_info=error)
                self._store.dispatch(SubmitFailed(self.form, Message.error(
                    f"Failed to record {self.noun}. Unexpected error."
                )))

        self._runner.run(lambda: self._dao.create(row), done)


class ServiceFormController(EntryFormController):
    form = SERVICE
    noun = "service"

    def build_row(self, draft, option_names, user_id):
        return build_service_row(draft, option_names, user_id)


class ExpenseFormController(EntryFormController):
    form = EXPENSE
    noun = "expense"

    def build_row(self, draft, option_names, user_id):
        return build_expense_row(draft, option_names, user_id)
