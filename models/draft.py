from dataclasses import dataclass, field

from utils.constants import PAYMENT_MODES
from utils.date_helpers import today_str

# Sentinel held in `amount` while the input is empty or unparseable.
EMPTY_AMOUNT = ""


@dataclass(frozen=True)
class ServiceDraft:
    registration_number: str = ""
    service_type: str = ""
    notes: str = ""
    amount: float | str = EMPTY_AMOUNT
    payment_mode: str = PAYMENT_MODES[0]
    date_of_service: str = field(default_factory=today_str)

    SELECTOR = "service_type"


@dataclass(frozen=True)
class ExpenseDraft:
    date_of_expense: str = field(default_factory=today_str)
    category: str = ""
    description: str = ""
    amount: float | str = EMPTY_AMOUNT

    SELECTOR = "category"
