from dataclasses import dataclass


@dataclass(frozen=True)
class ExpenseRecord:
    id: int | str
    date_of_expense: str    # 'YYYY-MM-DD'
    category: str
    amount: float | None
    description: str = ""
    recorded_by: str = ""
    created_at: str = ""    # server-assigned ISO timestamp
