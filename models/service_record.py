from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceRecord:
    id: int | str
    registration_number: str
    service_type: str
    amount: float | None
    payment_mode: str
    date_of_service: str    # 'YYYY-MM-DD'
    notes: str = ""
    recorded_by: str = ""
    created_at: str = ""    # server-assigned ISO timestamp
