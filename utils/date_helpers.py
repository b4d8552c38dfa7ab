"""Date handling for the entry forms and history cards.

Dates travel as YYYY-MM-DD strings (the column format of dateOfService and
dateOfExpense); only the widgets show them in a display format.
"""
from datetime import date, datetime

from utils.constants import DATE_FORMAT

_DISPLAY_FORMATS = {
    "DD/MM/YYYY": "%d/%m/%Y",
    "MM/DD/YYYY": "%m/%d/%Y",
    "YYYY-MM-DD": "%Y-%m-%d",
    "DD.MM.YYYY": "%d.%m.%Y",
}
_DEFAULT_DISPLAY = "%d/%m/%Y"


def today_str() -> str:
    return format_date(date.today())


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def parse_date(date_str: str) -> date | None:
    """YYYY-MM-DD (also with / or . separators) to a date, or None."""
    text = (date_str or "").strip()
    if not text:
        return None
    try:
        return datetime.strptime(text.replace("/", "-").replace(".", "-"), DATE_FORMAT).date()
    except ValueError:
        return None


def format_display_date(date_str: str, fmt_key: str = "DD/MM/YYYY") -> str:
    """Stored date in the user-facing format; unparseable input comes back as is."""
    d = parse_date(date_str)
    if d is None:
        return date_str
    return d.strftime(_DISPLAY_FORMATS.get(fmt_key, _DEFAULT_DISPLAY))


def parse_display_date(display_str: str, fmt_key: str) -> date | None:
    text = (display_str or "").strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, _DISPLAY_FORMATS.get(fmt_key, _DEFAULT_DISPLAY)).date()
    except ValueError:
        return parse_date(text)


def parse_timestamp(value: str | None) -> datetime | None:
    """Server timestamp such as '2024-05-01T10:22:03.123456+00:00', or None."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_timestamp(value: str | None) -> str:
    ts = parse_timestamp(value)
    if ts is None:
        return "N/A"
    if ts.tzinfo is not None:
        ts = ts.astimezone()
    return ts.strftime("%d %b %Y, %H:%M")
