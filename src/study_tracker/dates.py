"""Calendar date helpers. Dates are stored as ISO strings (YYYY-MM-DD)."""
from datetime import date, datetime


def parse_date(value) -> date | None:
    """Coerce an ISO string, date or datetime to a date. Empty or unparseable input gives None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def resolve_today(now=None) -> date:
    """The injected clock value as a date, or today's date."""
    if now is None:
        return date.today()
    return parse_date(now) or date.today()


def today_str(now=None) -> str:
    return resolve_today(now).isoformat()
