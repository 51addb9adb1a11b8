# holdings_api/dates.py
# Timestamp helpers shared by validation, persistence and analytics.

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC now (the storage convention for every timestamp column)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO-8601 date or date-time string into a naive UTC datetime.

    Accepts "2024-03-01", "2024-03-01T09:30:00", "2024-03-01T09:30:00Z" and
    offsets like "+02:00". Raises ValueError for anything else.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid ISO date: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def has_time_component(value: str) -> bool:
    return "T" in value.strip().upper()


def to_iso_z(value: datetime) -> str:
    """Serialize a naive UTC datetime the way API responses carry it."""
    return value.isoformat() + "Z"


def month_key(value: datetime) -> str:
    """YYYY-MM of a stored (naive UTC) timestamp, in server-local time."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    local = value.astimezone()
    return f"{local.year}-{local.month:02d}"
