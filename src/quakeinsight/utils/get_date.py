from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ms_to_datetime(timestamp_ms) -> datetime:
    # USGS times are epoch milliseconds
    return EPOCH + timedelta(milliseconds=int(timestamp_ms))


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are treated as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso(value: datetime) -> str:
    """Formats a datetime as '2026-02-27T07:52:24.828Z'."""
    value = as_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def decade_label(value: datetime) -> str:
    return f"{(value.year // 10) * 10}s"


def current_year() -> int:
    return datetime.now(timezone.utc).year


def days_ago(days: int) -> str:
    """Returns the date `days` days before today as 'YYYY-MM-DD'."""
    return (datetime.now(timezone.utc) - timedelta(days=days)).strftime("%Y-%m-%d")
