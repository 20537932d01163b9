from datetime import datetime, timezone


def dt_from_epoch_millis(ms: int) -> datetime:
    """Convert milliseconds since the UNIX epoch to an aware UTC datetime."""
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def format_date(ms: int) -> str:
    """Format epoch milliseconds as e.g. 'Jan 01, 2021' (UTC)."""
    return dt_from_epoch_millis(ms).strftime("%b %d, %Y")


def format_time(ms: int) -> str:
    """Format epoch milliseconds as e.g. '3:05 PM' (UTC)."""
    moment = dt_from_epoch_millis(ms)
    return f"{moment.hour % 12 or 12}:{moment:%M %p}"
