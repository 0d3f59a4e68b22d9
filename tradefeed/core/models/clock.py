"""Fixed UTC+8 civil clock used for record dates and timestamps."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

BEIJING_TZ = timezone(timedelta(hours=8))


def now() -> datetime:
    """Return the current instant in UTC+8."""

    return datetime.now(BEIJING_TZ)


def format_ts(moment: datetime) -> str:
    """Format ``moment`` as ``YYYY-MM-DDTHH:MM:SS.mmm+08:00``."""

    if moment.tzinfo is None:
        raise ValueError("timestamp must be timezone-aware")
    return moment.astimezone(BEIJING_TZ).isoformat(timespec="milliseconds")


def calendar_date(moment: datetime) -> str:
    """Return the UTC+8 calendar day of ``moment`` as ``YYYY-MM-DD``."""

    if moment.tzinfo is None:
        raise ValueError("timestamp must be timezone-aware")
    return moment.astimezone(BEIJING_TZ).date().isoformat()


def parse_ts(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning ``None`` when it is not parseable."""

    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=BEIJING_TZ)
    return parsed


__all__ = ["BEIJING_TZ", "now", "format_ts", "calendar_date", "parse_ts"]
