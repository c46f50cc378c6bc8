"""Date parsing utilities."""

from datetime import datetime, time, timedelta
from dateutil import parser as date_parser


def parse_datetime(value: str, now: datetime | None = None) -> datetime:
    """Parse a date-time string for a sale, expense or stock movement.

    "now" is the current time. Relative day words keep the current time of
    day, so a sale entered as "yesterday" lands at this hour yesterday. A
    bare absolute date is taken as midnight; an explicit time is kept.

    Raises:
        ValueError: If the string cannot be parsed
    """
    now = now or datetime.now()
    text = value.strip().lower()

    day_offsets = {"now": 0, "today": 0, "yesterday": -1, "tomorrow": 1}
    if text in day_offsets:
        return now + timedelta(days=day_offsets[text])

    try:
        parsed = date_parser.parse(text, default=datetime.combine(now.date(), time.min))
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
