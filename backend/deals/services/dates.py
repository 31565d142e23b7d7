from __future__ import annotations

import re
from datetime import date, datetime, timezone

from dateutil import parser as dateutil_parser

DMY_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
ISO_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _datetime_to_iso(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date().isoformat()


def to_iso_date(value) -> str | None:
    """Return ``YYYY-MM-DD`` for a date-like value, or None when unparseable.

    Accepts ``date``/``datetime`` objects and strings shaped ``DD/MM/YYYY``,
    ``YYYY-MM-DD`` or anything dateutil understands. Aware datetimes are
    truncated in UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _datetime_to_iso(value)
    if isinstance(value, date):
        return value.isoformat()

    text = str(value).strip()
    if not text:
        return None

    match = DMY_RE.match(text)
    if match:
        day, month, year = match.groups()
        return f"{year}-{month}-{day}"

    if ISO_RE.match(text):
        return text

    try:
        parsed = dateutil_parser.parse(text)
    except (ValueError, OverflowError):
        return None
    return _datetime_to_iso(parsed)
