from __future__ import annotations

import datetime as dt
import re
from email.utils import parsedate_to_datetime
from typing import Optional

DAY_RE = re.compile(r"^(?P<year>\d{4})[-/.](?P<month>\d{1,2})[-/.](?P<day>\d{1,2})$")
XML_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def rfc822_date(value: dt.datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    else:
        value = value.astimezone(dt.timezone.utc)
    return value.strftime("%a, %d %b %Y %H:%M:%S %z")


def escape_xml(text: str) -> str:
    return "".join(XML_ENTITIES.get(ch, ch) for ch in text)


def parse_post_date(value: object) -> Optional[dt.datetime]:
    """Parse a post date into a naive local datetime.

    Date-only values (``2024-03-05``, ``2024/3/5``) keep their calendar day.
    Naive datetimes are taken as local time and aware ones, including RFC 2822
    strings, are converted to local time. Returns None when the value cannot
    be parsed or falls outside the representable range.
    """
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time())
    else:
        text = str(value or "").strip()
        if not text:
            return None
        match = DAY_RE.match(text)
        if match:
            try:
                day = dt.date(int(match["year"]), int(match["month"]), int(match["day"]))
            except ValueError:
                return None
            return dt.datetime.combine(day, dt.time())
        try:
            parsed = dt.datetime.fromisoformat(text)
        except ValueError:
            try:
                parsed = parsedate_to_datetime(text)
            except (TypeError, ValueError, IndexError, OverflowError):
                return None
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone().replace(tzinfo=None)
        except (ValueError, OverflowError):
            return None
    return parsed


def format_date(value: object) -> str:
    parsed = parse_post_date(value)
    if parsed is None:
        return str(value or "").strip()
    return f"{parsed.year:04d}-{parsed.month:02d}-{parsed.day:02d}"
