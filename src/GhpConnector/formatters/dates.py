"""Date rendering helpers for text output."""

from __future__ import annotations

from datetime import datetime
from typing import Final

from dateutil import parser as date_parser
from dateutil import tz

from GhpConnector.utils.log import log

ISO: Final = "ISO"
LOCAL: Final = "local"
RELATIVE: Final = "relative"

_LOCAL_PATTERN = "%Y-%m-%d %H:%M:%S %Z"


def parse_date(value: str | datetime) -> datetime:
    """Return an aware datetime for an ISO-8601 string or datetime.

    Naive values are taken to be UTC, which is what the GitHub API returns.

    Raises:
        ValueError: If ``value`` is not a parseable ISO-8601 timestamp.
    """
    parsed = value if isinstance(value, datetime) else date_parser.isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz.UTC)
    return parsed


def format_date(
    value: str | datetime | None,
    date_format: str = LOCAL,
    timezone: str = "local",
    *,
    now: datetime | None = None,
) -> str:
    """Render a timestamp.

    Args:
        value: ISO-8601 string or datetime. Empty values render as ``""``;
            values that do not parse are returned unchanged.
        date_format: ``ISO``, ``local`` or ``relative``.
        timezone: ``"local"`` or an IANA zone name, used by ``local``.
        now: Reference time for ``relative``; defaults to the current time.

    Returns:
        ``ISO``: ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.
        ``relative``: ``"N unit(s) ago"``.
        ``local``: ``YYYY-MM-DD HH:MM:SS TZ`` in the requested zone.

    Raises:
        ValueError: If the zone is unknown.
    """
    if value is None or value == "":
        return ""
    try:
        moment = parse_date(value)
    except (ValueError, OverflowError, TypeError) as exc:
        log.debug("Unparseable date %r: %s", value, exc)
        return str(value)

    if date_format == ISO:
        utc = moment.astimezone(tz.UTC)
        return f"{utc.strftime('%Y-%m-%dT%H:%M:%S')}.{utc.microsecond // 1000:03d}Z"
    if date_format == RELATIVE:
        return relative_time(moment, now=now)

    zone = tz.tzlocal() if timezone == "local" else tz.gettz(timezone)
    if zone is None:
        raise ValueError(f"Unknown timezone: {timezone}")
    return moment.astimezone(zone).strftime(_LOCAL_PATTERN).rstrip()


def relative_time(moment: datetime, *, now: datetime | None = None) -> str:
    """Describe how long ago ``moment`` was.

    Uses the largest unit whose threshold is reached: seconds below a
    minute, minutes below an hour, hours below a day, days below 30 days,
    months (30 days) below 12 months, years (365 days) after that.
    Timestamps in the future count as ``0 seconds ago``.
    """
    moment = parse_date(moment)
    reference = parse_date(now) if now is not None else datetime.now(tz.UTC)
    seconds = max(0, int((reference - moment).total_seconds()))

    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    months = days // 30

    if seconds < 60:
        return _ago(seconds, "second")
    if minutes < 60:
        return _ago(minutes, "minute")
    if hours < 24:
        return _ago(hours, "hour")
    if days < 30:
        return _ago(days, "day")
    if months < 12:
        return _ago(months, "month")
    return _ago(max(1, days // 365), "year")


def _ago(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"
