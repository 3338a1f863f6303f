"""Relative time expressions: ``3d``, ``2w``, ``1mo``, ``1y`` or ``2026-01-15``.

Relative expressions count back from the current wall-clock time using
calendar arithmetic (``dateutil.relativedelta``), so ``1mo`` from March 31st
lands on the last day of February rather than overflowing into March.
Absolute dates resolve to midnight UTC.

Two encodings are used by the query layer:

- :func:`parse_relative_date` -- ``YYYY-MM-DD`` for event date-range bounds.
- :func:`parse_relative_iso` -- RFC 3339 timestamp for ``lastupdated``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

from dateutil.relativedelta import relativedelta

from tff.utils.errors import DateFormatError

_RELATIVE_RE = re.compile(r"^(\d+)(d|w|mo|y)$")
_ABSOLUTE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _delta(amount: int, unit: str) -> relativedelta:
    if unit == "d":
        return relativedelta(days=amount)
    if unit == "w":
        return relativedelta(days=amount * 7)
    if unit == "mo":
        return relativedelta(months=amount)
    return relativedelta(years=amount)


def parse_relative_time(expression: str, now: datetime | None = None) -> datetime:
    """Resolve *expression* to a point in time.

    Parameters
    ----------
    expression:
        ``<n><unit>`` with unit ``d``, ``w``, ``mo`` or ``y``, or an
        absolute ``YYYY-MM-DD`` date.
    now:
        Reference time for relative expressions. Defaults to the current
        local time, read on every call.

    Raises
    ------
    DateFormatError
        When *expression* matches neither form, or resolves to a point
        outside the representable date range.
    """
    text = expression.strip()

    match = _RELATIVE_RE.match(text)
    if match:
        reference = now if now is not None else datetime.now().astimezone()
        try:
            return reference - _delta(int(match.group(1)), match.group(2))
        except (ValueError, OverflowError) as exc:
            # Well-formed but reaching past the supported calendar range.
            raise DateFormatError(expression) from exc

    if _ABSOLUTE_RE.match(text):
        try:
            return datetime.strptime(text, "%Y-%m-%d").replace(tzinfo=timezone.utc)
        except ValueError:
            pass

    raise DateFormatError(expression)


def parse_relative_date(expression: str, now: datetime | None = None) -> str:
    """Resolve *expression* and format it as ``YYYY-MM-DD``."""
    return format_date(parse_relative_time(expression, now=now).date())


def parse_relative_iso(expression: str, now: datetime | None = None) -> str:
    """Resolve *expression* and format it as an RFC 3339 timestamp."""
    return format_timestamp(parse_relative_time(expression, now=now))


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def format_timestamp(value: datetime) -> str:
    """RFC 3339 with second precision; naive values are taken as local time."""
    if value.tzinfo is None:
        value = value.astimezone()
    stamp = value.replace(microsecond=0).isoformat()
    if stamp.endswith("+00:00"):
        stamp = stamp[: -len("+00:00")] + "Z"
    return stamp
