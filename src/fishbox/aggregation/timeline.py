"""Dense time-bucketed catch counts for trend and "best time" charts.

Every bucket in the requested range is present, zero-count buckets
included, so charts never silently drop empty periods.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, date, datetime, tzinfo

from fishbox.schemas import Catch

YearMonth = tuple[int, int]


def _local(value: datetime, tz: tzinfo | None) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(tz) if tz is not None else value


def month_key(year: int, month: int) -> str:
    """Bucket label, e.g. ``2024-03``."""
    return f"{year:04d}-{month:02d}"


def _shift_month(ym: YearMonth, delta: int) -> YearMonth:
    index = ym[0] * 12 + (ym[1] - 1) + delta
    return (index // 12, index % 12 + 1)


def _month_range(start: YearMonth, end: YearMonth) -> list[str]:
    keys: list[str] = []
    current = start
    while current <= end:
        keys.append(month_key(*current))
        current = _shift_month(current, 1)
    return keys


def monthly_counts(
    catches: Iterable[Catch],
    start: date | None = None,
    end: date | None = None,
    tz: tzinfo | None = None,
) -> dict[str, int]:
    """Catches per calendar month between ``start`` and ``end`` inclusive.

    Only the year and month of ``start``/``end`` matter. Missing bounds are
    taken from the earliest/latest catch; with no catches and no bounds the
    result is empty. Catches outside the range are not counted.

    Args:
        catches: Catch records.
        start: First month of the range.
        end: Last month of the range.
        tz: Time zone used to assign a catch to a month (default: as stored).

    Returns:
        Ordered dict of ``YYYY-MM`` -> count.
    """
    months: list[YearMonth] = []
    for c in catches:
        local = _local(c.date, tz)
        months.append((local.year, local.month))

    first = (start.year, start.month) if start else (min(months) if months else None)
    last = (end.year, end.month) if end else (max(months) if months else None)
    if first is None or last is None:
        return {}

    counts = dict.fromkeys(_month_range(first, last), 0)
    for ym in months:
        key = month_key(*ym)
        if key in counts:
            counts[key] += 1
    return counts


def recent_months(
    catches: Iterable[Catch],
    months: int = 6,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> dict[str, int]:
    """Catches per month for the last ``months`` months ending with ``now``'s month."""
    if months <= 0:
        return {}
    current = _local(now or datetime.now(UTC), tz)
    last = (current.year, current.month)
    first = _shift_month(last, -(months - 1))
    return monthly_counts(
        catches,
        start=date(first[0], first[1], 1),
        end=date(last[0], last[1], 1),
        tz=tz,
    )


def hourly_counts(catches: Iterable[Catch], tz: tzinfo | None = None) -> dict[int, int]:
    """Catches per hour of day. Always 24 buckets, 0 through 23."""
    counts = dict.fromkeys(range(24), 0)
    for c in catches:
        counts[_local(c.date, tz).hour] += 1
    return counts
