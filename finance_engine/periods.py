"""Period boundary arithmetic.

All boundaries are local naive datetimes.  ``today`` is half-open
(``[midnight, next midnight)``); every other period includes its end.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from .records import Budget
from .timestamps import normalize_timestamp

TODAY = 'today'
THIS_WEEK = 'this_week'
THIS_MONTH = 'this_month'
CUSTOM = 'custom'
PERIOD_NAMES = (TODAY, THIS_WEEK, THIS_MONTH, CUSTOM)

_ALIASES = {
    'thisweek': THIS_WEEK,
    'thisWeek': THIS_WEEK,
    'thismonth': THIS_MONTH,
    'thisMonth': THIS_MONTH,
}


@dataclass(frozen=True)
class Interval:
    start: datetime
    end: datetime
    end_inclusive: bool = True

    def contains(self, instant: datetime) -> bool:
        if instant < self.start:
            return False
        return instant <= self.end if self.end_inclusive else instant < self.end


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    """Shift a (year, month) pair by ``delta`` calendar months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_interval(year: int, month: int) -> Interval:
    """Return the half-open interval covering one calendar month."""
    next_year, next_month = add_months(year, month, 1)
    return Interval(datetime(year, month, 1), datetime(next_year, next_month, 1), end_inclusive=False)


def resolve_period(
    name: str,
    now: Optional[datetime] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> Interval:
    """Compute the boundaries of a named period.

    Args:
        name: ``today``, ``this_week``, ``this_month`` or ``custom``.
            ``thisWeek``/``thisMonth`` are accepted as aliases.
        now: Reference moment; defaults to the current local time.
        start: Lower bound for ``custom`` periods.
        end: Upper bound for ``custom`` periods.

    Returns:
        The resolved :class:`Interval`.

    Raises:
        ValueError: For an unknown period name, or a ``custom`` period
            missing either bound.
    """
    key = _ALIASES.get(name, name)
    now = now or datetime.now()
    midnight = start_of_day(now)

    if key == TODAY:
        return Interval(midnight, midnight + timedelta(days=1), end_inclusive=False)
    if key == THIS_WEEK:
        # Weeks start on Sunday.
        days_since_sunday = (now.weekday() + 1) % 7
        return Interval(midnight - timedelta(days=days_since_sunday), now)
    if key == THIS_MONTH:
        return Interval(midnight.replace(day=1), now)
    if key == CUSTOM:
        if start is None or end is None:
            raise ValueError("Custom periods need both a start and an end")
        return Interval(start, end)
    raise ValueError(f"Unknown period '{name}'. Expected one of {', '.join(PERIOD_NAMES)}")


def budget_interval(budget: Budget) -> Optional[Interval]:
    """Interval covered by a budget's own start and end dates.

    Returns ``None`` when either date cannot be normalised; such a budget
    matches no transactions.
    """
    start = normalize_timestamp(budget.start_date)
    end = normalize_timestamp(budget.end_date)
    if not (start.is_valid and end.is_valid):
        return None
    return Interval(start.instant, end.instant)
