"""Fixed-length time series for the dashboard charts.

* :func:`compute_monthly_trend` returns one point per calendar month for
  the trailing months ending with the current one, oldest first.
* :func:`compute_weekly_spending` splits the current month into four
  buckets anchored at day 1: days 1-7, 8-14, 15-21, and 22 to the end of
  the month.
* :func:`compute_spending_patterns` summarises how each expense category
  moves month to month.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Optional

import numpy as np
import pandas as pd

from .config import get_setting
from .filtering import transactions_frame
from .periods import add_months
from .records import EXPENSE, INCOME, Transaction


@dataclass(frozen=True)
class MonthlyTrendPoint:
    month_label: str
    income: float
    expense: float
    net: float
    year: int = 0
    month: int = 0


@dataclass(frozen=True)
class WeeklySpendingBucket:
    week_label: str
    amount: float
    transaction_count: int
    start_day: int = 1
    end_day: int = 7


@dataclass(frozen=True)
class SpendingPattern:
    category_id: Any
    category_name: str
    monthly_average: float
    trend: str
    volatility: float


def _month_keys(frame: pd.DataFrame) -> pd.Series:
    return frame['when'].dt.year * 12 + (frame['when'].dt.month - 1)


def compute_monthly_trend(
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
    months: Optional[int] = None,
) -> List[MonthlyTrendPoint]:
    """Income, expense and net per month for the trailing months.

    Args:
        transactions: Transactions of any kind.
        now: Reference moment; the current month is the last point.
        months: Number of points, six by default.

    Returns:
        Exactly ``months`` points ordered oldest to newest.  Months with
        no transactions are zero-filled.
    """
    now = now or datetime.now()
    months = months or get_setting('trends', 'monthly_points', default=6)

    frame = transactions_frame(transactions).dropna(subset=['when'])
    frame = frame.assign(month_key=_month_keys(frame))
    totals = frame.groupby(['month_key', 'kind'])['amount'].sum().to_dict()

    points = []
    for offset in range(months - 1, -1, -1):
        year, month = add_months(now.year, now.month, -offset)
        key = year * 12 + (month - 1)
        income = float(totals.get((key, INCOME), 0.0))
        expense = float(totals.get((key, EXPENSE), 0.0))
        points.append(MonthlyTrendPoint(
            month_label=datetime(year, month, 1).strftime('%b %Y'),
            income=income,
            expense=expense,
            net=income - expense,
            year=year,
            month=month,
        ))
    return points


def weekly_bucket_bounds(year: int, month: int) -> List[tuple]:
    """Day ranges of the weekly buckets for a month, inclusive on both ends."""
    buckets = get_setting('trends', 'weekly_buckets', default=4)
    length = get_setting('trends', 'week_length_days', default=7)
    last_day = calendar.monthrange(year, month)[1]
    bounds = []
    for k in range(buckets):
        start = 1 + length * k
        end = last_day if k == buckets - 1 else min(length + length * k, last_day)
        bounds.append((start, end))
    return bounds


def compute_weekly_spending(
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> List[WeeklySpendingBucket]:
    """Expense totals for each weekly bucket of the current month.

    Returns:
        Four buckets labelled ``Week 1`` to ``Week 4``, always present
        even when empty.
    """
    now = now or datetime.now()
    frame = transactions_frame(transactions).dropna(subset=['when'])
    frame = frame[
        (frame['kind'] == EXPENSE)
        & (frame['when'].dt.year == now.year)
        & (frame['when'].dt.month == now.month)
    ]
    days = frame['when'].dt.day

    result = []
    for index, (start, end) in enumerate(weekly_bucket_bounds(now.year, now.month), start=1):
        in_bucket = frame[(days >= start) & (days <= end)]
        result.append(WeeklySpendingBucket(
            week_label=f"Week {index}",
            amount=float(in_bucket['amount'].sum()),
            transaction_count=int(len(in_bucket)),
            start_day=start,
            end_day=end,
        ))
    return result


def _classify_trend(monthly: np.ndarray, threshold: float) -> str:
    half = len(monthly) // 2
    if half == 0:
        return 'stable'
    first = monthly[:half].mean()
    second = monthly[-half:].mean()
    if first <= 0:
        return 'stable'
    change = (second - first) / first
    if change > threshold:
        return 'increasing'
    if change < -threshold:
        return 'decreasing'
    return 'stable'


def compute_spending_patterns(
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
    months: Optional[int] = None,
) -> List[SpendingPattern]:
    """Per-category monthly average, direction and volatility.

    Only months in which a category had spending count towards its
    figures.  The trend compares the mean of the first half of those
    months with the mean of the second half; a change beyond the
    configured threshold (15%) is ``increasing`` or ``decreasing``.
    Volatility is the coefficient of variation of the monthly totals.
    """
    now = now or datetime.now()
    months = months or get_setting('trends', 'pattern_months', default=6)
    threshold = get_setting('trends', 'pattern_change_threshold', default=0.15)

    start_year, start_month = add_months(now.year, now.month, -months)
    frame = transactions_frame(transactions).dropna(subset=['when'])
    frame = frame[
        (frame['kind'] == EXPENSE)
        & frame['category_id'].notna()
        & (frame['when'] >= datetime(start_year, start_month, 1))
        & (frame['when'] <= now)
    ]
    if frame.empty:
        return []

    frame = frame.assign(month_key=_month_keys(frame))
    patterns = []
    for category_id, rows in frame.groupby('category_id', sort=False):
        monthly = rows.groupby('month_key')['amount'].sum().sort_index().to_numpy(dtype=float)
        average = float(monthly.mean())
        if average <= 0:
            continue
        patterns.append(SpendingPattern(
            category_id=category_id,
            category_name=str(rows['category_name'].iloc[0]),
            monthly_average=average,
            trend=_classify_trend(monthly, threshold),
            volatility=float(monthly.std(ddof=0) / average),
        ))
    return patterns


def trend_frame(points: Iterable[MonthlyTrendPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [(p.month_label, p.income, p.expense, p.net) for p in points],
        columns=['Month', 'Income', 'Expense', 'Net'],
    )
