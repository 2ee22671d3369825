from datetime import datetime

import pytest

from finance_engine.records import CategoryRef, Transaction
from finance_engine.trends import (compute_monthly_trend, compute_spending_patterns,
                                   compute_weekly_spending, trend_frame, weekly_bucket_bounds)

NOW = datetime(2026, 10, 18, 12)


def _tx(id, amount, kind, when, category_id=None, category=None):
    return Transaction(id=id, amount=amount, kind=kind, date=when.timestamp(),
                       category_id=category_id, category=category)


def test_monthly_trend_has_six_zero_points_without_data():
    points = compute_monthly_trend([], now=NOW)
    assert len(points) == 6
    assert [p.month_label for p in points] == [
        'May 2026', 'Jun 2026', 'Jul 2026', 'Aug 2026', 'Sep 2026', 'Oct 2026',
    ]
    assert all(p.income == 0 and p.expense == 0 and p.net == 0 for p in points)


def test_monthly_trend_sums_by_month_and_kind():
    transactions = [
        _tx(1, 5000, 'income', datetime(2026, 10, 1)),
        _tx(2, 1200, 'expense', datetime(2026, 10, 3)),
        _tx(3, 300, 'expense', datetime(2026, 10, 17)),
        _tx(4, 4000, 'income', datetime(2026, 7, 25)),
        _tx(5, 4500, 'expense', datetime(2026, 7, 26)),
        _tx(6, 999, 'expense', datetime(2026, 4, 30)),
    ]
    points = {p.month_label: p for p in compute_monthly_trend(transactions, now=NOW)}
    assert points['Oct 2026'].income == 5000
    assert points['Oct 2026'].expense == 1500
    assert points['Oct 2026'].net == 3500
    assert points['Jul 2026'].net == -500
    assert 'Apr 2026' not in points


def test_monthly_trend_crosses_year_boundary():
    points = compute_monthly_trend([], now=datetime(2026, 2, 10))
    assert [(p.year, p.month) for p in points][0] == (2025, 9)
    assert points[-1].month_label == 'Feb 2026'


def test_monthly_trend_ignores_invalid_dates():
    transactions = [Transaction(id=1, amount=100, kind='expense', date='garbage')]
    assert sum(p.expense for p in compute_monthly_trend(transactions, now=NOW)) == 0


def test_weekly_bucket_bounds_cover_the_whole_month():
    assert weekly_bucket_bounds(2026, 10) == [(1, 7), (8, 14), (15, 21), (22, 31)]
    assert weekly_bucket_bounds(2026, 2) == [(1, 7), (8, 14), (15, 21), (22, 28)]


def test_weekly_spending_buckets():
    transactions = [
        _tx(1, 100, 'expense', datetime(2026, 10, 1, 8)),
        _tx(2, 50, 'expense', datetime(2026, 10, 7, 23)),
        _tx(3, 70, 'expense', datetime(2026, 10, 8)),
        _tx(4, 30, 'expense', datetime(2026, 10, 30)),
        _tx(5, 900, 'income', datetime(2026, 10, 2)),
        _tx(6, 40, 'expense', datetime(2026, 9, 2)),
    ]
    buckets = compute_weekly_spending(transactions, now=NOW)
    assert [b.week_label for b in buckets] == ['Week 1', 'Week 2', 'Week 3', 'Week 4']
    assert [b.amount for b in buckets] == [150, 70, 0, 30]
    assert [b.transaction_count for b in buckets] == [2, 1, 0, 1]


def test_weekly_spending_always_four_buckets():
    buckets = compute_weekly_spending(None, now=NOW)
    assert len(buckets) == 4
    assert all(b.amount == 0 for b in buckets)


def test_spending_patterns_trend_and_volatility():
    food = CategoryRef(name='Food')
    transactions = [
        _tx(1, 100, 'expense', datetime(2026, 6, 5), category_id=1, category=food),
        _tx(2, 100, 'expense', datetime(2026, 7, 5), category_id=1, category=food),
        _tx(3, 200, 'expense', datetime(2026, 8, 5), category_id=1, category=food),
        _tx(4, 200, 'expense', datetime(2026, 9, 5), category_id=1, category=food),
        _tx(5, 80, 'expense', datetime(2026, 8, 5), category_id=2),
        _tx(6, 80, 'expense', datetime(2026, 9, 5), category_id=2),
    ]
    patterns = {p.category_id: p for p in compute_spending_patterns(transactions, now=NOW)}
    assert patterns[1].category_name == 'Food'
    assert patterns[1].monthly_average == 150
    assert patterns[1].trend == 'increasing'
    assert patterns[1].volatility == pytest.approx(50 / 150)
    assert patterns[2].trend == 'stable'
    assert patterns[2].volatility == 0


def test_spending_patterns_detects_decrease_and_skips_old_data():
    transactions = [
        _tx(1, 300, 'expense', datetime(2026, 8, 5), category_id=1),
        _tx(2, 100, 'expense', datetime(2026, 9, 5), category_id=1),
        _tx(3, 500, 'expense', datetime(2025, 1, 5), category_id=2),
    ]
    patterns = compute_spending_patterns(transactions, now=NOW)
    assert [(p.category_id, p.trend) for p in patterns] == [(1, 'decreasing')]


def test_trend_frame():
    df = trend_frame(compute_monthly_trend([], now=NOW))
    assert list(df.columns) == ['Month', 'Income', 'Expense', 'Net']
    assert len(df) == 6
