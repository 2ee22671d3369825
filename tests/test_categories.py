from datetime import datetime

import pytest

from finance_engine.categories import breakdown_frame, compute_category_breakdown
from finance_engine.periods import Interval
from finance_engine.records import Category, CategoryRef, Transaction

FOOD = CategoryRef(name='Food', color='#F97316')
TRANSPORT = CategoryRef(name='Transport', color='#3B82F6')
FUN = CategoryRef(name='Entertainment', color='#A855F7')


def _ts(day):
    return datetime(2026, 10, day, 12).timestamp()


def _sample_transactions():
    return [
        Transaction(id=1, amount=50, kind='expense', date=_ts(1), category_id=1, category=FOOD),
        Transaction(id=2, amount=200, kind='expense', date=_ts(2), category_id=2, category=TRANSPORT),
        Transaction(id=3, amount=75, kind='expense', date=_ts(3), category_id=1, category=FOOD),
        Transaction(id=4, amount=30, kind='expense', date=_ts(4), category_id=3, category=FUN),
        Transaction(id=5, amount=1000, kind='income', date=_ts(5), category_id=9),
        Transaction(id=6, amount=10, kind='expense', date=_ts(6)),
    ]


def test_breakdown_sorted_descending_and_sums_to_expense_total():
    entries = compute_category_breakdown(_sample_transactions())
    totals = [e.total for e in entries]
    assert totals == sorted(totals, reverse=True)
    assert [e.category_name for e in entries] == ['Transport', 'Food', 'Entertainment', 'Uncategorized']
    assert sum(totals) == 365


def test_breakdown_groups_by_category_id():
    food = compute_category_breakdown(_sample_transactions())[1]
    assert food.category_id == 1
    assert food.total == 125
    assert food.transaction_count == 2
    assert food.category_color == '#F97316'


def test_top_n_truncates():
    entries = compute_category_breakdown(_sample_transactions(), top_n=2)
    assert [e.category_name for e in entries] == ['Transport', 'Food']
    assert compute_category_breakdown(_sample_transactions(), top_n=0) == []


def test_negative_top_n_raises():
    with pytest.raises(ValueError):
        compute_category_breakdown(_sample_transactions(), top_n=-1)


def test_missing_category_uses_uncategorized_fallback():
    entry = compute_category_breakdown(_sample_transactions())[-1]
    assert entry.category_name == 'Uncategorized'
    assert entry.category_color == '#6B7280'
    assert entry.category_id is None


def test_category_list_names_bare_references():
    transactions = [Transaction(id=1, amount=20, kind='expense', date=_ts(1), category_id=7)]
    categories = [Category(id=7, name='Groceries', color='#22C55E')]
    entry = compute_category_breakdown(transactions, categories=categories)[0]
    assert entry.category_name == 'Groceries'
    assert entry.category_color == '#22C55E'


def test_interval_limits_breakdown():
    first_days = Interval(datetime(2026, 10, 1), datetime(2026, 10, 2, 23, 59))
    entries = compute_category_breakdown(_sample_transactions(), interval=first_days)
    assert [(e.category_name, e.total) for e in entries] == [('Transport', 200), ('Food', 50)]


def test_empty_input_gives_empty_breakdown():
    assert compute_category_breakdown([]) == []
    assert compute_category_breakdown(None) == []


def test_breakdown_frame_percentages():
    df = breakdown_frame(compute_category_breakdown(_sample_transactions()))
    assert list(df.columns) == ['Category', 'Color', 'Total', 'Transactions', 'Percent']
    assert round(df['Percent'].sum(), 6) == 100
