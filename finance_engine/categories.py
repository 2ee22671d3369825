"""Expense breakdown by category."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Optional

import pandas as pd

from .filtering import filter_transactions, transactions_frame
from .periods import Interval
from .records import EXPENSE, Category, Transaction, category_lookup

_NO_CATEGORY = '__uncategorized__'


@dataclass(frozen=True)
class CategoryBreakdownEntry:
    category_name: str
    category_color: str
    total: float
    category_id: Any = None
    transaction_count: int = 0


def _with_category_refs(transactions: List[Transaction], categories: Iterable[Category]) -> List[Transaction]:
    lookup = category_lookup(categories)
    return [
        replace(t, category=lookup[t.category_id])
        if t.category is None and t.category_id in lookup
        else t
        for t in transactions
    ]


def compute_category_breakdown(
    transactions: Iterable[Transaction],
    top_n: Optional[int] = None,
    interval: Optional[Interval] = None,
    categories: Optional[Iterable[Category]] = None,
) -> List[CategoryBreakdownEntry]:
    """Group expense transactions by category and rank by total.

    Args:
        transactions: Transactions to aggregate; income rows are ignored.
        top_n: Keep only the ``top_n`` largest categories.  ``None`` keeps
            all of them.
        interval: Optional time window applied before grouping.
        categories: Optional category list used to name transactions that
            carry a ``category_id`` but no embedded category reference.

    Returns:
        Entries sorted by descending total.  Ties keep the order in which
        the categories first appear.

    Raises:
        ValueError: If ``top_n`` is negative.

    Example:
        >>> entries = compute_category_breakdown(transactions, top_n=6)
        >>> [e.category_name for e in entries]
        ['Food', 'Transport', 'Uncategorized']
    """
    if top_n is not None and top_n < 0:
        raise ValueError(f"top_n must be non-negative, got {top_n}")

    expenses = filter_transactions(transactions, interval=interval, kind=EXPENSE)
    if not expenses:
        return []
    if categories is not None:
        expenses = _with_category_refs(expenses, categories)

    frame = transactions_frame(expenses)
    frame['group_key'] = pd.Series(
        [t.category_id if t.category_id is not None else _NO_CATEGORY for t in expenses],
        index=frame.index,
        dtype=object,
    )
    grouped = frame.groupby('group_key', sort=False).agg(
        category_name=('category_name', 'first'),
        category_color=('category_color', 'first'),
        total=('amount', 'sum'),
        transaction_count=('amount', 'size'),
    )
    grouped = grouped.sort_values('total', ascending=False, kind='mergesort')
    if top_n is not None:
        grouped = grouped.head(top_n)

    return [
        CategoryBreakdownEntry(
            category_name=str(row.category_name),
            category_color=str(row.category_color),
            total=float(row.total),
            category_id=None if key == _NO_CATEGORY else key,
            transaction_count=int(row.transaction_count),
        )
        for key, row in grouped.iterrows()
    ]


def breakdown_frame(entries: Iterable[CategoryBreakdownEntry]) -> pd.DataFrame:
    """Tabular form of a breakdown, with each category's share of the total."""
    df = pd.DataFrame(
        [(e.category_name, e.category_color, e.total, e.transaction_count) for e in entries],
        columns=['Category', 'Color', 'Total', 'Transactions'],
    )
    grand_total = df['Total'].sum()
    df['Percent'] = (df['Total'] / grand_total * 100) if grand_total else 0.0
    return df
