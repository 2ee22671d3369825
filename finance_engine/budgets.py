"""Budget progress and status classification.

Each active budget is measured against the expense transactions of its
own category that fall between the budget's start and end dates (both
inclusive).  The status thresholds come from the ``status`` block of the
engine config (80% and 100% by default) and are inclusive on the more
severe side.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

import pandas as pd

from .config import get_setting
from .filtering import filter_transactions
from .periods import budget_interval
from .records import (EXPENSE, Budget, Category, Transaction, category_lookup, coerce_budgets,
                      coerce_transactions)

logger = logging.getLogger(__name__)

GOOD = 'good'
WARNING = 'warning'
OVERBUDGET = 'overbudget'


@dataclass(frozen=True)
class BudgetStat:
    id: Any
    category_id: Any
    category_name: str
    category_color: Optional[str]
    amount: float
    currency: str
    period: str
    start_date: Any
    end_date: Any
    is_active: bool
    spent: float
    remaining: float
    percent_used: float
    status: str

    @property
    def progress_percent(self) -> float:
        """``percent_used`` clamped to ``[0, 100]`` for progress bars."""
        return min(max(self.percent_used, 0.0), 100.0)

    @property
    def over_by(self) -> float:
        return max(-self.remaining, 0.0)


@dataclass(frozen=True)
class OverallStats:
    total_budget: float
    total_spent: float
    total_remaining: float
    over_budget_count: int
    warning_count: int
    on_track_count: int


def percent_used(spent: float, amount: float) -> float:
    # Multiplying first keeps whole-number percentages exact.
    return spent * 100 / amount if amount > 0 else 0.0


def classify_status(percent: float) -> str:
    """Map a percent-used figure to ``good``, ``warning`` or ``overbudget``."""
    if percent >= get_setting('status', 'overbudget_percent', default=100):
        return OVERBUDGET
    if percent >= get_setting('status', 'warning_percent', default=80):
        return WARNING
    return GOOD


def compute_budget_stat(budget: Budget, transactions: Iterable[Transaction], category_name: Optional[str] = None,
                        category_color: Optional[str] = None) -> BudgetStat:
    interval = budget_interval(budget)
    if interval is None:
        logger.warning("Budget %r has unreadable start/end dates; treating spend as zero", budget.id)
        matched: List[Transaction] = []
    else:
        matched = filter_transactions(transactions, interval=interval, category_id=budget.category_id, kind=EXPENSE)

    spent = float(sum(t.amount for t in matched))
    percent = percent_used(spent, budget.amount)
    return BudgetStat(
        id=budget.id,
        category_id=budget.category_id,
        category_name=category_name or get_setting('display', 'unknown_category_name', default='Unknown Category'),
        category_color=category_color,
        amount=budget.amount,
        currency=budget.currency,
        period=budget.period,
        start_date=budget.start_date,
        end_date=budget.end_date,
        is_active=budget.is_active,
        spent=spent,
        remaining=budget.amount - spent,
        percent_used=percent,
        status=classify_status(percent),
    )


def compute_budget_stats(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    categories: Optional[Iterable[Category]] = None,
) -> List[BudgetStat]:
    """Calculate spend, remaining amount and status for every active budget.

    Args:
        budgets: Budgets to evaluate; inactive ones are skipped.
        transactions: All known transactions.
        categories: Optional category list for naming budgets that carry
            no embedded category reference.

    Returns:
        One :class:`BudgetStat` per active budget, in input order.
    """
    transactions = coerce_transactions(transactions)
    lookup = category_lookup(categories) if categories is not None else {}
    stats = []
    for budget in coerce_budgets(budgets):
        if not budget.is_active:
            continue
        ref = budget.category or lookup.get(budget.category_id)
        stats.append(compute_budget_stat(
            budget,
            transactions,
            category_name=ref.name if ref else None,
            category_color=ref.color if ref else None,
        ))
    return stats


def compute_overall_stats(budget_stats: Iterable[BudgetStat]) -> OverallStats:
    """Roll budget stats up into dashboard totals."""
    budget_stats = list(budget_stats or [])
    total_budget = float(sum(s.amount for s in budget_stats))
    total_spent = float(sum(s.spent for s in budget_stats))
    over = sum(1 for s in budget_stats if s.status == OVERBUDGET)
    warning = sum(1 for s in budget_stats if s.status == WARNING)
    return OverallStats(
        total_budget=total_budget,
        total_spent=total_spent,
        total_remaining=total_budget - total_spent,
        over_budget_count=over,
        warning_count=warning,
        on_track_count=len(budget_stats) - over - warning,
    )


def budget_stats_frame(budget_stats: Iterable[BudgetStat]) -> pd.DataFrame:
    """DataFrame of budget stats for tabular display."""
    rows = [{
        'Category': s.category_name,
        'Budget': s.amount,
        'Spent': s.spent,
        'Remaining': s.remaining,
        'Percent Used': s.percent_used,
        'Status': s.status,
    } for s in budget_stats]
    return pd.DataFrame(rows, columns=['Category', 'Budget', 'Spent', 'Remaining', 'Percent Used', 'Status'])
