"""Single entry point that derives the whole dashboard view-model.

The UI re-runs :func:`build_dashboard_view` whenever the transaction
list, budget list, date range or currency preference changes.  The
function holds no state, so identical inputs always give equal output.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from .budgets import BudgetStat, OverallStats, compute_budget_stats, compute_overall_stats
from .categories import CategoryBreakdownEntry, compute_category_breakdown
from .config import DEFAULT_CURRENCY
from .periods import THIS_MONTH, Interval, resolve_period
from .records import Transaction, coerce_budgets, coerce_categories, coerce_transactions
from .summary import (Alert, FinancialScore, Insight, PeriodSummary, Totals, compute_alerts,
                      compute_financial_score, compute_insights, compute_period_summary,
                      compute_totals, compute_weekly_budget_usage, recent_transactions)
from .trends import (MonthlyTrendPoint, SpendingPattern, WeeklySpendingBucket,
                     compute_monthly_trend, compute_spending_patterns, compute_weekly_spending)


@dataclass(frozen=True)
class DashboardView:
    currency: str
    window: Interval
    totals: Totals
    budget_stats: List[BudgetStat]
    overall: OverallStats
    category_breakdown: List[CategoryBreakdownEntry]
    monthly_trend: List[MonthlyTrendPoint]
    weekly_spending: List[WeeklySpendingBucket]
    spending_patterns: List[SpendingPattern]
    alerts: List[Alert]
    insights: List[Insight]
    recent_activity: List[Transaction]
    period_summary: PeriodSummary
    financial_score: FinancialScore
    weekly_budget_used: int
    skipped_count: int


def build_dashboard_view(
    transactions: Any,
    budgets: Any,
    categories: Any = None,
    currency: Optional[str] = None,
    window: Optional[Interval] = None,
    top_n: Optional[int] = 6,
    now: Optional[datetime] = None,
) -> DashboardView:
    """Derive every dashboard figure from raw fetched payloads.

    Args:
        transactions: Raw transactions payload (list of dicts or records).
        budgets: Raw budgets payload.
        categories: Optional raw categories payload for name lookups.
        currency: User currency preference; defaults to the configured one.
        window: Date range for totals and the category breakdown; the
            current month so far when omitted.
        top_n: Display limit for the category breakdown.
        now: Reference moment.

    Returns:
        A fresh :class:`DashboardView`.
    """
    now = now or datetime.now()
    currency = currency or DEFAULT_CURRENCY
    tx = coerce_transactions(transactions)
    budget_list = coerce_budgets(budgets)
    category_list = coerce_categories(categories) if categories is not None else None
    window = window or resolve_period(THIS_MONTH, now=now)

    stats = compute_budget_stats(budget_list, tx, categories=category_list)
    totals = compute_totals(tx, window)
    summary = compute_period_summary(tx, now=now)
    breakdown = compute_category_breakdown(tx, top_n=top_n, interval=window, categories=category_list)
    score = compute_financial_score(summary.current)

    return DashboardView(
        currency=currency,
        window=window,
        totals=totals,
        budget_stats=stats,
        overall=compute_overall_stats(stats),
        category_breakdown=breakdown,
        monthly_trend=compute_monthly_trend(tx, now=now),
        weekly_spending=compute_weekly_spending(tx, now=now),
        spending_patterns=compute_spending_patterns(tx, now=now),
        alerts=compute_alerts(tx, currency=currency, now=now),
        insights=compute_insights(totals, breakdown, score, currency=currency),
        recent_activity=recent_transactions(tx),
        period_summary=summary,
        financial_score=score,
        weekly_budget_used=compute_weekly_budget_usage(budget_list, tx, now=now),
        skipped_count=summary.skipped_count,
    )
