"""Roll-up statistics and threshold alerts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from .categories import CategoryBreakdownEntry
from .config import DEFAULT_CURRENCY, get_setting
from .filtering import filter_transactions
from .formatting import format_currency
from .periods import THIS_WEEK, TODAY, Interval, add_months, month_interval, resolve_period
from .records import EXPENSE, INCOME, Budget, Transaction, coerce_budgets, coerce_transactions
from .timestamps import count_invalid_dates, normalize_timestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Totals:
    income: float
    expense: float
    transaction_count: int = 0

    @property
    def net(self) -> float:
        return self.income - self.expense

    @property
    def savings_rate(self) -> float:
        return savings_rate(self.income, self.expense)


@dataclass(frozen=True)
class Alert:
    rule: str
    severity: str
    message: str
    amount: float


@dataclass(frozen=True)
class Insight:
    kind: str
    title: str
    message: str
    action: str


@dataclass(frozen=True)
class PeriodSummary:
    current: Totals
    previous: Totals
    income_change: float
    expense_change: float
    savings_rate_change: float
    skipped_count: int


@dataclass(frozen=True)
class FinancialScore:
    score: int
    label: str


def savings_rate(income: float, expense: float) -> float:
    """Share of income left after expenses, in percent; 0 without income."""
    return ((income - expense) / income) * 100 if income > 0 else 0.0


def percent_change(current: float, previous: float) -> float:
    return ((current - previous) / previous) * 100 if previous > 0 else 0.0


def compute_totals(transactions: Iterable[Transaction], interval: Optional[Interval] = None) -> Totals:
    """Sum income and expense over ``interval`` (or over everything)."""
    matched = filter_transactions(transactions, interval=interval)
    return Totals(
        income=float(sum(t.amount for t in matched if t.kind == INCOME)),
        expense=float(sum(t.amount for t in matched if t.kind == EXPENSE)),
        transaction_count=len(matched),
    )


def compute_period_summary(transactions: Iterable[Transaction], now: Optional[datetime] = None) -> PeriodSummary:
    """Current calendar month against the previous one.

    Changes are percentages of the previous month's value (0 when the
    previous value is 0); the savings-rate change is in percentage points.
    Records with unreadable dates are counted in ``skipped_count``.
    """
    transactions = coerce_transactions(transactions)
    now = now or datetime.now()
    current = compute_totals(transactions, month_interval(now.year, now.month))
    prev_year, prev_month = add_months(now.year, now.month, -1)
    previous = compute_totals(transactions, month_interval(prev_year, prev_month))

    skipped = count_invalid_dates(transactions)
    if skipped:
        logger.warning("Skipped %d transaction(s) with unreadable dates", skipped)

    return PeriodSummary(
        current=current,
        previous=previous,
        income_change=percent_change(current.income, previous.income),
        expense_change=percent_change(current.expense, previous.expense),
        savings_rate_change=current.savings_rate - previous.savings_rate,
        skipped_count=skipped,
    )


def daily_threshold(currency: str) -> float:
    thresholds = get_setting('alerts', 'daily_thresholds', default={}) or {}
    return float(thresholds.get((currency or '').upper(), thresholds.get('default', 50)))


def compute_alerts(
    transactions: Iterable[Transaction],
    currency: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[Alert]:
    """Evaluate the spending alert rules.

    * ``daily_spending`` (warning): today's expenses exceed the daily
      threshold for ``currency``.
    * ``weekly_ratio`` (danger): this week's expenses exceed the
      configured share (80%) of this week's income.  Never fires when
      there is no income this week.
    """
    transactions = coerce_transactions(transactions)
    currency = currency or DEFAULT_CURRENCY
    now = now or datetime.now()
    alerts = []

    today = compute_totals(transactions, resolve_period(TODAY, now=now))
    if today.expense > daily_threshold(currency):
        alerts.append(Alert(
            rule='daily_spending',
            severity='warning',
            message=f"High spending today: {format_currency(today.expense, currency)}",
            amount=today.expense,
        ))

    week = compute_totals(transactions, resolve_period(THIS_WEEK, now=now))
    ratio = get_setting('alerts', 'weekly_ratio', default=0.8)
    if week.income > 0 and week.expense > week.income * ratio:
        alerts.append(Alert(
            rule='weekly_ratio',
            severity='danger',
            message=f"Spending is {week.expense / week.income * 100:.0f}% of your weekly income",
            amount=week.expense,
        ))
    return alerts


def compute_financial_score(totals: Totals) -> FinancialScore:
    """Score monthly health from 0 to 100 with a label."""
    score = get_setting('score', 'base', default=50)
    rate = totals.savings_rate
    for minimum, bonus in get_setting('score', 'savings_steps', default=[[20, 30], [10, 20], [5, 10]]):
        if rate >= minimum:
            score += bonus
            break
    if totals.income > 0:
        score += get_setting('score', 'income_bonus', default=10)
    if totals.expense > totals.income:
        score -= get_setting('score', 'overspend_penalty', default=20)
    score = max(0, min(100, score))

    label = 'Poor'
    for minimum, name in get_setting('score', 'labels', default=[[80, 'Excellent'], [60, 'Good'], [40, 'Fair']]):
        if score >= minimum:
            label = name
            break
    return FinancialScore(score=int(score), label=label)


def compute_weekly_budget_usage(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> int:
    """This week's spending as a rounded percentage of the weekly budget.

    The weekly budget is the sum of active budget amounts divided by the
    configured weeks per month (4).  Returns 0 when there is no budget.
    """
    weeks = get_setting('budgets', 'weeks_per_month', default=4)
    weekly_limit = sum(b.amount / weeks for b in coerce_budgets(budgets) if b.is_active)
    if weekly_limit <= 0:
        return 0
    week = compute_totals(transactions, resolve_period(THIS_WEEK, now=now))
    return int(round(week.expense / weekly_limit * 100))


def compute_insights(
    totals: Totals,
    category_breakdown: Sequence[CategoryBreakdownEntry],
    score: FinancialScore,
    currency: Optional[str] = None,
) -> List[Insight]:
    """Rule-based observations about the month, in display order.

    Args:
        totals: This month's totals.
        category_breakdown: Expense breakdown for the same window, largest
            category first.
        score: Financial score derived from ``totals``.
        currency: Currency used in amounts; the configured default if None.

    Returns:
        Up to three insights: a dominant spending category, the score
        verdict (only at the strong and weak ends) and a high savings rate.
    """
    currency = currency or DEFAULT_CURRENCY
    share_limit = get_setting('insights', 'top_category_share', default=0.3)
    insights = []

    top = category_breakdown[0] if category_breakdown else None
    if totals.expense > 0 and top is not None and top.total > totals.expense * share_limit:
        insights.append(Insight(
            kind='warning',
            title='High Spending Alert',
            message=(
                f"Your {top.category_name} spending ({format_currency(top.total, currency)}) "
                f"is {top.total / totals.expense * 100:.0f}% of total expenses"
            ),
            action='Review this category',
        ))

    if score.score >= get_setting('insights', 'excellent_score', default=80):
        insights.append(Insight(
            kind='success',
            title='Excellent Financial Health',
            message=f"Your financial score of {score.score} shows strong money management",
            action='Keep it up!',
        ))
    elif score.score < get_setting('insights', 'attention_score', default=60):
        insights.append(Insight(
            kind='danger',
            title='Financial Health Needs Attention',
            message=f"Your score of {score.score} suggests room for improvement in budgeting and spending habits",
            action='Review your budgets',
        ))

    rate = totals.savings_rate
    if rate > get_setting('insights', 'savings_rate', default=20):
        insights.append(Insight(
            kind='success',
            title='Great Savings Rate',
            message=f"You're saving {rate:.1f}% of your income",
            action='Consider investing',
        ))
    return insights


def recent_transactions(transactions: Iterable[Transaction], limit: Optional[int] = None) -> List[Transaction]:
    """Most recent transactions, newest first.

    Records whose date cannot be read are left out.  Ties keep input order.
    """
    limit = get_setting('display', 'recent_limit', default=5) if limit is None else limit
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    dated = []
    for transaction in coerce_transactions(transactions):
        result = normalize_timestamp(transaction.date)
        if result.is_valid:
            dated.append((result.instant, transaction))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [transaction for _, transaction in dated[:limit]]
