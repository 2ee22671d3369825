#!/usr/bin/env python3
"""Print the derived dashboard view for exported transactions and budgets."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_engine.budgets import budget_stats_frame
from finance_engine.categories import breakdown_frame
from finance_engine.dashboard import build_dashboard_view
from finance_engine.formatting import format_currency
from finance_engine.trends import trend_frame


def _load_json(path: str | None) -> Any:
    if not path:
        return []
    with open(path, 'r', encoding='utf-8') as handle:
        return json.load(handle)


def main(transactions_path: str, budgets_path: str | None, categories_path: str | None,
         currency: str | None, top: int) -> int:
    view = build_dashboard_view(
        _load_json(transactions_path),
        _load_json(budgets_path),
        categories=_load_json(categories_path) if categories_path else None,
        currency=currency,
        top_n=top,
    )

    totals = view.totals
    print(f"Income:       {format_currency(totals.income, view.currency)}")
    print(f"Expenses:     {format_currency(totals.expense, view.currency)}")
    print(f"Savings rate: {totals.savings_rate:.1f}%")
    print(f"Score:        {view.financial_score.score} ({view.financial_score.label})")
    if view.skipped_count:
        print(f"Skipped {view.skipped_count} transaction(s) with unreadable dates")

    print("\nBudgets:")
    print(budget_stats_frame(view.budget_stats).to_string(index=False))
    overall = view.overall
    print(
        f"{overall.on_track_count} on track, {overall.warning_count} warning, "
        f"{overall.over_budget_count} over budget"
    )

    print("\nTop categories:")
    print(breakdown_frame(view.category_breakdown).drop(columns=['Color']).to_string(index=False))

    print("\nMonthly trend:")
    print(trend_frame(view.monthly_trend).to_string(index=False))

    print("\nWeekly spending:")
    for bucket in view.weekly_spending:
        print(f"  {bucket.week_label}: {format_currency(bucket.amount, view.currency)} ({bucket.transaction_count} tx)")

    if view.alerts:
        print("\nAlerts:")
        for alert in view.alerts:
            print(f"  [{alert.severity}] {alert.message}")

    if view.insights:
        print("\nInsights:")
        for insight in view.insights:
            print(f"  {insight.title}: {insight.message}")

    print("\nRecent activity:")
    for transaction in view.recent_activity:
        print(f"  {transaction.kind:<8} {format_currency(transaction.amount, view.currency)}")
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Summarise exported transactions and budgets.')
    parser.add_argument('--transactions', required=True, help='JSON file with a transactions array')
    parser.add_argument('--budgets', help='JSON file with a budgets array')
    parser.add_argument('--categories', help='JSON file with a categories array')
    parser.add_argument('--currency', help='Three-letter currency code')
    parser.add_argument('--top', type=int, default=6, help='How many categories to show')
    parser.add_argument('--verbose', action='store_true', help='Log skipped records')
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    raise SystemExit(main(args.transactions, args.budgets, args.categories, args.currency, args.top))
