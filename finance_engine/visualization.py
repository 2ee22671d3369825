"""Plotly figures for the derived dashboard results.

Each function takes the output of one engine operation and returns a
``plotly.graph_objects.Figure`` that the UI layer can render as-is.  The
functions never touch the raw transaction or budget records; they only
reshape the derived results.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .budgets import GOOD, OVERBUDGET, WARNING, BudgetStat
from .categories import CategoryBreakdownEntry, breakdown_frame
from .trends import MonthlyTrendPoint, WeeklySpendingBucket, trend_frame

STATUS_COLORS = {
    GOOD: "#10B981",
    WARNING: "#F59E0B",
    OVERBUDGET: "#EF4444",
}


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_category_pie_chart(entries: Sequence[CategoryBreakdownEntry], title: str | None = None) -> go.Figure:
    """Generate a pie chart of expenses by category.

    Parameters
    ----------
    entries : sequence of CategoryBreakdownEntry
        Output of :func:`finance_engine.categories.compute_category_breakdown`.
    title : str, optional
        Title for the chart.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart coloured with each category's own colour.
    """
    df = breakdown_frame(entries)
    if df.empty or df["Total"].sum() == 0:
        return _empty_figure()
    fig = px.pie(
        df,
        names="Category",
        values="Total",
        color="Category",
        color_discrete_map=dict(zip(df["Category"], df["Color"])),
    )
    fig.update_layout(title=title or "Spending by category")
    return fig


def create_monthly_trend_chart(points: Sequence[MonthlyTrendPoint], title: str | None = None) -> go.Figure:
    """Grouped income/expense bars per month with the net as a line.

    Parameters
    ----------
    points : sequence of MonthlyTrendPoint
        Output of :func:`finance_engine.trends.compute_monthly_trend`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Combined bar and line chart.
    """
    df = trend_frame(points)
    if df.empty:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Bar(x=df["Month"], y=df["Income"], name="Income", marker_color="#10B981"))
    fig.add_trace(go.Bar(x=df["Month"], y=df["Expense"], name="Expense", marker_color="#EF4444"))
    fig.add_trace(go.Scatter(x=df["Month"], y=df["Net"], name="Net", mode="lines+markers"))
    fig.update_layout(
        title=title or "Income vs expenses",
        barmode="group",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    return fig


def create_weekly_spending_chart(buckets: Sequence[WeeklySpendingBucket], title: str | None = None) -> go.Figure:
    """Bar chart of spending per weekly bucket of the current month."""
    if not buckets:
        return _empty_figure()
    df = pd.DataFrame(
        [(b.week_label, b.amount, b.transaction_count) for b in buckets],
        columns=["Week", "Amount", "Transactions"],
    )
    fig = px.bar(df, x="Week", y="Amount", hover_data=["Transactions"])
    fig.update_layout(
        title=title or "Weekly spending this month",
        xaxis_title="Week",
        yaxis_title="Amount",
    )
    return fig


def create_budget_progress_chart(stats: Sequence[BudgetStat], title: str | None = None) -> go.Figure:
    """Horizontal progress bars, one per budget, coloured by status.

    Bar length uses the clamped progress figure, so an overspent budget
    shows a full bar while its hover text keeps the real percentage.
    """
    if not stats:
        return _empty_figure("No budgets to display")
    df = pd.DataFrame({
        "Budget": [s.category_name for s in stats],
        "Progress": [s.progress_percent for s in stats],
        "Percent Used": [round(s.percent_used, 1) for s in stats],
        "Status": [s.status for s in stats],
    })
    fig = px.bar(
        df,
        x="Progress",
        y="Budget",
        orientation="h",
        color="Status",
        color_discrete_map=STATUS_COLORS,
        hover_data=["Percent Used"],
        range_x=[0, 100],
    )
    fig.update_layout(
        title=title or "Budget progress",
        xaxis_title="Percent used",
        yaxis_title="",
    )
    return fig
