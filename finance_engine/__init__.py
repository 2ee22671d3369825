"""Top‑level package for the finance engine.

The engine turns raw transaction and budget records into the figures a
personal-finance dashboard displays.  Apart from reading its configuration
file once, it performs no I/O and never modifies its inputs.  The primary
modules are:

* ``budgets`` – spend, remaining amount and status per budget
* ``categories`` – ranked expense breakdown by category
* ``trends`` – monthly income/expense series and weekly spending buckets
* ``summary`` – totals, savings rate, alerts, insights and the financial score
* ``dashboard`` – one call that derives the whole view-model
* ``visualization`` – Plotly figures built from the derived results

To print the derived view for a JSON export you can execute:

```bash
python scripts/summarize_export.py --transactions tx.json --budgets budgets.json
```
"""

from .budgets import compute_budget_stats, compute_overall_stats
from .categories import compute_category_breakdown
from .dashboard import build_dashboard_view
from .summary import compute_alerts
from .trends import compute_monthly_trend, compute_weekly_spending

__all__ = [
    "compute_budget_stats",
    "compute_category_breakdown",
    "compute_monthly_trend",
    "compute_weekly_spending",
    "compute_overall_stats",
    "compute_alerts",
    "build_dashboard_view",
]
