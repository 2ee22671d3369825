"""Transaction selection by category, kind and time interval."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

import pandas as pd

from .config import get_setting
from .periods import Interval
from .records import Transaction, coerce_transactions
from .timestamps import normalize_timestamp

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ['id', 'amount', 'kind', 'when', 'category_id', 'category_name', 'category_color']


def filter_transactions(
    transactions: Iterable[Transaction],
    interval: Optional[Interval] = None,
    category_id: Any = None,
    kind: Optional[str] = None,
) -> List[Transaction]:
    """Return the transactions matching every given criterion.

    Args:
        transactions: Source transactions; never modified.
        interval: Time window.  When given, a transaction with an
            unparseable date is excluded.
        category_id: Only keep this category when not ``None``.
        kind: ``income`` or ``expense`` when not ``None``.

    Returns:
        Matching transactions in their original order.
    """
    matched: List[Transaction] = []
    for transaction in coerce_transactions(transactions):
        if category_id is not None and transaction.category_id != category_id:
            continue
        if kind is not None and transaction.kind != kind:
            continue
        if interval is not None:
            result = normalize_timestamp(transaction.date)
            if not result.is_valid:
                logger.debug("Excluding transaction %r: %s", transaction.id, result.reason)
                continue
            if not interval.contains(result.instant):
                continue
        matched.append(transaction)
    return matched


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Build a DataFrame view of ``transactions`` for grouping.

    Rows with unparseable dates are kept with ``NaT`` in ``when`` so that
    date-free aggregations still see them.  Category names fall back to
    the configured "Uncategorized" label.
    """
    uncategorized = get_setting('display', 'uncategorized_name', default='Uncategorized')
    default_color = get_setting('display', 'default_color', default='#6B7280')

    rows = []
    for transaction in coerce_transactions(transactions):
        result = normalize_timestamp(transaction.date)
        ref = transaction.category
        rows.append({
            'id': transaction.id,
            'amount': float(transaction.amount),
            'kind': transaction.kind,
            'when': result.instant if result.is_valid else pd.NaT,
            'category_id': transaction.category_id,
            'category_name': ref.name if ref else uncategorized,
            'category_color': (ref.color if ref and ref.color else default_color),
        })

    frame = pd.DataFrame(rows, columns=FRAME_COLUMNS, dtype=object)
    frame['when'] = pd.to_datetime(frame['when'])
    frame['amount'] = pd.to_numeric(frame['amount'], errors='coerce').fillna(0.0)
    return frame
