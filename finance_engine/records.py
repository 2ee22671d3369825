"""Plain record types consumed by the engine.

Transactions, budgets and categories arrive as JSON arrays from the data
layer.  The helpers here turn those payloads into frozen dataclasses and
are deliberately forgiving: a payload that is not a list becomes an empty
list, and a record with a missing or non-numeric amount is read as zero.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)

INCOME = 'income'
EXPENSE = 'expense'
TRANSACTION_KINDS = {INCOME, EXPENSE}
BUDGET_PERIODS = {'weekly', 'monthly', 'yearly'}

DateValue = Union[int, float, str, None]


@dataclass(frozen=True)
class CategoryRef:
    """Denormalised category reference carried on a transaction or budget."""

    name: str
    color: Optional[str] = None
    icon: Optional[str] = None


@dataclass(frozen=True)
class Category:
    id: Any
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None
    type: str = EXPENSE

    def as_ref(self) -> CategoryRef:
        return CategoryRef(name=self.name, color=self.color, icon=self.icon)


@dataclass(frozen=True)
class Transaction:
    id: Any
    amount: float
    kind: str
    date: DateValue
    category_id: Any = None
    category: Optional[CategoryRef] = None


@dataclass(frozen=True)
class Budget:
    id: Any
    category_id: Any
    amount: float
    currency: str = ''
    period: str = 'monthly'
    start_date: DateValue = None
    end_date: DateValue = None
    is_active: bool = True
    category: Optional[CategoryRef] = None


def _pick(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def to_amount(value: Any) -> float:
    """Coerce an amount field to a float, treating junk as zero."""
    if isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount):
        return 0.0
    return amount


def _as_list(payload: Any, label: str) -> list:
    if payload is None:
        return []
    if isinstance(payload, (list, tuple)):
        return list(payload)
    if isinstance(payload, Iterable) and not isinstance(payload, (str, bytes, Mapping)):
        return list(payload)
    logger.warning("Expected a list of %s, got %s; treating as empty", label, type(payload).__name__)
    return []


def _category_ref(value: Any) -> Optional[CategoryRef]:
    if isinstance(value, CategoryRef):
        return value
    if isinstance(value, Category):
        return value.as_ref()
    if isinstance(value, Mapping) and value.get('name'):
        return CategoryRef(
            name=str(value['name']),
            color=value.get('color'),
            icon=value.get('icon'),
        )
    return None


def _kind(record: Mapping[str, Any]) -> str:
    # Unknown or missing kinds stay as given so income/expense filters skip them.
    raw = str(_pick(record, 'kind', 'type', default='')).strip().lower()
    if raw not in TRANSACTION_KINDS:
        logger.debug("Transaction %r has no income/expense kind: %r", record.get('id'), raw)
    return raw


def to_flag(value: Any, default: bool = True) -> bool:
    """Read a boolean field, accepting real booleans and "true"/"false"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ('true', 'false'):
        return value.strip().lower() == 'true'
    return default


def coerce_transaction(record: Union[Transaction, Mapping[str, Any]]) -> Optional[Transaction]:
    if isinstance(record, Transaction):
        return record
    if not isinstance(record, Mapping):
        logger.debug("Skipping non-mapping transaction record: %r", record)
        return None
    return Transaction(
        id=record.get('id'),
        amount=to_amount(record.get('amount')),
        kind=_kind(record),
        date=record.get('date'),
        category_id=_pick(record, 'categoryId', 'category_id'),
        category=_category_ref(record.get('category')),
    )


def coerce_budget(record: Union[Budget, Mapping[str, Any]]) -> Optional[Budget]:
    if isinstance(record, Budget):
        return record
    if not isinstance(record, Mapping):
        logger.debug("Skipping non-mapping budget record: %r", record)
        return None
    active = _pick(record, 'isActive', 'is_active', default=True)
    return Budget(
        id=record.get('id'),
        category_id=_pick(record, 'categoryId', 'category_id'),
        amount=to_amount(record.get('amount')),
        currency=str(record.get('currency') or ''),
        period=str(record.get('period') or 'monthly'),
        start_date=_pick(record, 'startDate', 'start_date'),
        end_date=_pick(record, 'endDate', 'end_date'),
        is_active=to_flag(active),
        category=_category_ref(record.get('category')),
    )


def coerce_category(record: Union[Category, Mapping[str, Any]]) -> Optional[Category]:
    if isinstance(record, Category):
        return record
    if not isinstance(record, Mapping) or record.get('name') is None:
        return None
    return Category(
        id=record.get('id'),
        name=str(record['name']),
        icon=record.get('icon'),
        color=record.get('color'),
        type=str(record.get('type') or EXPENSE),
    )


def coerce_transactions(payload: Any) -> List[Transaction]:
    """Return the transactions in ``payload`` as :class:`Transaction` objects.

    Args:
        payload: Whatever the transactions endpoint returned.  Lists of
            dicts or ``Transaction`` instances are accepted; anything else
            is treated as an empty list.

    Returns:
        List of transactions in input order.
    """
    items = (coerce_transaction(item) for item in _as_list(payload, 'transactions'))
    return [item for item in items if item is not None]


def coerce_budgets(payload: Any) -> List[Budget]:
    items = (coerce_budget(item) for item in _as_list(payload, 'budgets'))
    return [item for item in items if item is not None]


def coerce_categories(payload: Any) -> List[Category]:
    items = (coerce_category(item) for item in _as_list(payload, 'categories'))
    return [item for item in items if item is not None]


def category_lookup(categories: Any) -> dict:
    return {category.id: category.as_ref() for category in coerce_categories(categories)}
