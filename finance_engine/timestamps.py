"""Normalisation of transaction date fields.

Dates reach the engine in three shapes: epoch seconds, epoch milliseconds
and ISO-like strings.  :func:`normalize_timestamp` folds all of them into
a local naive :class:`~datetime.datetime` wrapped in :class:`Valid`, or
returns :class:`Invalid` when the value cannot be read.  Callers must
check which one they got; an ``Invalid`` date never falls inside any
interval.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Union

import pandas as pd

logger = logging.getLogger(__name__)

# Anything above ten digits is taken to be epoch milliseconds.
MILLISECONDS_CUTOFF = 9_999_999_999


@dataclass(frozen=True)
class Valid:
    instant: datetime

    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    raw: Any
    reason: str

    @property
    def is_valid(self) -> bool:
        return False


TimestampResult = Union[Valid, Invalid]


def _from_epoch(value: float) -> TimestampResult:
    seconds = value / 1000 if abs(value) > MILLISECONDS_CUTOFF else value
    try:
        return Valid(datetime.fromtimestamp(seconds))
    except (OverflowError, OSError, ValueError) as exc:
        return Invalid(value, f"epoch out of range: {exc}")


def _from_string(value: str) -> TimestampResult:
    text = value.strip()
    if not text:
        return Invalid(value, "empty date string")
    parsed = pd.to_datetime(text, errors='coerce')
    if pd.isna(parsed):
        return Invalid(value, "unparseable date string")
    instant = parsed.to_pydatetime()
    if instant.tzinfo is not None:
        instant = instant.astimezone().replace(tzinfo=None)
    return Valid(instant)


def normalize_timestamp(value: Any) -> TimestampResult:
    """Resolve an ambiguous date value to a single point in time.

    Args:
        value: Epoch seconds, epoch milliseconds, an ISO/calendar string,
            or an existing ``datetime``.

    Returns:
        ``Valid`` holding a local naive datetime, or ``Invalid`` with the
        raw value and a short reason.

    Example:
        >>> normalize_timestamp(1731400000) == normalize_timestamp(1731400000000)
        True
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone().replace(tzinfo=None)
        return Valid(value)
    if isinstance(value, bool) or value is None:
        return Invalid(value, "missing date")
    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return Invalid(value, "non-finite epoch")
        return _from_epoch(value)
    if isinstance(value, str):
        return _from_string(value)
    return Invalid(value, f"unsupported date type {type(value).__name__}")


def count_invalid_dates(transactions: Iterable[Any]) -> int:
    """Count records whose ``date`` cannot be normalised."""
    skipped = 0
    for transaction in transactions:
        result = normalize_timestamp(transaction.date)
        if not result.is_valid:
            skipped += 1
            logger.debug("Transaction %r has an invalid date (%s)", transaction.id, result.reason)
    return skipped
