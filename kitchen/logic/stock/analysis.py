"""Stock level helpers for the stock table and its alert banner."""
from __future__ import annotations
from typing import Any, Dict, Iterable, List
from kitchen.domain.StockItem import StockItem
from kitchen.utilities.constants import CRITICAL_STOCK_RATIO
from kitchen.utilities.numbers import to_quantity

__all__ = ["STOCK_STATUSES", "stock_status", "stock_status_counts", "classify_stock"]

STOCK_STATUSES = ('empty', 'critical', 'low', 'ok')


def stock_status(current: Any, minimum: Any) -> str:
    """Classify a stock level: empty, critical (<= half the minimum), low (<= minimum) or ok."""
    current = to_quantity(current)
    minimum = to_quantity(minimum)
    if current <= 0:
        return 'empty'
    if current <= minimum * CRITICAL_STOCK_RATIO:
        return 'critical'
    if current <= minimum:
        return 'low'
    return 'ok'


def classify_stock(stock_items: Iterable[Any]) -> List[Dict[str, Any]]:
    """Stock rows with their status attached, in input order."""
    rows = []
    for raw in stock_items:
        item = StockItem.coerce(raw)
        row = item.to_dict()
        row['status'] = stock_status(item.current_stock, item.minimum_stock)
        rows.append(row)
    return rows


def stock_status_counts(stock_items: Iterable[Any]) -> Dict[str, int]:
    counts = {status: 0 for status in STOCK_STATUSES}
    for row in classify_stock(stock_items):
        counts[row['status']] += 1
    counts['total'] = sum(counts[s] for s in STOCK_STATUSES)
    counts['needs_attention'] = counts['empty'] + counts['critical'] + counts['low']
    return counts
