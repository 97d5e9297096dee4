"""Top-N rankings for chart/table display.

Every "top 3" view shares the same ordering rules: stable sort,
caller-chosen direction, never padded.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Union
from kitchen.domain.StockItem import StockItem
from kitchen.utilities.numbers import to_quantity
from kitchen.logic.reporting.trends import consumption_by_ingredient

__all__ = ["rank_top", "lowest_stock", "most_consumed"]

KeyType = Union[str, Callable[[Any], Any]]


def _key_func(key: KeyType) -> Callable[[Any], Any]:
    if callable(key):
        return key

    def _field(item):
        if isinstance(item, dict):
            value = item.get(key)
        else:
            value = getattr(item, key, None)
        return to_quantity(value)
    return _field


def rank_top(items: Iterable[Any], n: int, *, key: KeyType = 'value', descending: bool = True) -> List[Any]:
    """Return the first *n* items ordered by *key*.

    Field keys are read as quantities, so numeric strings rank by value and
    missing or malformed values rank as 0.
    Ties keep their input order in both directions. Fewer than *n* items
    returns all of them; dict items are shallow-copied so the caller's
    records are never aliased.
    """
    if n is None or n <= 0:
        return []
    ordered = sorted(items, key=_key_func(key), reverse=descending)
    return [dict(item) if isinstance(item, dict) else item for item in ordered[:n]]


def lowest_stock(stock_items: Iterable[Any], n: int = 3) -> List[Dict[str, Any]]:
    """Items still in stock, lowest quantity first.

    Each row: { id, name, quantity, unit, minimum_stock, critical }
    where critical means a minimum is set and quantity <= minimum.
    """
    rows = []
    for raw in stock_items:
        item = StockItem.coerce(raw)
        if item.current_stock <= 0:
            continue
        rows.append({
            'id': item.id,
            'name': item.name,
            'quantity': item.current_stock,
            'unit': item.unit,
            'minimum_stock': item.minimum_stock,
            'critical': bool(item.minimum_stock) and item.current_stock <= item.minimum_stock,
        })
    return rank_top(rows, n, key='quantity', descending=False)


def most_consumed(stock_items: Iterable[Any], waste_events: Iterable[Any], n: int = 3) -> List[Dict[str, Any]]:
    """Top *n* ingredients by wasted quantity."""
    return rank_top(consumption_by_ingredient(stock_items, waste_events), n, key='consumed')
