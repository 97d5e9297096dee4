"""Monthly waste/consumption aggregation.

Provides:
- aggregate_monthly(waste_events): one MonthlyBucket per calendar month present, last 6 kept
- waste_trend(waste_events, today=...): fixed window of the last 6 months, zero-filled
- consumption_by_ingredient(stock_items, waste_events): waste per ingredient id joined onto stock
"""
from __future__ import annotations
from collections import defaultdict
from datetime import date as _date
from typing import Any, Dict, Iterable, List, Optional
from kitchen.domain.MonthlyBucket import MonthlyBucket
from kitchen.domain.StockItem import StockItem
from kitchen.domain.WasteEvent import WasteEvent
from kitchen.utilities.constants import DEFAULT_LOCALE, MONTH_ABBREVIATIONS, TOP_N, TREND_WINDOW_MONTHS
from kitchen.utilities.numbers import round2

__all__ = [
    "month_label", "aggregate_monthly", "to_chart_rows", "waste_trend", "consumption_by_ingredient"
]


def month_label(month: int, locale: Optional[str] = None) -> str:
    """3-letter month abbreviation (1-based month). Unknown locales fall back to the default."""
    names = MONTH_ABBREVIATIONS.get((locale or DEFAULT_LOCALE).lower(), MONTH_ABBREVIATIONS[DEFAULT_LOCALE])
    return names[month - 1]


def aggregate_monthly(waste_events: Iterable[Any], *, window: int = TREND_WINDOW_MONTHS,
                      locale: Optional[str] = None) -> List[MonthlyBucket]:
    """Group waste events by (year, month) of their timestamp.

    Ingredient totals are keyed by ingredient *name*. Buckets come back in
    chronological order, only the most recent *window* of them, with every
    total rounded to 2 decimals. Events without a usable timestamp are skipped.
    """
    buckets: Dict[tuple, MonthlyBucket] = {}
    for raw in waste_events:
        event = WasteEvent.coerce(raw)
        key = event.month_key
        if key is None:
            continue
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = MonthlyBucket(key[0], key[1], month_label(key[1], locale))
        bucket.add(event.ingredient_name, event.quantity)

    ordered = [buckets[k].rounded() for k in sorted(buckets)]
    if window is not None and window >= 0:
        ordered = ordered[-window:] if window else []
    return ordered


def to_chart_rows(buckets: Iterable[MonthlyBucket], top: int = TOP_N) -> List[Dict[str, Any]]:
    """Shape buckets for the consumption trend chart: month label, total and top ingredients."""
    return [
        {
            'month': b.month_label,
            'year': b.year,
            'total_consumption': b.total_consumption,
            'top_ingredients': b.top_ingredients(top),
        }
        for b in buckets
    ]


def _last_months(today: _date, months: int) -> List[tuple]:
    index = today.year * 12 + today.month - 1
    return [divmod(index - offset, 12) for offset in range(months - 1, -1, -1)]


def waste_trend(waste_events: Iterable[Any], *, today: Optional[_date] = None,
                months: int = TREND_WINDOW_MONTHS, locale: Optional[str] = None) -> List[Dict[str, Any]]:
    """Waste per month for the last *months* calendar months ending at *today*'s month.

    Every month in the window is present (0 when nothing was wasted):
        [{'year': 2024, 'month': 5, 'label': 'May', 'value': 12.5}, ...]
    """
    today = today or _date.today()
    window = [(year, month0 + 1) for year, month0 in _last_months(today, max(months, 0))]
    totals: Dict[tuple, float] = {key: 0.0 for key in window}

    for raw in waste_events:
        event = WasteEvent.coerce(raw)
        key = event.month_key
        if key in totals:
            totals[key] += event.quantity

    return [
        {'year': year, 'month': month, 'label': month_label(month, locale), 'value': round2(totals[(year, month)])}
        for year, month in window
    ]


def consumption_by_ingredient(stock_items: Iterable[Any], waste_events: Iterable[Any]) -> List[Dict[str, Any]]:
    """Waste summed per ingredient id, joined onto the stock items.

    Returns rows { id, name, consumed, unit, current_stock } for items with
    consumption > 0, most consumed first (ties keep stock order).
    """
    waste_by_ingredient: Dict[Any, float] = defaultdict(float)
    for raw in waste_events:
        event = WasteEvent.coerce(raw)
        waste_by_ingredient[event.ingredient_id] += event.quantity

    rows = []
    for raw in stock_items:
        item = StockItem.coerce(raw)
        consumed = round2(waste_by_ingredient.get(item.id, 0.0))
        if consumed <= 0:
            continue
        rows.append({
            'id': item.id,
            'name': item.name,
            'consumed': consumed,
            'unit': item.unit,
            'current_stock': item.current_stock,
        })
    rows.sort(key=lambda r: r['consumed'], reverse=True)
    return rows
