"""Efficiency and waste metrics for the dashboard gauges, cards and tables.

These numbers are advisory: every public function here catches unexpected
errors, logs them and falls back to a placeholder instead of raising.
"""
from __future__ import annotations
import logging
from collections import OrderedDict
from datetime import date as _date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Union
from kitchen.domain.StockItem import StockItem
from kitchen.domain.WasteEvent import WasteEvent
from kitchen.logic.reporting.categories import DisplayCategory, category_of, reason_label
from kitchen.utilities.constants import (
    AVERAGE_UNIT_PRICE,
    DEFAULT_EFFICIENCY,
    DEFAULT_WASTE_PERCENTAGE,
    EFFICIENCY_GOOD,
    EFFICIENCY_WARNING,
    PRODUCT_REFERENCE_USAGE,
)
from kitchen.utilities.numbers import clamp, round2, round_half_up

logger = logging.getLogger(__name__)

__all__ = [
    "efficiency", "waste_percentage", "efficiency_and_waste", "recent_waste",
    "usage_efficiency", "monthly_comparison", "product_efficiency", "dashboard_stats",
]


def _naive(ts: datetime) -> datetime:
    if ts.tzinfo is not None:
        return ts.astimezone().replace(tzinfo=None)
    return ts


def recent_waste(waste_items: Iterable[Any], days: int, *, now: Optional[datetime] = None) -> List[WasteEvent]:
    """Waste events recorded within the last *days* days (undated events are dropped)."""
    cutoff = _naive(now or datetime.now()) - timedelta(days=days)
    recent = []
    for raw in waste_items:
        event = WasteEvent.coerce(raw)
        if event.timestamp is not None and _naive(event.timestamp) >= cutoff:
            recent.append(event)
    return recent


def _waste_ratio(stock: List[StockItem], waste: List[WasteEvent]) -> Optional[float]:
    """Total waste as a percentage of total stock; None when there is no stock."""
    total_stock = sum(item.current_stock for item in stock)
    total_waste = sum(event.quantity for event in waste)
    if total_stock == 0:
        return None
    return total_waste / total_stock * 100


def _rounded_waste_pct(ratio: float) -> float:
    """Waste share rounded once; efficiency is 100 minus this value."""
    return round2(clamp(ratio))


def efficiency(stock_items: Iterable[Any], waste_items: Iterable[Any]) -> float:
    """100 minus the waste percentage, in [0, 100].

    Empty stock or waste data gives the 85 placeholder; zero total stock
    with waste recorded counts as fully efficient (100).
    """
    try:
        stock = [StockItem.coerce(r) for r in stock_items]
        waste = [WasteEvent.coerce(r) for r in waste_items]
        if not stock or not waste:
            return DEFAULT_EFFICIENCY
        ratio = _waste_ratio(stock, waste)
        if ratio is None:
            return 100.0
        return round2(100 - _rounded_waste_pct(ratio))
    except Exception:
        logger.exception("Efficiency calculation failed, using default %s", DEFAULT_EFFICIENCY)
        return DEFAULT_EFFICIENCY


def waste_percentage(stock_items: Iterable[Any], waste_items: Iterable[Any], *,
                     window_days: Optional[int] = None, now: Optional[datetime] = None) -> float:
    """Total waste over total stock as a percentage in [0, 100].

    With *window_days* only waste from the last N days is counted. Empty
    inputs give the 8 placeholder; zero total stock gives 0.
    """
    try:
        stock = [StockItem.coerce(r) for r in stock_items]
        waste = [WasteEvent.coerce(r) for r in waste_items]
        if not stock or not waste:
            return DEFAULT_WASTE_PERCENTAGE
        if window_days is not None:
            waste = recent_waste(waste, window_days, now=now)
        ratio = _waste_ratio(stock, waste)
        if ratio is None:
            return 0.0
        return _rounded_waste_pct(ratio)
    except Exception:
        logger.exception("Waste percentage calculation failed, using default %s", DEFAULT_WASTE_PERCENTAGE)
        return DEFAULT_WASTE_PERCENTAGE


def efficiency_and_waste(stock_items: Iterable[Any], waste_items: Iterable[Any]) -> Dict[str, float]:
    stock = list(stock_items)
    waste = list(waste_items)
    return {
        'efficiency': efficiency(stock, waste),
        'waste_percentage': waste_percentage(stock, waste),
    }


def _level(value: float) -> str:
    if value >= EFFICIENCY_GOOD:
        return 'success'
    if value >= EFFICIENCY_WARNING:
        return 'warning'
    return 'danger'


def usage_efficiency(stock_items: Iterable[Any], waste_items: Iterable[Any]) -> Dict[str, Any]:
    """Usage-vs-waste card: waste share of (stock + waste).

    Returns { efficiency, level, trend: { is_positive, text } }.
    """
    try:
        total_stock = sum(StockItem.coerce(r).current_stock for r in stock_items)
        total_waste = sum(WasteEvent.coerce(r).quantity for r in waste_items)
        usage = total_stock + total_waste
        waste_pct = total_waste / usage * 100 if usage > 0 else 0
        value = round2(clamp(100 - waste_pct))
    except Exception:
        logger.exception("Usage efficiency calculation failed, using default %s", DEFAULT_EFFICIENCY)
        value = DEFAULT_EFFICIENCY

    good = value >= EFFICIENCY_GOOD
    return {
        'efficiency': value,
        'level': _level(value),
        'trend': {'is_positive': good, 'text': "Buen nivel" if good else "Necesita mejora"},
    }


def _previous_month(today: _date):
    if today.month == 1:
        return (today.year - 1, 12)
    return (today.year, today.month - 1)


def monthly_comparison(waste_events: Iterable[Any], *,
                       category: Union[DisplayCategory, str, None] = None,
                       today: Optional[_date] = None) -> Dict[str, Any]:
    """This month's waste against last month's, optionally for one display category.

    Returns { count, quantity, previous_quantity, trend } where trend is None
    when last month had no waste, else { is_positive, change, text }; less
    waste than last month is positive.
    """
    try:
        today = today or _date.today()
        wanted = DisplayCategory(category) if category is not None else None
        current_key = (today.year, today.month)
        previous_key = _previous_month(today)

        count = 0
        quantity = 0.0
        previous_quantity = 0.0
        for raw in waste_events:
            event = WasteEvent.coerce(raw)
            if wanted is not None and category_of(event.reason) != wanted:
                continue
            if event.month_key == current_key:
                count += 1
                quantity += event.quantity
            elif event.month_key == previous_key:
                previous_quantity += event.quantity

        trend = None
        if previous_quantity > 0:
            change = (quantity - previous_quantity) / previous_quantity * 100
            pct = round_half_up(abs(change))
            trend = {'is_positive': change < 0, 'change': pct, 'text': f"{pct}% vs mes pasado"}

        return {
            'count': count,
            'quantity': round2(quantity),
            'previous_quantity': round2(previous_quantity),
            'trend': trend,
        }
    except Exception:
        logger.exception("Monthly comparison failed (category=%s)", category)
        return {'count': 0, 'quantity': 0.0, 'previous_quantity': 0.0, 'trend': None}


def product_efficiency(waste_events: Iterable[Any]) -> List[Dict[str, Any]]:
    """Per-ingredient efficiency table rows.

    Waste is measured against a fixed reference usage and priced at an
    average unit price until real usage/price data is available.
    Row: { id, name, efficiency, waste_percentage, main_cause, loss }
    """
    try:
        products: "OrderedDict[Any, Dict[str, Any]]" = OrderedDict()
        for raw in waste_events:
            event = WasteEvent.coerce(raw)
            product = products.get(event.ingredient_id)
            if product is None:
                product = products[event.ingredient_id] = {
                    'id': event.ingredient_id,
                    'name': event.ingredient_name,
                    'total_waste': 0.0,
                    'reasons': OrderedDict(),
                }
            product['total_waste'] += event.quantity
            product['reasons'][event.reason] = product['reasons'].get(event.reason, 0) + 1

        rows = []
        for product in products.values():
            waste_pct = min(product['total_waste'] / PRODUCT_REFERENCE_USAGE * 100, 100)
            main_cause = "Ninguna"
            if product['reasons']:
                # max() keeps the first reason seen on ties
                main_cause = reason_label(max(product['reasons'], key=product['reasons'].get))
            rows.append({
                'id': product['id'],
                'name': product['name'],
                'efficiency': round_half_up(100 - waste_pct),
                'waste_percentage': round_half_up(waste_pct),
                'main_cause': main_cause,
                'loss': round2(product['total_waste'] * AVERAGE_UNIT_PRICE),
            })
        return rows
    except Exception:
        logger.exception("Product efficiency table failed")
        return []


def dashboard_stats(stock_items: Iterable[Any], waste_items: Iterable[Any], *,
                    window_days: Optional[int] = None, today: Optional[_date] = None,
                    now: Optional[datetime] = None) -> Dict[str, Any]:
    """Everything the dashboard stat cards and gauges show, in one payload."""
    stock = list(stock_items)
    waste = list(waste_items)
    return {
        'efficiency': efficiency(stock, waste),
        'waste_percentage': waste_percentage(stock, waste, window_days=window_days, now=now),
        'usage': usage_efficiency(stock, waste),
        'total_waste': monthly_comparison(waste, today=today),
        'expired': monthly_comparison(waste, category=DisplayCategory.EXPIRATION, today=today),
        'preparation_errors': monthly_comparison(waste, category=DisplayCategory.PREPARATION_ERRORS, today=today),
    }
