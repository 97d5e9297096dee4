"""Waste reason categorization for the waste-types pie chart.

Every reason tag maps to exactly one of three display categories; anything
unrecognized lands in ``Other``.
"""
from enum import Enum
from typing import Any, Dict, Iterable, List
from kitchen.domain.WasteEvent import WasteEvent, WasteReason
from kitchen.utilities.numbers import round2

__all__ = ["DisplayCategory", "category_of", "waste_by_category", "reason_label", "REASON_LABELS"]


class DisplayCategory(str, Enum):
    EXPIRATION = "Expiration"
    PREPARATION_ERRORS = "PreparationErrors"
    OTHER = "Other"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: Dict[DisplayCategory, str] = {
    DisplayCategory.EXPIRATION: "Caducidad",
    DisplayCategory.PREPARATION_ERRORS: "Errores Elaboración",
    DisplayCategory.OTHER: "Otros (Merma, Roturas)",
}

_REASON_CATEGORY: Dict[WasteReason, DisplayCategory] = {
    WasteReason.EXPIRATION: DisplayCategory.EXPIRATION,
    WasteReason.BURNT: DisplayCategory.PREPARATION_ERRORS,
    WasteReason.WRONG_INGREDIENT: DisplayCategory.PREPARATION_ERRORS,
    WasteReason.OVER_PREPARATION: DisplayCategory.PREPARATION_ERRORS,
    WasteReason.SHRINKAGE: DisplayCategory.OTHER,
    WasteReason.BREAKAGE: DisplayCategory.OTHER,
    WasteReason.OTHER: DisplayCategory.OTHER,
}

REASON_LABELS: Dict[WasteReason, str] = {
    WasteReason.EXPIRATION: "Caducidad",
    WasteReason.BURNT: "Error - Quemado",
    WasteReason.WRONG_INGREDIENT: "Error - Ingrediente Incorrecto",
    WasteReason.OVER_PREPARATION: "Preparación Excesiva",
    WasteReason.SHRINKAGE: "Merma Natural",
    WasteReason.BREAKAGE: "Rotura/Caída",
    WasteReason.OTHER: "Otra Causa",
}


def category_of(reason_tag: Any) -> DisplayCategory:
    """Display category for a reason tag. Never raises; unknown tags are Other."""
    reason = WasteReason.parse(reason_tag)
    if reason is None:
        return DisplayCategory.OTHER
    return _REASON_CATEGORY.get(reason, DisplayCategory.OTHER)


def reason_label(reason_tag: Any) -> str:
    """Human label of a reason tag; unknown tags are echoed back."""
    reason = WasteReason.parse(reason_tag)
    if reason is None:
        return "" if reason_tag is None else str(reason_tag)
    return REASON_LABELS[reason]


def waste_by_category(waste_events: Iterable[Any]) -> List[Dict[str, Any]]:
    """Sum waste quantity per display category (pie chart rows).

    Returns rows in category order, omitting empty categories:
        [{'category': 'Expiration', 'label': 'Caducidad', 'amount': 12.5}, ...]
    """
    totals = {category: 0.0 for category in DisplayCategory}
    for raw in waste_events:
        event = WasteEvent.coerce(raw)
        totals[category_of(event.reason)] += event.quantity

    return [
        {'category': category.value, 'label': category.label, 'amount': round2(amount)}
        for category, amount in totals.items()
        if round2(amount) > 0
    ]
