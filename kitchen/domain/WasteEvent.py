"""WasteEvent domain entity: one recorded loss of an ingredient, plus the closed set of reason tags."""
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional
from kitchen.utilities.constants import UNKNOWN_INGREDIENT
from kitchen.utilities.numbers import to_quantity


class WasteReason(str, Enum):
    """Reason tags as sent by the registration form."""
    EXPIRATION = "caducidad"
    BURNT = "quemado"
    WRONG_INGREDIENT = "ingrediente-incorrecto"
    OVER_PREPARATION = "preparacion-excesiva"
    SHRINKAGE = "merma"
    BREAKAGE = "rotura"
    OTHER = "otro"

    @classmethod
    def parse(cls, tag: Any) -> Optional["WasteReason"]:
        '''Returns the matching reason or None for unknown tags.'''
        if isinstance(tag, WasteReason):
            return tag
        if not isinstance(tag, str):
            return None
        try:
            return cls(tag.strip().lower())
        except ValueError:
            return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date/datetime (trailing 'Z' allowed). Returns None when unusable."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class WasteEvent:
    def __init__(self, id: Any = None, ingredient_id: Any = None, ingredient_name: str = UNKNOWN_INGREDIENT,
                 quantity: float = 0, reason: Any = None, timestamp: Any = None):
        self.id = id
        self.ingredient_id = ingredient_id
        self.ingredient_name = ingredient_name or UNKNOWN_INGREDIENT
        self.quantity = to_quantity(quantity)
        # unknown tags are kept verbatim; the categorizer maps them to Other
        self.reason = reason.value if isinstance(reason, WasteReason) else reason
        self.timestamp = parse_timestamp(timestamp)

    @property
    def month_key(self):
        '''(year, month) of the event, or None without a usable timestamp.'''
        if self.timestamp is None:
            return None
        return (self.timestamp.year, self.timestamp.month)

    def __str__(self) -> str:
        when = self.timestamp.isoformat() if self.timestamp else "-"
        return f"{self.ingredient_name} - {self.quantity} ({self.reason}) @ {when}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a WasteEvent from an API dict (camelCase or snake_case keys). Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return WasteEvent(
            id=d.get("id"),
            ingredient_id=d.get("ingredientId", d.get("ingredient_id")),
            ingredient_name=d.get("ingredientName", d.get("ingredient_name")),
            quantity=d.get("quantity"),
            reason=d.get("reason"),
            timestamp=d.get("timestamp"),
        )

    @staticmethod
    def coerce(record) -> "WasteEvent":
        if isinstance(record, WasteEvent):
            return WasteEvent(record.id, record.ingredient_id, record.ingredient_name,
                              record.quantity, record.reason, record.timestamp)
        return WasteEvent.from_dict(record)

    def to_dict(self):
        return {
            "id": self.id,
            "ingredientId": self.ingredient_id,
            "ingredientName": self.ingredient_name,
            "quantity": self.quantity,
            "reason": self.reason,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


__all__ = ["WasteEvent", "WasteReason", "parse_timestamp"]
