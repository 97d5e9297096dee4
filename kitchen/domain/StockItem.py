"""StockItem domain entity: on-hand quantity of an ingredient (read-only snapshot)."""
from typing import Any
from kitchen.utilities.constants import DEFAULT_STOCK_UNIT
from kitchen.utilities.numbers import to_quantity


class StockItem:
    def __init__(self, id: Any = None, name: str = "", current_stock: float = 0,
                 minimum_stock: float = 0, unit: str = DEFAULT_STOCK_UNIT):
        self.id = id
        self.name = name
        self.current_stock = to_quantity(current_stock)
        self.minimum_stock = to_quantity(minimum_stock)
        self.unit = unit or DEFAULT_STOCK_UNIT

    def __str__(self) -> str:
        return f"{self.name} - {self.current_stock} {self.unit} (min {self.minimum_stock})"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, StockItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates a StockItem from an API dict (camelCase or snake_case keys). Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return StockItem(
            id=d.get("id"),
            name=d.get("name") or "",
            current_stock=d.get("currentStock", d.get("current_stock")),
            minimum_stock=d.get("minimumStock", d.get("minimum_stock")),
            unit=d.get("unit") or DEFAULT_STOCK_UNIT,
        )

    @staticmethod
    def coerce(record) -> "StockItem":
        '''Returns *record* as a StockItem without touching the caller's object.'''
        if isinstance(record, StockItem):
            return StockItem(record.id, record.name, record.current_stock, record.minimum_stock, record.unit)
        return StockItem.from_dict(record)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "currentStock": self.current_stock,
            "minimumStock": self.minimum_stock,
            "unit": self.unit,
        }


__all__ = ["StockItem"]
