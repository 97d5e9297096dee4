"""MonthlyBucket: waste/consumption totals for one calendar month (derived, never persisted)."""
from typing import Dict, List
from kitchen.utilities.numbers import round2


class MonthlyBucket:
    def __init__(self, year: int, month: int, month_label: str):
        self.year = year
        self.month = month
        self.month_label = month_label
        self.total_consumption = 0.0
        self.ingredient_totals: Dict[str, float] = {}

    @property
    def key(self):
        return (self.year, self.month)

    def add(self, ingredient_name: str, quantity: float):
        self.total_consumption += quantity
        self.ingredient_totals[ingredient_name] = self.ingredient_totals.get(ingredient_name, 0.0) + quantity

    def rounded(self) -> "MonthlyBucket":
        '''Returns a copy with every total rounded to 2 decimals.'''
        copy = MonthlyBucket(self.year, self.month, self.month_label)
        copy.total_consumption = round2(self.total_consumption)
        copy.ingredient_totals = {name: round2(qty) for name, qty in self.ingredient_totals.items()}
        return copy

    def top_ingredients(self, n: int = 3) -> List[dict]:
        '''Most consumed ingredients of the month, ties in first-seen order.'''
        rows = [{'name': name, 'consumed': round2(qty)} for name, qty in self.ingredient_totals.items()]
        rows.sort(key=lambda r: r['consumed'], reverse=True)
        return rows[:max(n, 0)]

    def __str__(self) -> str:
        return f"{self.month_label} {self.year}: {self.total_consumption}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "year": self.year,
            "month": self.month,
            "month_label": self.month_label,
            "total_consumption": self.total_consumption,
            "ingredient_totals": dict(self.ingredient_totals),
        }


__all__ = ["MonthlyBucket"]
