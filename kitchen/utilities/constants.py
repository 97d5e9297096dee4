from typing import Final

# Placeholder values shown before any stock/waste data exists
DEFAULT_EFFICIENCY: Final[float] = 85
DEFAULT_WASTE_PERCENTAGE: Final[float] = 8

TREND_WINDOW_MONTHS: Final[int] = 6
TOP_N: Final[int] = 3

# Usage-vs-waste card thresholds
EFFICIENCY_GOOD: Final[float] = 80
EFFICIENCY_WARNING: Final[float] = 60

# Stock at or below this share of the minimum is critical
CRITICAL_STOCK_RATIO: Final[float] = 0.5

# Product efficiency table has no usage/price feed yet
PRODUCT_REFERENCE_USAGE: Final[float] = 100
AVERAGE_UNIT_PRICE: Final[float] = 5

UNKNOWN_INGREDIENT: Final[str] = "Ingrediente desconocido"
DEFAULT_STOCK_UNIT: Final[str] = "unidades"
DEFAULT_LOCALE: Final[str] = "es"

MONTH_ABBREVIATIONS: Final[dict[str, list[str]]] = {
    "es": ["Ene", "Feb", "Mar", "Abr", "May", "Jun", "Jul", "Ago", "Sep", "Oct", "Nov", "Dic"],
    "en": ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
}
