"""Core analytics logic layer.

Subpackages:
- reporting: monthly trends, efficiency metrics, rankings, waste categories
- stock: stock level classification

Everything here is a pure function over caller-supplied records: no I/O and
no module-level state.
"""
__all__ = ["reporting", "stock"]
