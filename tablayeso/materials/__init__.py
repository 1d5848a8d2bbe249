"""
Material quantity derivation for walls and ceilings.

This package provides:
- Per-item framing, finishing and fastener formulas
- Per-item rounding and cross-item totals
"""

from .calculator import MaterialCalculator, ItemQuantities
from .aggregator import MaterialAggregator

__all__ = [
    "MaterialCalculator",
    "ItemQuantities",
    "MaterialAggregator",
]
