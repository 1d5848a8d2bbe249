"""
Tablayeso Takeoff Module
Segment aggregation, panel accumulation and item validation.
"""

from .segments import SegmentAggregator, SegmentTotals
from .panels import PanelAccumulator, PanelTally
from .validator import ItemValidator
from .loader import load_items, items_from_dicts

__all__ = [
    "SegmentAggregator",
    "SegmentTotals",
    "PanelAccumulator",
    "PanelTally",
    "ItemValidator",
    "load_items",
    "items_from_dicts",
]
