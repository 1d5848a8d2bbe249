"""
Tablayeso data models.
"""

from .schema import (
    ItemKind,
    CalculationMode,
    WallSegment,
    CeilingSegment,
    WallSpec,
    CeilingSpec,
    StructureItem,
    SegmentSummary,
    ItemSummary,
    ItemErrors,
    CalculationResult,
)

__all__ = [
    "ItemKind",
    "CalculationMode",
    "WallSegment",
    "CeilingSegment",
    "WallSpec",
    "CeilingSpec",
    "StructureItem",
    "SegmentSummary",
    "ItemSummary",
    "ItemErrors",
    "CalculationResult",
]
