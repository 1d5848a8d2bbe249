"""
Segment Aggregator - Validate and sum the rectangular segments of one item.

Walls produce total area and total width (stud/track runs).
Ceilings produce total area and the sum of width + length over segments,
used as the trim length estimate.
"""

from dataclasses import dataclass, field
from typing import List, Tuple
import logging
import math

from ..models.schema import ItemKind, Segment, StructureItem

logger = logging.getLogger(__name__)

NO_SEGMENTS = "At least one segment is required"
NO_VALID_SEGMENTS = "No segment has valid dimensions"


@dataclass
class SegmentTotals:
    """Aggregated measurements of one item."""
    kind: ItemKind
    total_area: float = 0.0
    total_width: float = 0.0
    perimeter_sum: float = 0.0
    valid_segments: List[Tuple[int, Segment]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def has_valid_segment(self) -> bool:
        return bool(self.valid_segments)

    @property
    def segment_areas(self) -> List[float]:
        return [segment.area for _, segment in self.valid_segments]


class SegmentAggregator:
    """Sum valid segments; record an error for each invalid one."""

    def aggregate(self, item: StructureItem) -> SegmentTotals:
        totals = SegmentTotals(kind=item.kind)

        if not item.segments:
            totals.errors.append(NO_SEGMENTS)
            return totals

        for number, segment in enumerate(item.segments, 1):
            if not segment.is_valid or not math.isfinite(segment.area):
                totals.errors.append(f"Segment {number}: invalid dimensions")
                logger.debug(f"Skipping segment {number}: {segment}")
                continue

            totals.valid_segments.append((number, segment))
            totals.total_area += segment.area

            if item.kind == ItemKind.WALL:
                totals.total_width += segment.width
            else:
                totals.perimeter_sum += segment.width + segment.length

        if not totals.has_valid_segment:
            totals.errors.append(NO_VALID_SEGMENTS)

        return totals
