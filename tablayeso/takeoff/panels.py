"""
Panel Accumulator - Two-tier board counting per panel type.

Segments at or above the small-area threshold are rounded up to whole
boards immediately, since each cut wastes part of a board. Smaller
segments are pooled as fractions across every item of the same panel
type and rounded once at the end, so many small scraps do not each
cost a full board.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import logging
import math

from ..catalog import Material, PanelType
from ..config import EstimatorConfig

logger = logging.getLogger(__name__)


@dataclass
class PanelTally:
    """Running sums for one panel type."""
    fractional_small_sum: float = 0.0
    rounded_large_sum: int = 0

    def final_count(self) -> int:
        return math.ceil(self.fractional_small_sum) + self.rounded_large_sum


class PanelAccumulator:
    """Board counts for one calculation pass."""

    def __init__(self, config: Optional[EstimatorConfig] = None):
        self.config = config or EstimatorConfig()
        self.tallies: Dict[PanelType, PanelTally] = {p: PanelTally() for p in PanelType}

    def record(self, panel_type: PanelType, segment_area: float) -> None:
        """Add one segment face to the tally of its panel type."""
        if segment_area <= 0:
            return

        tally = self.tallies[panel_type]
        panels = segment_area / self.config.panel_coverage_m2

        if segment_area < self.config.small_area_threshold_m2:
            tally.fractional_small_sum += panels
            logger.debug(
                f"{panel_type.value}: small area {segment_area:.2f} m2, "
                f"adding {panels:.3f} fractional panels"
            )
        else:
            rounded = math.ceil(panels)
            tally.rounded_large_sum += rounded
            logger.debug(
                f"{panel_type.value}: area {segment_area:.2f} m2, "
                f"adding {rounded} panels"
            )

    def finalize(self, panel_type: PanelType) -> int:
        """Final board count for a panel type."""
        return self.tallies[panel_type].final_count()

    def totals(self) -> Dict[str, int]:
        """Final board counts keyed by material name, zero counts omitted."""
        totals = {}
        for panel_type in PanelType:
            count = self.finalize(panel_type)
            if count > 0:
                totals[Material.panel(panel_type).name] = count
        return totals
