"""
Item Validator - Check structural and geometric preconditions of one item.

All applicable errors are collected; validation never stops at the first
one. Only the fields of the item's own kind are checked.
"""

from typing import List, Optional
import math

from ..config import EstimatorConfig
from ..models.schema import CeilingSpec, ItemKind, StructureItem, WallSpec
from .segments import SegmentTotals

INVALID_FACES = "Invalid number of faces (must be 1 or 2)"
INVALID_POST_SPACING = "Invalid post spacing (must be > 0)"
INVALID_FACE1_PANEL = "Invalid face 1 panel type"
INVALID_FACE2_PANEL = "Invalid face 2 panel type for a two-face wall"
INVALID_PLENUM = "Invalid plenum (must be >= 0)"
INVALID_CEILING_PANEL = "Invalid ceiling panel type"
DIMENSIONS_TOO_LARGE = "Dimensions too large to calculate"


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


class ItemValidator:
    """Validate one structure item against its segment totals."""

    def __init__(self, config: Optional[EstimatorConfig] = None):
        self.config = config or EstimatorConfig()

    def validate(self, item: StructureItem, totals: SegmentTotals) -> List[str]:
        errors = list(totals.errors)

        if item.kind == ItemKind.WALL:
            errors.extend(self._validate_wall(item.spec))
        else:
            errors.extend(self._validate_ceiling(item.spec))

        if not errors and not self._quantities_fit(item, totals):
            errors.append(DIMENSIONS_TOO_LARGE)

        return errors

    def _quantities_fit(self, item: StructureItem, totals: SegmentTotals) -> bool:
        """Every intermediate quantity of the formulas stays finite."""
        cfg = self.config
        panels = totals.total_area / cfg.panel_coverage_m2
        ratios = [
            panels * cfg.screws_per_panel,
            totals.total_area * cfg.tape_m_per_m2,
            totals.total_area / cfg.compound_coverage_m2,
            totals.total_area / cfg.basecoat_coverage_m2,
        ]

        if item.kind == ItemKind.WALL:
            width = totals.total_width
            studs = 2 * (width / item.spec.post_spacing + 2)
            track = 2 * width * cfg.track_runs / cfg.track_stock_length_m
            ratios.append(studs * cfg.secondary_screws_per_stud)
            ratios.append(track * cfg.nails_per_track)
        else:
            area = totals.total_area
            furring = area / cfg.furring_spacing_m / cfg.channel_stock_length_m
            carrying = area / cfg.carrying_spacing_m / cfg.channel_stock_length_m
            ratios.append(furring * cfg.screws_per_furring_channel)
            ratios.append(carrying * cfg.hangers_per_carrying_channel * cfg.screws_per_hanger)
            ratios.append(carrying * cfg.nails_per_carrying_channel)
            ratios.append(totals.perimeter_sum / cfg.angle_stock_length_m * cfg.nails_per_angle)
            if _is_number(item.spec.plenum):
                ratios.append(carrying * cfg.hangers_per_carrying_channel * item.spec.plenum)

        return all(math.isfinite(r) for r in ratios)

    def _validate_wall(self, spec: WallSpec) -> List[str]:
        errors = []

        if not _is_number(spec.faces) or spec.faces not in (1, 2):
            errors.append(INVALID_FACES)
        if not _is_number(spec.post_spacing) or spec.post_spacing <= 0:
            errors.append(INVALID_POST_SPACING)
        if spec.face1_panel_type is None:
            errors.append(INVALID_FACE1_PANEL)
        if spec.faces == 2 and spec.face2_panel_type is None:
            errors.append(INVALID_FACE2_PANEL)

        return errors

    def _validate_ceiling(self, spec: CeilingSpec) -> List[str]:
        errors = []

        if spec.plenum is not None and (not _is_number(spec.plenum) or spec.plenum < 0):
            errors.append(INVALID_PLENUM)
        if spec.panel_type is None:
            errors.append(INVALID_CEILING_PANEL)

        return errors
