"""
Material Calculator - Derive framing, finishing and fastener quantities per item.

Walls:
- Studs from total width and post spacing
- Top and bottom track from total width
- Finishing set and board screws from total area (face 1 panel type)
- Nails, caps and secondary screws from this item's rounded studs/track

Ceilings:
- Furring and carrying channels from total area
- Angle trim from the sum of segment widths + lengths
- Hanger clips and hanger stock from carrying channels and plenum
- Finishing set from total area, coarse screws for every board type
- Nails, caps and screws from this item's rounded framing counts

Board counts go to the PanelAccumulator segment by segment; they are
never rounded per item.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
import logging
import math

from ..catalog import (
    FINISHING_MATERIALS,
    Material,
    MaterialKind,
    PanelType,
    finishing_system,
    uses_heavy_framing,
)
from ..config import EstimatorConfig
from ..models.schema import CeilingSpec, ItemKind, StructureItem, WallSpec
from ..takeoff.panels import PanelAccumulator
from ..takeoff.segments import SegmentTotals

logger = logging.getLogger(__name__)


@dataclass
class ItemQuantities:
    """Unrounded non-panel material quantities for one item."""
    item_label: str
    quantities: Dict[Material, float] = field(default_factory=dict)

    def set(self, kind: MaterialKind, quantity: float) -> None:
        self.quantities[Material(kind)] = quantity

    def get(self, kind: MaterialKind) -> float:
        return self.quantities.get(Material(kind), 0.0)

    def rounded(self) -> Dict[Material, int]:
        """Round every material up to whole purchasable units."""
        return {m: math.ceil(q) for m, q in self.quantities.items()}


class MaterialCalculator:
    """Calculate material requirements for one validated item."""

    def __init__(self, config: Optional[EstimatorConfig] = None):
        self.config = config or EstimatorConfig()

    def calculate(
        self,
        item: StructureItem,
        label: str,
        totals: SegmentTotals,
        accumulator: PanelAccumulator,
    ) -> ItemQuantities:
        """Compute quantities for a valid item and record its boards."""
        quantities = ItemQuantities(item_label=label)

        if item.kind == ItemKind.WALL:
            self._calc_wall(item.spec, totals, accumulator, quantities)
        else:
            self._calc_ceiling(item.spec, totals, accumulator, quantities)

        if logger.isEnabledFor(logging.DEBUG):
            floats = {m.name: round(q, 3) for m, q in quantities.quantities.items()}
            logger.debug(f"{label}: quantities before rounding {floats}")
        return quantities

    # ------------------------------------------------------------------
    # Panels
    # ------------------------------------------------------------------

    def _record_panels(
        self,
        panel_type: PanelType,
        totals: SegmentTotals,
        accumulator: PanelAccumulator,
    ) -> None:
        for area in totals.segment_areas:
            accumulator.record(panel_type, area)

    # ------------------------------------------------------------------
    # Finishing
    # ------------------------------------------------------------------

    def _finishing_quantity(self, kind: MaterialKind, area: float) -> float:
        """Finishing material quantity for a covered area."""
        cfg = self.config
        panels = area / cfg.panel_coverage_m2

        if kind == MaterialKind.JOINT_COMPOUND:
            return area / cfg.compound_coverage_m2
        if kind in (MaterialKind.PAPER_TAPE, MaterialKind.MESH_TAPE):
            return area * cfg.tape_m_per_m2
        if kind == MaterialKind.SANDPAPER:
            return panels / cfg.panels_per_sandpaper_sheet
        if kind == MaterialKind.BASECOAT:
            return area / cfg.basecoat_coverage_m2
        if kind in (MaterialKind.FINE_SCREWS_1IN, MaterialKind.COARSE_SCREWS_1IN):
            return panels * cfg.screws_per_panel

        raise ValueError(f"Not a finishing material: {kind}")

    def _calc_finishing(
        self,
        panel_type: PanelType,
        area: float,
        quantities: ItemQuantities,
        include_screws: bool,
    ) -> None:
        for kind in FINISHING_MATERIALS[finishing_system(panel_type)]:
            if not include_screws and kind in (
                MaterialKind.FINE_SCREWS_1IN, MaterialKind.COARSE_SCREWS_1IN
            ):
                continue
            quantities.set(kind, self._finishing_quantity(kind, area) if area > 0 else 0.0)

    # ------------------------------------------------------------------
    # Walls
    # ------------------------------------------------------------------

    def stud_count(self, total_width: float, post_spacing: float, double: bool) -> float:
        """Studs along the wall: one per bay plus the closing stud."""
        if total_width <= 0:
            return 0.0
        if total_width < post_spacing:
            studs = 2
        else:
            studs = math.floor(total_width / post_spacing) + 1
        return float(studs * 2 if double else studs)

    def track_count(self, total_width: float, double: bool) -> float:
        """Track stock lengths for the top and bottom runners."""
        if total_width <= 0:
            return 0.0
        track = (total_width * self.config.track_runs) / self.config.track_stock_length_m
        return track * 2 if double else track

    def _calc_wall(
        self,
        spec: WallSpec,
        totals: SegmentTotals,
        accumulator: PanelAccumulator,
        quantities: ItemQuantities,
    ) -> None:
        cfg = self.config
        face1 = spec.face1_panel_type
        heavy = uses_heavy_framing(face1)
        stud_kind = MaterialKind.HEAVY_STUDS if heavy else MaterialKind.STUDS
        track_kind = MaterialKind.HEAVY_TRACK if heavy else MaterialKind.TRACK

        self._record_panels(face1, totals, accumulator)
        if spec.faces == 2 and spec.face2_panel_type is not None:
            self._record_panels(spec.face2_panel_type, totals, accumulator)

        width = totals.total_width
        quantities.set(stud_kind, self.stud_count(width, spec.post_spacing, spec.double_structure))
        quantities.set(track_kind, self.track_count(width, spec.double_structure))

        self._calc_finishing(face1, totals.total_area, quantities, include_screws=True)

        # Fasteners depend on this item's rounded framing, not the global total
        if width > 0:
            rounded_studs = math.ceil(quantities.get(stud_kind))
            rounded_track = math.ceil(quantities.get(track_kind))

            nails = rounded_track * cfg.nails_per_track
            quantities.set(MaterialKind.NAILS_WITH_WASHER, nails)
            quantities.set(MaterialKind.POWDER_CAPS, nails)

            screw_kind = (
                MaterialKind.COARSE_SCREWS_HALF_IN if heavy
                else MaterialKind.FINE_SCREWS_HALF_IN
            )
            quantities.set(screw_kind, rounded_studs * cfg.secondary_screws_per_stud)

    # ------------------------------------------------------------------
    # Ceilings
    # ------------------------------------------------------------------

    def _calc_ceiling(
        self,
        spec: CeilingSpec,
        totals: SegmentTotals,
        accumulator: PanelAccumulator,
        quantities: ItemQuantities,
    ) -> None:
        cfg = self.config
        panel_type = spec.panel_type
        area = totals.total_area
        perimeter = totals.perimeter_sum

        self._record_panels(panel_type, totals, accumulator)

        furring = (area / cfg.furring_spacing_m) / cfg.channel_stock_length_m if area > 0 else 0.0
        carrying = (area / cfg.carrying_spacing_m) / cfg.channel_stock_length_m if area > 0 else 0.0
        angle = perimeter / cfg.angle_stock_length_m if perimeter > 0 else 0.0
        clips = carrying * cfg.hangers_per_carrying_channel

        quantities.set(MaterialKind.FURRING_CHANNEL, furring)
        quantities.set(MaterialKind.CARRYING_CHANNEL, carrying)
        quantities.set(MaterialKind.ANGLE_TRIM, angle)
        quantities.set(MaterialKind.HANGER_CLIPS, clips)

        rounded_clips = math.ceil(clips)
        plenum = spec.plenum
        if plenum is not None and plenum > 0 and rounded_clips > 0:
            hanger_wire = (rounded_clips * plenum) / cfg.channel_stock_length_m
        else:
            hanger_wire = 0.0
        quantities.set(MaterialKind.HANGER_WIRE, hanger_wire)

        quantities.set(
            MaterialKind.COARSE_SCREWS_1IN,
            (area / cfg.panel_coverage_m2) * cfg.screws_per_panel if area > 0 else 0.0,
        )

        self._calc_finishing(panel_type, area, quantities, include_screws=False)

        if area > 0 or perimeter > 0:
            nails = (
                math.ceil(angle) * cfg.nails_per_angle
                + math.ceil(carrying) * cfg.nails_per_carrying_channel
            )
            quantities.set(MaterialKind.NAILS_WITH_WASHER, nails)
            quantities.set(MaterialKind.POWDER_CAPS, nails)
            quantities.set(
                MaterialKind.FINE_SCREWS_HALF_IN,
                math.ceil(furring) * cfg.screws_per_furring_channel
                + rounded_clips * cfg.screws_per_hanger,
            )
