"""
Takeoff Engine - One calculation pass over a batch of structure items.

Pipeline per item:
1. Segment aggregation (area, width, width + length sums)
2. Item validation (invalid items are excluded, errors collected)
3. Material calculation (boards go to the panel accumulator)
4. Per-item rounding and summation of the other materials

Every pass allocates its own accumulator and aggregator; nothing is
kept between calls.

Usage:
    from tablayeso.engine import calculate_materials
    result = calculate_materials(items)
"""

from typing import Optional, Sequence
import logging

from .config import EstimatorConfig
from .materials.aggregator import MaterialAggregator
from .materials.calculator import MaterialCalculator
from .models.schema import (
    CalculationMode,
    CalculationResult,
    ItemErrors,
    ItemKind,
    ItemSummary,
    SegmentSummary,
    StructureItem,
)
from .takeoff.panels import PanelAccumulator
from .takeoff.segments import SegmentAggregator, SegmentTotals
from .takeoff.validator import ItemValidator

logger = logging.getLogger(__name__)

NO_ITEMS = "No items to calculate. Add at least one wall or ceiling."
NO_VALID_ITEMS = "No valid items to calculate."


class TakeoffEngine:
    """Compute the materials total for a batch of items."""

    def __init__(self, config: Optional[EstimatorConfig] = None):
        self.config = config or EstimatorConfig()
        self.segment_aggregator = SegmentAggregator()
        self.validator = ItemValidator(self.config)
        self.calculator = MaterialCalculator(self.config)

    def calculate(
        self,
        items: Sequence[StructureItem],
        mode: CalculationMode = CalculationMode.STRICT,
    ) -> CalculationResult:
        """
        Run one calculation pass.

        Args:
            items: Structure items in display order
            mode: STRICT returns only errors when any item is invalid;
                BEST_EFFORT returns totals for the valid items as well

        Returns:
            CalculationResult
        """
        mode = CalculationMode(mode)
        result = CalculationResult(mode=mode)

        if not items:
            logger.info("No items to calculate")
            result.errors.append(NO_ITEMS)
            return result

        logger.info(f"Calculating materials for {len(items)} items ({mode.value})")

        accumulator = PanelAccumulator(self.config)
        aggregator = MaterialAggregator()

        for number, item in enumerate(items, 1):
            label = item.display_label(number)
            totals = self.segment_aggregator.aggregate(item)
            item_errors = self.validator.validate(item, totals)

            if item_errors:
                logger.warning(f"{label} excluded from totals: {', '.join(item_errors)}")
                result.error_groups.append(ItemErrors(number, label, item_errors))
                continue

            quantities = self.calculator.calculate(item, label, totals, accumulator)
            summary = self._summarize(item, number, label, totals)
            summary.materials = aggregator.add_item(quantities)
            result.item_summaries.append(summary)

        for group in result.error_groups:
            result.errors.extend(f"{group.label}: {message}" for message in group.messages)

        if not result.item_summaries:
            result.errors.append(NO_VALID_ITEMS)
            return result

        if result.error_groups and mode == CalculationMode.STRICT:
            logger.info(f"{len(result.error_groups)} invalid items, no totals produced")
            result.item_summaries = []
            return result

        result.materials_total = aggregator.merge(accumulator.totals())
        logger.info(
            f"Calculated {len(result.materials_total)} material lines "
            f"from {len(result.item_summaries)} items"
        )
        return result

    def _summarize(
        self,
        item: StructureItem,
        number: int,
        label: str,
        totals: SegmentTotals,
    ) -> ItemSummary:
        """Echo the validated input with its computed measurements."""
        summary = ItemSummary(
            number=number,
            label=label,
            kind=item.kind,
            total_area=totals.total_area,
        )

        for segment_number, segment in totals.valid_segments:
            if item.kind == ItemKind.WALL:
                summary.segments.append(SegmentSummary(
                    number=segment_number,
                    width=segment.width,
                    height=segment.height,
                    area=segment.area,
                ))
            else:
                summary.segments.append(SegmentSummary(
                    number=segment_number,
                    width=segment.width,
                    length=segment.length,
                    area=segment.area,
                ))

        spec = item.spec
        if item.kind == ItemKind.WALL:
            summary.faces = int(spec.faces)
            summary.face1_panel = spec.face1_panel_type
            summary.face2_panel = spec.face2_panel_type if spec.faces == 2 else None
            summary.post_spacing = spec.post_spacing
            summary.double_structure = bool(spec.double_structure)
            summary.total_width = totals.total_width
        else:
            summary.panel = spec.panel_type
            summary.plenum = spec.plenum
            summary.perimeter_sum = totals.perimeter_sum

        return summary


def calculate_materials(
    items: Sequence[StructureItem],
    mode: CalculationMode = CalculationMode.STRICT,
    config: Optional[EstimatorConfig] = None,
) -> CalculationResult:
    """Run one calculation pass with a fresh engine."""
    return TakeoffEngine(config).calculate(items, mode)
