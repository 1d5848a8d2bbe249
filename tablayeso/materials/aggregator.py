"""
Material Aggregator - Sum per-item rounded quantities across items.

Provides:
- Per-item rounding of non-panel materials
- Cross-item summation
- Merge with the final panel counts into one sorted mapping
"""

from collections import defaultdict
from typing import Dict

from ..catalog import Material
from .calculator import ItemQuantities


class MaterialAggregator:
    """Running materials total for one calculation pass."""

    def __init__(self):
        self.totals: Dict[Material, int] = defaultdict(int)

    def add_item(self, quantities: ItemQuantities) -> Dict[str, int]:
        """
        Round one item's quantities and add them to the total.

        Returns:
            The item's rounded quantities keyed by material name
        """
        rounded = quantities.rounded()
        for material, quantity in rounded.items():
            self.totals[material] += quantity
        return {m.name: q for m, q in sorted(rounded.items(), key=lambda kv: kv[0].name) if q > 0}

    def other_materials(self) -> Dict[str, int]:
        """Summed non-panel materials, zero totals omitted."""
        return {m.name: q for m, q in self.totals.items() if q > 0}

    def merge(self, panel_totals: Dict[str, int]) -> Dict[str, int]:
        """Combine panel counts with other materials, sorted by name."""
        combined = dict(panel_totals)
        for name, quantity in self.other_materials().items():
            combined[name] = combined.get(name, 0) + quantity
        return {name: combined[name] for name in sorted(combined) if combined[name] > 0}
