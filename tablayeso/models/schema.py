"""
Takeoff Schema
Structure items supplied by the editor and the result of one calculation pass.

Items are tagged variants: `kind` selects the payload struct (WallSpec or
CeilingSpec) and the segment type. Validation and formulas switch on
`kind`, never on which fields happen to be set.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union
import math

from ..catalog import PanelType


class ItemKind(str, Enum):
    """Structure item kind."""
    WALL = "wall"
    CEILING = "ceiling"

    @property
    def display_name(self) -> str:
        return "Wall" if self is ItemKind.WALL else "Ceiling"


class CalculationMode(str, Enum):
    """How a batch with invalid items is handled."""
    STRICT = "strict"            # any invalid item blocks all totals
    BEST_EFFORT = "best-effort"  # totals for valid items, errors alongside


def is_positive_dimension(value: Any) -> bool:
    """True for a finite number strictly greater than zero."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


# =============================================================================
# SEGMENTS
# =============================================================================

@dataclass(frozen=True)
class WallSegment:
    """Rectangular wall measurement."""
    width: float
    height: float

    @property
    def is_valid(self) -> bool:
        return is_positive_dimension(self.width) and is_positive_dimension(self.height)

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class CeilingSegment:
    """Rectangular ceiling measurement."""
    width: float
    length: float

    @property
    def is_valid(self) -> bool:
        return is_positive_dimension(self.width) and is_positive_dimension(self.length)

    @property
    def area(self) -> float:
        return self.width * self.length

    def to_dict(self) -> dict:
        return {"width": self.width, "length": self.length}


Segment = Union[WallSegment, CeilingSegment]


# =============================================================================
# ITEMS
# =============================================================================

@dataclass(frozen=True)
class WallSpec:
    """Wall-only configuration."""
    faces: Any = 1
    face1_panel: Any = PanelType.NORMAL
    face2_panel: Any = None
    post_spacing: Any = 0.40
    double_structure: bool = False

    @property
    def face1_panel_type(self) -> Optional[PanelType]:
        return PanelType.parse(self.face1_panel)

    @property
    def face2_panel_type(self) -> Optional[PanelType]:
        return PanelType.parse(self.face2_panel)


@dataclass(frozen=True)
class CeilingSpec:
    """Ceiling-only configuration. plenum=None means not applicable."""
    panel: Any = PanelType.NORMAL
    plenum: Any = 0.50

    @property
    def panel_type(self) -> Optional[PanelType]:
        return PanelType.parse(self.panel)


_PAYLOADS = {
    ItemKind.WALL: (WallSpec, WallSegment),
    ItemKind.CEILING: (CeilingSpec, CeilingSegment),
}


@dataclass(frozen=True)
class StructureItem:
    """One wall or ceiling to estimate."""
    kind: ItemKind
    segments: Sequence[Segment]
    spec: Union[WallSpec, CeilingSpec]
    label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "kind", ItemKind(self.kind))
        spec_type, segment_type = _PAYLOADS[self.kind]
        if not isinstance(self.spec, spec_type):
            raise TypeError(
                f"{self.kind.value} item needs a {spec_type.__name__}, "
                f"got {type(self.spec).__name__}"
            )
        for segment in self.segments:
            if not isinstance(segment, segment_type):
                raise TypeError(
                    f"{self.kind.value} item needs {segment_type.__name__} segments, "
                    f"got {type(segment).__name__}"
                )
        object.__setattr__(self, "segments", tuple(self.segments))

    @classmethod
    def wall(
        cls,
        segments: Sequence[WallSegment],
        faces: Any = 1,
        face1_panel: Any = PanelType.NORMAL,
        face2_panel: Any = None,
        post_spacing: Any = 0.40,
        double_structure: bool = False,
        label: Optional[str] = None,
    ) -> "StructureItem":
        return cls(
            kind=ItemKind.WALL,
            segments=segments,
            spec=WallSpec(
                faces=faces,
                face1_panel=face1_panel,
                face2_panel=face2_panel,
                post_spacing=post_spacing,
                double_structure=double_structure,
            ),
            label=label,
        )

    @classmethod
    def ceiling(
        cls,
        segments: Sequence[CeilingSegment],
        panel: Any = PanelType.NORMAL,
        plenum: Any = 0.50,
        label: Optional[str] = None,
    ) -> "StructureItem":
        return cls(
            kind=ItemKind.CEILING,
            segments=segments,
            spec=CeilingSpec(panel=panel, plenum=plenum),
            label=label,
        )

    def display_label(self, number: int) -> str:
        """Label used for errors and summaries."""
        return self.label or f"{self.kind.display_name} #{number}"


# =============================================================================
# RESULTS
# =============================================================================

@dataclass
class SegmentSummary:
    """Valid segment echoed in an item summary."""
    number: int
    width: float
    height: Optional[float] = None   # walls
    length: Optional[float] = None   # ceilings
    area: float = 0.0

    def to_dict(self) -> dict:
        data = {"number": self.number, "width": self.width, "area": self.area}
        if self.height is not None:
            data["height"] = self.height
        if self.length is not None:
            data["length"] = self.length
        return data


@dataclass
class ItemSummary:
    """Computed specification of one item included in the totals."""
    number: int
    label: str
    kind: ItemKind
    segments: List[SegmentSummary] = field(default_factory=list)
    total_area: float = 0.0

    # Walls
    faces: Optional[int] = None
    face1_panel: Optional[PanelType] = None
    face2_panel: Optional[PanelType] = None
    post_spacing: Optional[float] = None
    double_structure: Optional[bool] = None
    total_width: Optional[float] = None

    # Ceilings
    panel: Optional[PanelType] = None
    plenum: Optional[float] = None
    perimeter_sum: Optional[float] = None

    # Per-item rounded quantities of non-panel materials
    materials: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = {
            "number": self.number,
            "label": self.label,
            "kind": self.kind.value,
            "segments": [s.to_dict() for s in self.segments],
            "total_area": self.total_area,
            "materials": dict(self.materials),
        }
        if self.kind == ItemKind.WALL:
            data.update({
                "faces": self.faces,
                "face1_panel": self.face1_panel.value if self.face1_panel else None,
                "face2_panel": self.face2_panel.value if self.face2_panel else None,
                "post_spacing": self.post_spacing,
                "double_structure": self.double_structure,
                "total_width": self.total_width,
            })
        else:
            data.update({
                "panel": self.panel.value if self.panel else None,
                "plenum": self.plenum,
                "perimeter_sum": self.perimeter_sum,
            })
        return data


@dataclass
class ItemErrors:
    """Validation errors of one excluded item."""
    number: int
    label: str
    messages: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"number": self.number, "label": self.label, "messages": list(self.messages)}


@dataclass
class CalculationResult:
    """Outcome of one calculation pass."""
    materials_total: Dict[str, int] = field(default_factory=dict)
    item_summaries: List[ItemSummary] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    error_groups: List[ItemErrors] = field(default_factory=list)
    mode: CalculationMode = CalculationMode.STRICT

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_materials(self) -> bool:
        return bool(self.materials_total)

    @property
    def is_exportable(self) -> bool:
        return bool(self.materials_total) and bool(self.item_summaries)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "materials_total": dict(self.materials_total),
            "item_summaries": [s.to_dict() for s in self.item_summaries],
            "errors": list(self.errors),
            "error_groups": [g.to_dict() for g in self.error_groups],
        }
