"""
Material Catalog - Panel types, material kinds and units of measure.

Read-only reference data shared by the calculation engine and the
renderers. Every material name the engine can emit is registered in
MATERIAL_CATALOG, so unit lookup is a plain dictionary lookup.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class PanelType(str, Enum):
    """Board types a wall face or ceiling can be covered with."""
    NORMAL = "Normal"
    MOISTURE_RESISTANT = "Moisture-Resistant"
    FIRE_RESISTANT = "Fire-Resistant"
    HIGH_RESISTANCE = "High-Resistance"
    EXTERIOR = "Exterior"

    @classmethod
    def parse(cls, value: Any) -> Optional["PanelType"]:
        """Resolve a user label to a panel type, None if unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None

        key = value.strip().lower()
        for panel_type in cls:
            if key in (panel_type.value.lower(), panel_type.name.lower()):
                return panel_type
        return None


PANEL_TYPES: List[str] = [p.value for p in PanelType]


class FinishingSystem(str, Enum):
    """Seam finishing system applied over the boards."""
    JOINT_COMPOUND = "joint_compound"  # gypsum boards
    CEMENT_BOARD = "cement_board"      # exterior / cement boards


PANEL_FINISHING: Dict[PanelType, FinishingSystem] = {
    PanelType.NORMAL: FinishingSystem.JOINT_COMPOUND,
    PanelType.MOISTURE_RESISTANT: FinishingSystem.JOINT_COMPOUND,
    PanelType.FIRE_RESISTANT: FinishingSystem.JOINT_COMPOUND,
    PanelType.HIGH_RESISTANCE: FinishingSystem.JOINT_COMPOUND,
    PanelType.EXTERIOR: FinishingSystem.CEMENT_BOARD,
}


def finishing_system(panel_type: PanelType) -> FinishingSystem:
    """Finishing system used for a panel type."""
    return PANEL_FINISHING[panel_type]


def uses_heavy_framing(panel_type: PanelType) -> bool:
    """Cement boards hang on heavy-gauge studs and track."""
    return finishing_system(panel_type) == FinishingSystem.CEMENT_BOARD


class MaterialKind(Enum):
    """Purchasable material kinds: (base name, unit)."""
    PANEL = ("Panel", "unit")
    STUDS = ("Studs", "unit")
    HEAVY_STUDS = ("Heavy-Gauge Studs", "unit")
    TRACK = ("Track", "unit")
    HEAVY_TRACK = ("Heavy-Gauge Track", "unit")
    JOINT_COMPOUND = ("Joint Compound", "box")
    PAPER_TAPE = ("Paper Tape", "m")
    SANDPAPER = ("Sandpaper Grit 120", "sheet")
    BASECOAT = ("Basecoat", "bag")
    MESH_TAPE = ("Mesh Tape", "m")
    FINE_SCREWS_1IN = ('Fine Screws 1"', "unit")
    FINE_SCREWS_HALF_IN = ('Fine Screws 1/2"', "unit")
    COARSE_SCREWS_1IN = ('Coarse Screws 1"', "unit")
    COARSE_SCREWS_HALF_IN = ('Coarse Screws 1/2"', "unit")
    NAILS_WITH_WASHER = ("Nails with Washer", "unit")
    POWDER_CAPS = ("Powder-Actuated Caps", "unit")
    FURRING_CHANNEL = ("Furring Channel", "unit")
    CARRYING_CHANNEL = ("Carrying Channel", "unit")
    ANGLE_TRIM = ("Angle Trim", "unit")
    HANGER_CLIPS = ("Hanger Clips", "unit")
    HANGER_WIRE = ("Hanger Wire", "unit")

    @property
    def base_name(self) -> str:
        return self.value[0]

    @property
    def unit(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class Material:
    """A material line: kind plus panel type for board materials."""
    kind: MaterialKind
    panel_type: Optional[PanelType] = None

    def __post_init__(self):
        if (self.kind is MaterialKind.PANEL) != (self.panel_type is not None):
            raise ValueError("panel_type is required for panels and only for panels")

    @property
    def name(self) -> str:
        if self.panel_type is not None:
            return f"{self.kind.base_name}:{self.panel_type.value}"
        return self.kind.base_name

    @property
    def unit(self) -> str:
        return self.kind.unit

    @classmethod
    def panel(cls, panel_type: PanelType) -> "Material":
        return cls(MaterialKind.PANEL, panel_type)

    def __str__(self) -> str:
        return self.name


def _build_catalog() -> Dict[str, Material]:
    catalog = {}
    for kind in MaterialKind:
        if kind is MaterialKind.PANEL:
            for panel_type in PanelType:
                material = Material.panel(panel_type)
                catalog[material.name] = material
        else:
            catalog[kind.base_name] = Material(kind)
    return catalog


MATERIAL_CATALOG: Dict[str, Material] = _build_catalog()

DEFAULT_UNIT = "unit"


def material_for_name(name: str) -> Optional[Material]:
    """Look up the catalog record for an emitted material name."""
    return MATERIAL_CATALOG.get(name)


def unit_for(name: str) -> str:
    """Unit of measure for a material name."""
    material = material_for_name(name)
    return material.unit if material else DEFAULT_UNIT


# Finishing materials per system. Wall finishing includes the board
# attachment screws; ceilings use coarse screws for every board type.
FINISHING_MATERIALS: Dict[FinishingSystem, List[MaterialKind]] = {
    FinishingSystem.JOINT_COMPOUND: [
        MaterialKind.JOINT_COMPOUND,
        MaterialKind.PAPER_TAPE,
        MaterialKind.SANDPAPER,
        MaterialKind.FINE_SCREWS_1IN,
    ],
    FinishingSystem.CEMENT_BOARD: [
        MaterialKind.BASECOAT,
        MaterialKind.MESH_TAPE,
        MaterialKind.COARSE_SCREWS_1IN,
    ],
}
