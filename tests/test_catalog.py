import pytest

from tablayeso.catalog import (
    MATERIAL_CATALOG,
    PANEL_TYPES,
    FinishingSystem,
    Material,
    MaterialKind,
    PanelType,
    finishing_system,
    material_for_name,
    unit_for,
    uses_heavy_framing,
)


def test_panel_types_in_display_order():
    assert PANEL_TYPES == [
        "Normal", "Moisture-Resistant", "Fire-Resistant", "High-Resistance", "Exterior",
    ]


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Normal", PanelType.NORMAL),
        ("fire-resistant", PanelType.FIRE_RESISTANT),
        ("  Exterior ", PanelType.EXTERIOR),
        ("MOISTURE_RESISTANT", PanelType.MOISTURE_RESISTANT),
        (PanelType.HIGH_RESISTANCE, PanelType.HIGH_RESISTANCE),
        ("Plywood", None),
        ("", None),
        (None, None),
        (3, None),
    ],
)
def test_panel_type_parse(value, expected):
    assert PanelType.parse(value) is expected


def test_only_exterior_uses_cement_board_system():
    for panel_type in PanelType:
        heavy = uses_heavy_framing(panel_type)
        assert heavy == (panel_type is PanelType.EXTERIOR)
    assert finishing_system(PanelType.EXTERIOR) == FinishingSystem.CEMENT_BOARD
    assert finishing_system(PanelType.NORMAL) == FinishingSystem.JOINT_COMPOUND


def test_panel_material_names():
    assert Material.panel(PanelType.NORMAL).name == "Panel:Normal"
    assert str(Material.panel(PanelType.EXTERIOR)) == "Panel:Exterior"


def test_panel_material_requires_panel_type():
    with pytest.raises(ValueError):
        Material(MaterialKind.PANEL)
    with pytest.raises(ValueError):
        Material(MaterialKind.STUDS, PanelType.NORMAL)


def test_catalog_registers_every_panel_and_material():
    for panel_type in PanelType:
        assert f"Panel:{panel_type.value}" in MATERIAL_CATALOG
    for kind in MaterialKind:
        if kind is not MaterialKind.PANEL:
            assert material_for_name(kind.base_name) == Material(kind)


@pytest.mark.parametrize(
    "name,unit",
    [
        ("Joint Compound", "box"),
        ("Paper Tape", "m"),
        ("Mesh Tape", "m"),
        ("Basecoat", "bag"),
        ("Sandpaper Grit 120", "sheet"),
        ("Panel:Fire-Resistant", "unit"),
        ('Fine Screws 1"', "unit"),
        ("Something Else", "unit"),
    ],
)
def test_unit_for(name, unit):
    assert unit_for(name) == unit
