import math

import pytest

from tablayeso.models.schema import CeilingSegment, StructureItem, WallSegment
from tablayeso.takeoff.segments import SegmentAggregator
from tablayeso.takeoff.validator import (
    DIMENSIONS_TOO_LARGE,
    INVALID_CEILING_PANEL,
    INVALID_FACE1_PANEL,
    INVALID_FACE2_PANEL,
    INVALID_FACES,
    INVALID_PLENUM,
    INVALID_POST_SPACING,
    ItemValidator,
)


def _validate(item):
    return ItemValidator().validate(item, SegmentAggregator().aggregate(item))


@pytest.mark.parametrize(
    "kwargs,expected",
    [
        ({}, []),
        ({"faces": 2, "face2_panel": "Fire-Resistant"}, []),
        ({"faces": 3}, [INVALID_FACES]),
        ({"faces": 0}, [INVALID_FACES]),
        ({"faces": math.nan}, [INVALID_FACES]),
        ({"post_spacing": 0}, [INVALID_POST_SPACING]),
        ({"post_spacing": -0.4}, [INVALID_POST_SPACING]),
        ({"post_spacing": math.nan}, [INVALID_POST_SPACING]),
        ({"face1_panel": "Plywood"}, [INVALID_FACE1_PANEL]),
        ({"faces": 2}, [INVALID_FACE2_PANEL]),
        ({"faces": 2, "face2_panel": "Plywood"}, [INVALID_FACE2_PANEL]),
        ({"faces": 1, "face2_panel": "Plywood"}, []),
    ],
)
def test_wall_configuration(kwargs, expected):
    item = StructureItem.wall([WallSegment(3.0, 2.4)], **kwargs)
    assert _validate(item) == expected


@pytest.mark.parametrize(
    "kwargs,expected",
    [
        ({}, []),
        ({"plenum": 0}, []),
        ({"plenum": None}, []),
        ({"plenum": -0.1}, [INVALID_PLENUM]),
        ({"plenum": math.nan}, [INVALID_PLENUM]),
        ({"panel": "Plywood"}, [INVALID_CEILING_PANEL]),
        ({"panel": "exterior"}, []),
    ],
)
def test_ceiling_configuration(kwargs, expected):
    item = StructureItem.ceiling([CeilingSegment(3.0, 4.0)], **kwargs)
    assert _validate(item) == expected


def test_all_errors_are_collected():
    item = StructureItem.wall(
        [WallSegment(0.0, 2.4)],
        faces=2,
        face1_panel="Plywood",
        post_spacing=0,
    )

    assert _validate(item) == [
        "Segment 1: invalid dimensions",
        "No segment has valid dimensions",
        INVALID_POST_SPACING,
        INVALID_FACE1_PANEL,
        INVALID_FACE2_PANEL,
    ]


def test_wall_fields_not_checked_on_ceiling():
    item = StructureItem.ceiling([CeilingSegment(2.0, 2.0)], plenum=0.3)
    assert _validate(item) == []


@pytest.mark.parametrize(
    "item",
    [
        # each segment area is finite, their sum is not
        StructureItem.wall([WallSegment(1e154, 1e154), WallSegment(1e154, 1e154)]),
        StructureItem.wall([WallSegment(1e308, 1e-300)]),
        StructureItem.ceiling([CeilingSegment(1e308, 1.0)]),
    ],
)
def test_quantities_that_overflow_are_rejected(item):
    assert _validate(item) == [DIMENSIONS_TOO_LARGE]
