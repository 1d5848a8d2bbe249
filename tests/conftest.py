from __future__ import annotations

import pytest

from tablayeso.config import EstimatorConfig
from tablayeso.engine import TakeoffEngine
from tablayeso.models.schema import CeilingSegment, StructureItem, WallSegment


@pytest.fixture
def config() -> EstimatorConfig:
    return EstimatorConfig()


@pytest.fixture
def engine(config: EstimatorConfig) -> TakeoffEngine:
    return TakeoffEngine(config)


@pytest.fixture
def simple_wall() -> StructureItem:
    """3.0 m x 2.4 m single-face Normal wall at 0.40 m spacing."""
    return StructureItem.wall([WallSegment(3.0, 2.4)])


@pytest.fixture
def small_ceiling() -> StructureItem:
    """1.0 m x 1.2 m Normal ceiling, below the small-area threshold."""
    return StructureItem.ceiling([CeilingSegment(1.0, 1.2)])


@pytest.fixture
def room_ceiling() -> StructureItem:
    """3.0 m x 4.0 m Normal ceiling with a 0.50 m plenum."""
    return StructureItem.ceiling([CeilingSegment(3.0, 4.0)], plenum=0.5)


@pytest.fixture
def invalid_wall() -> StructureItem:
    return StructureItem.wall([WallSegment(0.0, 2.4)], faces=3)
