"""
Item Loader - Build structure items from YAML/JSON documents.

Document format:

    items:
      - kind: wall
        faces: 2
        face1_panel: Normal
        face2_panel: Fire-Resistant
        post_spacing: 0.40
        double_structure: false
        segments:
          - {width: 3.0, height: 2.4}
      - kind: ceiling
        panel: Moisture-Resistant
        plenum: 0.5
        segments:
          - {width: 3.0, length: 4.0}

Dimensions that are missing or not numeric are loaded as NaN so the
validator reports them against their item.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging
import math

import yaml

from .. import ItemInputError
from ..config import EstimatorConfig
from ..models.schema import (
    CeilingSegment,
    ItemKind,
    StructureItem,
    WallSegment,
)

logger = logging.getLogger(__name__)

KIND_ALIASES = {
    "wall": ItemKind.WALL,
    "muro": ItemKind.WALL,
    "ceiling": ItemKind.CEILING,
    "cielo": ItemKind.CEILING,
}

TRUE_STRINGS = {"true", "yes", "y", "1", "si", "sí"}


def _safe_float(value: Any, default: float = math.nan) -> float:
    """Convert value to float, NaN when missing or not numeric."""
    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def _safe_count(value: Any) -> Union[int, float]:
    """Whole numbers become int so faces compare cleanly."""
    number = _safe_float(value)
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return number


def _safe_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def _field(segment: Any, key: str) -> Any:
    return segment.get(key) if isinstance(segment, dict) else None


def _parse_kind(value: Any, index: int) -> ItemKind:
    kind = KIND_ALIASES.get(str(value).strip().lower()) if value is not None else None
    if kind is None:
        raise ItemInputError(f"Item {index}: unknown structure kind {value!r}")
    return kind


def item_from_dict(
    record: Dict[str, Any],
    index: int = 1,
    config: Optional[EstimatorConfig] = None,
) -> StructureItem:
    """Build one structure item from a mapping."""
    config = config or EstimatorConfig()

    if not isinstance(record, dict):
        raise ItemInputError(f"Item {index}: expected a mapping, got {type(record).__name__}")

    kind = _parse_kind(record.get("kind", record.get("type")), index)
    raw_segments = record.get("segments") or []
    if not isinstance(raw_segments, list):
        raise ItemInputError(f"Item {index}: segments must be a list")

    label = record.get("label")
    label = str(label) if label not in (None, "") else None

    if kind == ItemKind.WALL:
        segments = [
            WallSegment(
                width=_safe_float(_field(s, "width")),
                height=_safe_float(_field(s, "height")),
            )
            for s in raw_segments
        ]
        return StructureItem.wall(
            segments=segments,
            faces=_safe_count(record.get("faces", 1)),
            face1_panel=record.get("face1_panel", "Normal"),
            face2_panel=record.get("face2_panel"),
            post_spacing=_safe_float(record.get("post_spacing", config.default_post_spacing_m)),
            double_structure=_safe_bool(record.get("double_structure", False)),
            label=label,
        )

    segments = [
        CeilingSegment(
            width=_safe_float(_field(s, "width")),
            length=_safe_float(_field(s, "length")),
        )
        for s in raw_segments
    ]
    plenum = record.get("plenum", config.default_plenum_m)
    return StructureItem.ceiling(
        segments=segments,
        panel=record.get("panel", "Normal"),
        plenum=None if plenum is None else _safe_float(plenum),
        label=label,
    )


def items_from_dicts(
    records: List[Dict[str, Any]],
    config: Optional[EstimatorConfig] = None,
) -> List[StructureItem]:
    """Build structure items from a list of mappings."""
    return [item_from_dict(r, i, config) for i, r in enumerate(records, 1)]


def load_items(path: Path, config: Optional[EstimatorConfig] = None) -> List[StructureItem]:
    """
    Load structure items from a YAML or JSON file.

    Args:
        path: Document path
        config: Norms providing default post spacing and plenum

    Returns:
        List of StructureItem in document order
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ItemInputError(f"Cannot parse {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        raise ItemInputError(f"{path}: expected a list of items")

    items = items_from_dicts(data, config)
    logger.info(f"Loaded {len(items)} items from {path}")
    return items
