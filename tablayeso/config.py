"""
Estimator Configuration - Material norms used by the takeoff formulas.

Defaults follow the supplier data the estimator was calibrated on:
- 1.22 x 2.44 m boards, 2.98 m2 effective coverage
- 3.05 m studs and track
- 3.66 m furring and carrying channels
- 2.44 m angle trim

Norms can be overridden from rules/drywall_norms.yaml.
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional
import logging

import yaml

from . import RULES_DIR

logger = logging.getLogger(__name__)

DEFAULT_NORMS_PATH = RULES_DIR / "drywall_norms.yaml"


@dataclass(frozen=True)
class EstimatorConfig:
    """Numeric norms for panel, framing and finishing quantities."""
    # Boards
    panel_coverage_m2: float = 2.98
    small_area_threshold_m2: float = 1.5
    screws_per_panel: float = 40
    panels_per_sandpaper_sheet: float = 2

    # Finishing
    compound_coverage_m2: float = 22      # m2 per box
    basecoat_coverage_m2: float = 8       # m2 per bag
    tape_m_per_m2: float = 1

    # Wall framing
    track_stock_length_m: float = 3.05
    track_runs: int = 2                   # top and bottom runner
    nails_per_track: int = 8
    secondary_screws_per_stud: int = 4
    default_post_spacing_m: float = 0.40

    # Ceiling framing
    channel_stock_length_m: float = 3.66
    furring_spacing_m: float = 0.40
    carrying_spacing_m: float = 0.90
    angle_stock_length_m: float = 2.44
    hangers_per_carrying_channel: int = 4
    nails_per_angle: int = 5
    nails_per_carrying_channel: int = 8
    screws_per_furring_channel: int = 12
    screws_per_hanger: int = 2
    default_plenum_m: float = 0.50

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EstimatorConfig":
        """Build config from a flat mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        overrides = {}
        for key, value in (data or {}).items():
            if key not in known:
                logger.warning(f"Ignoring unknown norm: {key}")
                continue
            overrides[key] = value
        return replace(cls(), **overrides)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "EstimatorConfig":
        """
        Load norms from YAML.

        Falls back to the built-in defaults when no file exists or the
        file cannot be read.
        """
        if config_path is None:
            config_path = DEFAULT_NORMS_PATH
        config_path = Path(config_path)

        if not config_path.exists():
            logger.debug(f"No norms file at {config_path}, using defaults")
            return cls()

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not load norms from {config_path}: {e}")
            return cls()

        norms = data.get("norms", data) if isinstance(data, dict) else {}
        if not isinstance(norms, dict):
            logger.warning(f"Norms file {config_path} has no mapping, using defaults")
            return cls()

        return cls.from_dict(norms)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
