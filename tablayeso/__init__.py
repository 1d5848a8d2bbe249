"""
Tablayeso Materials Estimator
Drywall and plaster material takeoff for walls and suspended ceilings.
"""

__version__ = "2.0.0"
__author__ = "Tablayeso"

from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
RULES_DIR = PROJECT_ROOT / "rules"


class TablayesoError(Exception):
    """Base error for the estimator."""


class ItemInputError(TablayesoError, ValueError):
    """Input document cannot be turned into structure items."""


class ExportRefused(TablayesoError):
    """Export requested without a successful calculation."""
