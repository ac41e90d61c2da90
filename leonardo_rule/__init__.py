# leonardo_rule - Branching conservation engine
"""
LEONARDO_RULE: Recursive Trees and Area Conservation
====================================================

This package provides:
- A recursive branch-geometry generator driven by Leonardo's rule
- A horizontal slice analyzer that compares branch cross-sections with
  the trunk
- Height-sweep profiles and summary metrics
- An interactive Plotly tree viewer

ARCHITECTURE:
-------------
    model.py        TreeParams, Branch, SliceStats, enums
    species.py      Species presets and the conic subset
    geometry.py     Axis-angle rotation helpers
    validation.py   Documented parameter ranges, InvalidParameterError
    generative/     Branch generator
    analysis/       Slice analyzer and derived statistics
    viz/            Visualization
"""

from .model import TreeParams, TreeSpecies, ObservationMode, Branch, SliceStats
from .generative import generate_tree
from .analysis import analyze_slice
from .validation import InvalidParameterError, validate_params

__version__ = "0.1.0"

__all__ = [
    'TreeParams',
    'TreeSpecies',
    'ObservationMode',
    'Branch',
    'SliceStats',
    'generate_tree',
    'analyze_slice',
    'InvalidParameterError',
    'validate_params',
]
