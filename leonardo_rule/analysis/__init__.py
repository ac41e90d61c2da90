# leonardo_rule/analysis - Cross-section statistics
"""
ANALYSIS: What a measuring plane sees
=====================================

- slice: single-height intersection (SliceStats)
- post:  height sweeps (pandas DataFrame) and tree summary metrics
- sweep: many trees over a range of one parameter
"""

from .slice import analyze_slice, is_sliced, world_height
from .post import slice_profile, profile_heights, tree_summary, PROFILE_COLUMNS
from .sweep import run_parameter_sweep, evaluate_tree

__all__ = [
    'analyze_slice',
    'is_sliced',
    'world_height',
    'slice_profile',
    'profile_heights',
    'tree_summary',
    'PROFILE_COLUMNS',
    'run_parameter_sweep',
    'evaluate_tree',
]
