# leonardo_rule/generative - Parametric tree generators
"""
GENERATIVE: Recursive Branch Geometry
=====================================

This package turns a parameter set into tree geometry: an ordered list of
cylindrical branch segments plus aggregate volume.

USAGE:
------
    import numpy as np
    from leonardo_rule.generative import generate_tree
    from leonardo_rule.model import TreeParams

    params = TreeParams(depth=6, exponent=2.0)
    branches, total_volume, trunk_area = generate_tree(
        params, rng=np.random.default_rng(42)
    )
"""

from .tree import generate_tree, child_radius, expected_branch_count, trunk_area

__all__ = ['generate_tree', 'child_radius', 'expected_branch_count', 'trunk_area']
