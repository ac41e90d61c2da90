# leonardo_rule/analysis/slice.py
"""
SLICE ANALYZER: Cross-sections at a measuring height
====================================================

PURPOSE:
--------
Cut the tree with a horizontal plane and add up the cross-sectional areas
of every branch the plane passes through. Comparing that sum with the trunk
area is the whole demonstration of Leonardo's rule:

    A_trunk  vs  Σ π r²  (over branches crossing the plane)

The height is given as an offset above the trunk base; the world plane sits
at BASE_Y + offset.

A branch crosses the plane when

    min(y_start, y_end) ≤ y_plane ≤ max(y_start, y_end)

Both ends are inclusive, so a plane exactly at a joint counts the parent
and both children, and a plane at offset 0 always counts the trunk.

No spatial index: one linear pass is plenty for a few thousand segments.
"""

from typing import Iterable, List

from ..generative.tree import BASE_Y
from ..model import Branch, SliceStats


def world_height(slice_height: float, base_y: float = BASE_Y) -> float:
    """Convert an offset above the trunk base into a world y coordinate."""
    return base_y + slice_height


def is_sliced(branch: Branch, world_y: float) -> bool:
    """True if the horizontal plane at world_y intersects the branch."""
    return branch.min_y <= world_y <= branch.max_y


def analyze_slice(
    branches: Iterable[Branch],
    trunk_area: float,
    slice_height: float,
    base_y: float = BASE_Y,
) -> SliceStats:
    """
    Aggregate the cross-sections of all branches crossing a measuring plane.

    Parameters:
    -----------
    branches : Iterable[Branch]
        Branch sequence from generate_tree (order is preserved in branch_areas)

    trunk_area : float
        Trunk cross-section, passed through unchanged

    slice_height : float
        Plane height above the trunk base

    base_y : float
        World y of the trunk base

    Returns:
    --------
    SliceStats
        trunk_area, current_sum, branch_count, branch_areas, height
    """
    y = world_height(slice_height, base_y)

    current_sum = 0.0
    areas: List[float] = []
    for branch in branches:
        if is_sliced(branch, y):
            area = branch.area
            current_sum += area
            areas.append(area)

    return SliceStats(
        trunk_area=trunk_area,
        current_sum=current_sum,
        branch_count=len(areas),
        branch_areas=tuple(areas),
        height=slice_height,
    )
