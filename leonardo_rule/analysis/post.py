# slice profiles and tree summary metrics

import numpy as np
import pandas as pd
from typing import Dict, Iterable, List, Any

from ..model import Branch
from ..generative.tree import BASE_Y
from .slice import analyze_slice


PROFILE_COLUMNS = ['height', 'branch_count', 'current_sum', 'trunk_area', 'ratio']


def slice_profile(
    branches: List[Branch],
    trunk_area: float,
    heights: Iterable[float],
) -> pd.DataFrame:
    """
    Run the slice analysis at several heights.

    Each row is an independent analyze_slice call, so the profile shows how
    well area is conserved as the plane climbs through the crown.

    Parameters:
    -----------
    branches : List[Branch]
        Output of generate_tree
    trunk_area : float
        Trunk cross-section
    heights : Iterable[float]
        Offsets above the trunk base, in the order rows should appear

    Returns:
    --------
    pd.DataFrame
        Columns: height, branch_count, current_sum, trunk_area, ratio
        (ratio = current_sum / trunk_area, 0 when trunk_area is 0)
    """
    rows = []
    for h in heights:
        stats = analyze_slice(branches, trunk_area, float(h))
        rows.append({
            'height': stats.height,
            'branch_count': stats.branch_count,
            'current_sum': stats.current_sum,
            'trunk_area': stats.trunk_area,
            'ratio': stats.conservation_ratio,
        })
    return pd.DataFrame(rows, columns=PROFILE_COLUMNS)


def profile_heights(branches: List[Branch], n: int = 50) -> np.ndarray:
    """
    Evenly spaced offsets from the trunk base to the top of the tree.

    Returns an empty array for an empty tree.
    """
    if not branches:
        return np.array([])
    top = max(b.max_y for b in branches) - BASE_Y
    return np.linspace(0.0, top, n)


def tree_summary(
    branches: List[Branch],
    total_volume: float,
    trunk_area: float,
) -> Dict[str, Any]:
    """
    Headline metrics for a generated tree.

    Returns:
    --------
    dict with n_branches, n_main_path, n_leaves, total_length, volume,
    tree_height (top above base), min_radius, trunk_area
    """
    if not branches:
        return {
            'n_branches': 0,
            'n_main_path': 0,
            'n_leaves': 0,
            'total_length': 0.0,
            'volume': total_volume,
            'tree_height': 0.0,
            'min_radius': 0.0,
            'trunk_area': trunk_area,
        }

    return {
        'n_branches': len(branches),
        'n_main_path': sum(1 for b in branches if b.is_main_path),
        'n_leaves': sum(1 for b in branches if b.depth == 0),
        'total_length': sum(b.length for b in branches),
        'volume': total_volume,
        'tree_height': max(b.max_y for b in branches) - BASE_Y,
        'min_radius': min(b.radius for b in branches),
        'trunk_area': trunk_area,
    }
