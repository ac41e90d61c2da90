# leonardo_rule/generative/tree.py
"""
TREE GENERATOR: Recursive Leonardo branching
============================================

PURPOSE:
--------
Turn a TreeParams parameter set into an ordered list of Branch segments,
the total wood volume and the trunk cross-section. This is the geometry
engine everything else (slice analysis, rendering, exports) reads from.

ALGORITHM:
----------
Depth-first, two children per node:

    grow(start, dir, r, remaining, L, main):
        emit Branch(start → start + dir·L, r, remaining, π r² L, main)
        if remaining == 0: stop
        r' = min(r / 2^(1/n) × branch_thickness, 0.95 r)
        grow(end, leader_dir,  r', remaining − 1, L × ratio,           main)
        grow(end, lateral_dir, r', remaining − 1, L × ratio (× 0.7),   False)

- LEADER: bends by a small fraction (20%) of the branching angle. The chain
  of leaders from the trunk is the "main path" (apical dominance).
- LATERAL: bends by the full angle (×1.5 for conic species) in the opposite
  rotational sense, and is shorter for conic species.

Each bend is about a random horizontal axis (uniform azimuth) plus a
symmetric jitter of ±randomness/2 radians.

LEONARDO'S RULE:
----------------
With area ∝ r^n, splitting r into two equal children conserves "area" when

    r^n = 2 · r_child^n   →   r_child = r / 2^(1/n)

The branch_thickness multiplier deliberately breaks conservation so users
can see the effect. The 95% taper cap keeps every child visibly thinner
than its parent even when exponent/multiplier would make it thicker.

DEPTH:
------
depth counts branching levels above the trunk: depth 0 is no tree at all,
depth 1 is a trunk with two children, and depth d gives 2^(d+1) − 1
branches in total.
"""

import logging
import math
from typing import List, Optional, Tuple

import numpy as np

from ..geometry import UP, horizontal_axis, rotate_about_axis, normalize
from ..model import Branch, TreeParams
from ..species import is_conic
from ..validation import InvalidParameterError, find_non_finite


logger = logging.getLogger(__name__)


BASE_POINT = (0.0, -2.5, 0.0)
BASE_Y = BASE_POINT[1]
TRUNK_LENGTH = 1.8
MAX_TAPER = 0.95
# Below this 2^(1/n) overflows (n ~ 1e-3) or radii underflow to 0.0 by depth 12
MIN_EXPONENT = 0.1
LEADER_ANGLE_FRACTION = 0.2
CONIC_LATERAL_ANGLE_SCALE = 1.5
CONIC_LATERAL_LENGTH_SCALE = 0.7


def trunk_area(params: TreeParams) -> float:
    """Trunk cross-sectional area π · trunk_thickness²."""
    return math.pi * params.trunk_thickness ** 2


def expected_branch_count(depth: int) -> int:
    """Number of branches generate_tree emits for a given depth."""
    if depth <= 0:
        return 0
    return 2 ** (depth + 1) - 1


def child_radius(radius: float, exponent: float, branch_thickness: float) -> float:
    """
    Radius of each of the two children of a branch of the given radius.

    Leonardo's rule, scaled by branch_thickness, then capped at 95% of the
    parent radius.

    Examples:
    ---------
    >>> round(child_radius(0.3, 2.0, 1.0), 4)
    0.2121
    >>> child_radius(0.3, 2.0, 2.0)   # cap binds
    0.285
    """
    next_radius = radius / 2 ** (1.0 / exponent)
    next_radius *= branch_thickness
    return min(next_radius, radius * MAX_TAPER)


def _check_generatable(params: TreeParams) -> None:
    """Reject inputs that would overflow or produce non-finite or zero-radius geometry."""
    problems = [f"{name} must be finite" for name in find_non_finite(params)]
    if not problems and params.exponent < MIN_EXPONENT:
        problems.append(f"exponent={params.exponent} must be >= {MIN_EXPONENT}")
    if problems:
        raise InvalidParameterError(problems)


def _bend(
    direction: np.ndarray,
    angle: float,
    randomness: float,
    rng: np.random.Generator,
    sign: float,
) -> np.ndarray:
    # Draw order (jitter, then azimuth) is part of the seeded reproducibility contract
    total_angle = angle + (rng.random() - 0.5) * randomness
    axis = horizontal_axis(rng.random() * 2.0 * math.pi)
    return normalize(rotate_about_axis(direction, axis, sign * total_angle))


def generate_tree(
    params: TreeParams,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[List[Branch], float, float]:
    """
    Generate the branch structure for a parameter set.

    Parameters:
    -----------
    params : TreeParams
        Parameter set (ranges are the caller's responsibility, see
        validation.validate_params)

    rng : Optional[np.random.Generator]
        Random source for azimuths and jitter. If None, a fresh unseeded
        generator is used, so every call grows a different silhouette.
        Pass np.random.default_rng(seed) for reproducible output.

    Returns:
    --------
    branches : List[Branch]
        Depth-first order: trunk first, each leader subtree fully before
        its lateral sibling

    total_volume : float
        Σ π r² L over all branches

    trunk_area : float
        π · trunk_thickness² (independent of depth)

    Raises:
    -------
    InvalidParameterError
        If a numeric parameter is non-finite or exponent < MIN_EXPONENT

    Example:
    --------
    >>> params = TreeParams(depth=1, length_ratio=0.8, trunk_thickness=0.3,
    ...                     exponent=2.0, randomness=0.0)
    >>> branches, volume, area = generate_tree(params, np.random.default_rng(0))
    >>> len(branches)
    3
    """
    _check_generatable(params)

    if rng is None:
        rng = np.random.default_rng()

    area = trunk_area(params)
    branches: List[Branch] = []

    if params.depth <= 0:
        return branches, 0.0, area

    conic = is_conic(params.species)
    leader_angle = math.radians(params.branching_angle * LEADER_ANGLE_FRACTION)
    lateral_angle = math.radians(
        params.branching_angle * (CONIC_LATERAL_ANGLE_SCALE if conic else 1.0)
    )
    lateral_ratio = params.length_ratio * (CONIC_LATERAL_LENGTH_SCALE if conic else 1.0)

    def grow(
        start: np.ndarray,
        direction: np.ndarray,
        radius: float,
        remaining: int,
        length: float,
        is_main: bool,
    ) -> None:
        end = start + direction * length
        branches.append(Branch(
            start=(float(start[0]), float(start[1]), float(start[2])),
            end=(float(end[0]), float(end[1]), float(end[2])),
            radius=radius,
            depth=remaining,
            volume=math.pi * radius ** 2 * length,
            is_main_path=is_main,
        ))

        if remaining <= 0:
            return

        next_radius = child_radius(radius, params.exponent, params.branch_thickness)

        # Leader: small bend, keeps the main-path flag
        leader_dir = _bend(direction, leader_angle, params.randomness, rng, 1.0)
        grow(end, leader_dir, next_radius, remaining - 1,
             length * params.length_ratio, is_main)

        # Lateral: larger bend in the opposite sense
        lateral_dir = _bend(direction, lateral_angle, params.randomness, rng, -1.0)
        grow(end, lateral_dir, next_radius, remaining - 1,
             length * lateral_ratio, False)

    grow(np.array(BASE_POINT), UP.copy(), params.trunk_thickness,
         int(params.depth), TRUNK_LENGTH, True)

    total_volume = sum(b.volume for b in branches)

    logger.debug(
        "Generated %d branches (species=%s, depth=%d), volume=%.4f",
        len(branches), params.species.value, params.depth, total_volume,
    )

    return branches, total_volume, area
