# File: tests/test_slice.py
"""
TEST: Slice Analyzer
====================

A horizontal plane at BASE_Y + height cuts the tree. We check:

1. Intersection is inclusive at both ends of a branch
2. Height 0 always cuts the trunk (ratio exactly 1)
3. Planes below the base or above the crown cut nothing
4. trunk_area is passed through unchanged at every height
5. n = 2 with no limb scaling conserves area through the first split
"""

import math

import numpy as np
import pytest

from leonardo_rule.model import Branch, TreeParams, TreeSpecies
from leonardo_rule.generative import generate_tree
from leonardo_rule.generative.tree import BASE_Y, TRUNK_LENGTH
from leonardo_rule.analysis import analyze_slice, is_sliced, world_height


def _vertical(y0, y1, radius=0.1):
    return Branch(
        start=(0.0, y0, 0.0), end=(0.0, y1, 0.0),
        radius=radius, depth=0,
        volume=math.pi * radius ** 2 * abs(y1 - y0),
        is_main_path=False,
    )


@pytest.fixture
def single_split():
    params = TreeParams(
        depth=1, length_ratio=0.8, trunk_thickness=0.3,
        exponent=2.0, branch_thickness=1.0, randomness=0.0,
        branching_angle=25.0, species=TreeSpecies.BAY_LAUREL,
    )
    return generate_tree(params, np.random.default_rng(0))


def test_world_height():
    assert world_height(0.0) == BASE_Y
    assert world_height(1.5, base_y=1.0) == 2.5


def test_is_sliced_inclusive_bounds():
    """Both endpoints count as intersections."""
    b = _vertical(1.0, 2.0)
    assert is_sliced(b, 1.0)
    assert is_sliced(b, 2.0)
    assert is_sliced(b, 1.5)
    assert not is_sliced(b, 0.999)
    assert not is_sliced(b, 2.001)

    # Direction does not matter
    assert is_sliced(_vertical(2.0, 1.0), 1.0)


def test_horizontal_branch_only_at_its_height():
    b = Branch(start=(0.0, 1.0, 0.0), end=(1.0, 1.0, 0.0), radius=0.1,
               depth=0, volume=0.1, is_main_path=False)
    assert is_sliced(b, 1.0)
    assert not is_sliced(b, 1.01)


def test_base_height_counts_trunk_only(single_split):
    """At height 0 the plane passes through the trunk base: ratio 1."""
    branches, _, area = single_split
    stats = analyze_slice(branches, area, 0.0)

    assert stats.branch_count == 1
    assert stats.current_sum == pytest.approx(area)
    assert stats.conservation_ratio == pytest.approx(1.0)
    assert stats.height == 0.0

    print("✓ Base slice sees only the trunk")


def test_joint_counts_parent_and_children(single_split):
    """A plane exactly at the fork cuts the trunk top and both child bases."""
    branches, _, area = single_split
    stats = analyze_slice(branches, area, TRUNK_LENGTH)

    assert stats.branch_count == 3
    assert stats.current_sum == pytest.approx(2 * area)


def test_above_fork_conserves_area(single_split):
    """n=2 children carry exactly the trunk area past the fork."""
    branches, _, area = single_split
    stats = analyze_slice(branches, area, TRUNK_LENGTH + 0.5)

    assert stats.branch_count == 2
    assert stats.conservation_ratio == pytest.approx(1.0)
    assert len(stats.branch_areas) == 2
    assert sum(stats.branch_areas) == pytest.approx(stats.current_sum)


@pytest.mark.parametrize("height", [-1.0, -0.01, 100.0])
def test_out_of_range_heights(single_split, height):
    """Nothing is cut below the base or above the crown."""
    branches, _, area = single_split
    stats = analyze_slice(branches, area, height)

    assert stats.branch_count == 0
    assert stats.current_sum == 0.0
    assert stats.branch_areas == ()
    assert stats.trunk_area == area


def test_trunk_area_independent_of_height():
    params = TreeParams(depth=6)
    branches, _, area = generate_tree(params, np.random.default_rng(2))

    for h in np.linspace(0.0, 7.0, 15):
        stats = analyze_slice(branches, area, float(h))
        assert stats.trunk_area == area
        assert stats.branch_count == len(stats.branch_areas)
        assert stats.current_sum == pytest.approx(sum(stats.branch_areas))


def test_empty_tree():
    stats = analyze_slice([], 0.5, 1.0)
    assert stats.branch_count == 0
    assert stats.current_sum == 0.0
    assert stats.trunk_area == 0.5


def test_zero_trunk_area_ratio():
    stats = analyze_slice([_vertical(BASE_Y, BASE_Y + 1.0)], 0.0, 0.5)
    assert stats.branch_count == 1
    assert stats.conservation_ratio == 0.0


def test_slice_stats_to_dict(single_split):
    branches, _, area = single_split
    data = analyze_slice(branches, area, 0.0).to_dict()

    assert set(data) == {
        'trunk_area', 'current_sum', 'branch_count', 'branch_areas',
        'height', 'conservation_ratio',
    }
    assert isinstance(data['branch_areas'], list)
