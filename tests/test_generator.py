# File: tests/test_generator.py
"""
TEST: Recursive Tree Generator
==============================

Validates generate_tree against the properties the rest of the system
relies on:

1. Branch count follows 2^(depth+1) - 1 (and depth 0 is an empty tree)
2. Radii follow Leonardo's rule, capped at 95% of the parent
3. Every child is strictly thinner than its parent
4. total_volume is the sum of the per-branch volumes
5. A seeded generator reproduces the same tree exactly
6. The main path is one unbroken leader chain from the trunk
7. Conic species shorten and steepen their laterals
"""

import math

import numpy as np
import pytest

from leonardo_rule.model import TreeParams, TreeSpecies
from leonardo_rule.generative import generate_tree, child_radius, expected_branch_count
from leonardo_rule.generative.tree import BASE_POINT, TRUNK_LENGTH, MAX_TAPER, MIN_EXPONENT
from leonardo_rule.validation import InvalidParameterError


def _parents(branches):
    """
    Recover the parent index of each branch.

    Branches come out depth-first, so the parent of a branch is the nearest
    preceding branch whose depth tag is one higher.
    """
    parents = [None]
    for i in range(1, len(branches)):
        target = branches[i].depth + 1
        j = i - 1
        while branches[j].depth != target:
            j -= 1
        parents.append(j)
    return parents


def _angle_from_vertical(branch) -> float:
    d = np.subtract(branch.end, branch.start)
    d = d / np.linalg.norm(d)
    return math.degrees(math.acos(np.clip(d[1], -1.0, 1.0)))


@pytest.mark.parametrize("depth", [1, 2, 3, 5, 7])
def test_branch_count(depth):
    """2^(depth+1) - 1 branches for every depth >= 1."""
    params = TreeParams(depth=depth)
    branches, _, _ = generate_tree(params, np.random.default_rng(0))

    assert len(branches) == expected_branch_count(depth) == 2 ** (depth + 1) - 1
    assert sum(1 for b in branches if b.depth == 0) == 2 ** depth


def test_depth_zero_is_empty():
    """Depth 0 grows nothing but still reports the trunk area."""
    params = TreeParams(depth=0, trunk_thickness=0.45)
    branches, volume, area = generate_tree(params, np.random.default_rng(0))

    assert branches == []
    assert volume == 0.0
    assert area == pytest.approx(math.pi * 0.45 ** 2)

    print("✓ Depth 0 returns an empty tree")


def test_single_split_radii_and_trunk():
    """
    Trunk r=0.3 with n=2 splits into two children of r = 0.3/√2.

    SETUP:
        depth=1, trunk_thickness=0.3, exponent=2, branch_thickness=1, no jitter
    VERIFY:
        - trunk starts at the base point and is TRUNK_LENGTH long
        - both children have r ≈ 0.2121 and depth tag 0
        - trunk area is π · 0.09
    """
    params = TreeParams(
        depth=1, length_ratio=0.8, trunk_thickness=0.3,
        exponent=2.0, branch_thickness=1.0, randomness=0.0,
        species=TreeSpecies.BAY_LAUREL,
    )
    branches, volume, area = generate_tree(params, np.random.default_rng(1))

    assert len(branches) == 3
    trunk, leader, lateral = branches

    assert trunk.start == BASE_POINT
    assert trunk.length == pytest.approx(TRUNK_LENGTH)
    assert trunk.radius == 0.3
    assert trunk.depth == 1
    assert trunk.end[1] == pytest.approx(BASE_POINT[1] + TRUNK_LENGTH)

    for child in (leader, lateral):
        assert child.radius == pytest.approx(0.3 / math.sqrt(2))
        assert child.radius == pytest.approx(0.2121, abs=1e-4)
        assert child.depth == 0
        assert child.start == trunk.end
        assert child.length == pytest.approx(TRUNK_LENGTH * 0.8)

    assert area == pytest.approx(math.pi * 0.09)

    # Two children at n=2 conserve the trunk area exactly
    assert leader.area + lateral.area == pytest.approx(trunk.area)

    print("✓ Single split matches Leonardo's rule")


def test_child_radius_cap():
    """The 95% taper cap binds when the multiplier makes children too thick."""
    assert child_radius(0.3, 2.0, 1.0) == pytest.approx(0.3 / math.sqrt(2))
    assert child_radius(0.3, 2.0, 2.0) == pytest.approx(0.3 * MAX_TAPER)
    assert child_radius(1.0, 4.0, 1.2) == pytest.approx(MAX_TAPER)


@pytest.mark.parametrize("species", list(TreeSpecies))
@pytest.mark.parametrize("branch_thickness", [0.8, 1.0, 1.2, 2.0])
def test_children_strictly_thinner(species, branch_thickness):
    """Every child radius is at most 95% of its parent radius."""
    params = TreeParams(
        depth=5, species=species, exponent=3.5,
        branch_thickness=branch_thickness, randomness=0.3,
    )
    branches, _, _ = generate_tree(params, np.random.default_rng(7))
    parents = _parents(branches)

    for i, p in enumerate(parents):
        if p is None:
            continue
        child, parent = branches[i], branches[p]
        assert child.start == parent.end
        assert child.radius <= parent.radius * MAX_TAPER + 1e-12
        assert child.radius < parent.radius


def test_positive_radii_and_volumes():
    params = TreeParams(depth=8, randomness=0.5)
    branches, total_volume, _ = generate_tree(params, np.random.default_rng(3))

    assert all(b.radius > 0 for b in branches)
    assert all(b.volume > 0 for b in branches)
    assert total_volume > 0


def test_total_volume_is_sum_of_branches():
    params = TreeParams(depth=6)
    branches, total_volume, _ = generate_tree(params, np.random.default_rng(11))

    assert total_volume == pytest.approx(sum(b.volume for b in branches))
    for b in branches:
        assert b.volume == pytest.approx(math.pi * b.radius ** 2 * b.length)

    print("✓ Total volume equals the per-branch sum")


def test_seeded_generation_is_reproducible():
    """Same seed, same parameters: identical branch lists."""
    params = TreeParams(depth=6, randomness=0.3)

    a, vol_a, _ = generate_tree(params, np.random.default_rng(42))
    b, vol_b, _ = generate_tree(params, np.random.default_rng(42))
    c, _, _ = generate_tree(params, np.random.default_rng(43))

    assert a == b
    assert vol_a == vol_b
    assert a != c

    print("✓ Seeded generation is reproducible")


def test_unseeded_generation_varies():
    """Without an rng every call draws fresh azimuths."""
    params = TreeParams(depth=4, randomness=0.2)
    a, _, _ = generate_tree(params)
    b, _, _ = generate_tree(params)

    # Topology and radii never depend on randomness
    assert [x.radius for x in a] == [x.radius for x in b]
    assert a != b


def test_main_path_is_leader_chain():
    """
    Main path = trunk plus its chain of first (leader) children.

    For depth d that is d + 1 branches, one at each depth tag, each starting
    where the previous one ends.
    """
    depth = 6
    params = TreeParams(depth=depth)
    branches, _, _ = generate_tree(params, np.random.default_rng(5))

    main = [b for b in branches if b.is_main_path]
    assert len(main) == depth + 1
    assert [b.depth for b in main] == list(range(depth, -1, -1))

    # Depth-first order puts the leader chain at the head of the list
    assert main == branches[:depth + 1]
    for prev, nxt in zip(main, main[1:]):
        assert nxt.start == prev.end

    # Every main-path branch hangs off a main-path parent
    parents = _parents(branches)
    for i, p in enumerate(parents):
        if p is not None and branches[i].is_main_path:
            assert branches[p].is_main_path


class TestSpeciesShaping:
    """Conic species (redwood, fir, pine) shorten and steepen their laterals."""

    def _split(self, species, angle=20.0):
        params = TreeParams(
            depth=1, branching_angle=angle, length_ratio=0.8,
            trunk_thickness=0.3, exponent=2.0, randomness=0.0,
            species=species,
        )
        branches, _, _ = generate_tree(params, np.random.default_rng(0))
        return branches

    @pytest.mark.parametrize("species", [
        TreeSpecies.COAST_REDWOOD, TreeSpecies.DOUGLAS_FIR, TreeSpecies.PONDEROSA_PINE,
    ])
    def test_conic_lateral_shorter_and_steeper(self, species):
        trunk, leader, lateral = self._split(species)

        assert leader.length == pytest.approx(TRUNK_LENGTH * 0.8)
        assert lateral.length == pytest.approx(TRUNK_LENGTH * 0.8 * 0.7)
        assert _angle_from_vertical(leader) == pytest.approx(20.0 * 0.2)
        assert _angle_from_vertical(lateral) == pytest.approx(20.0 * 1.5)

    def test_broadleaf_lateral_unchanged(self):
        trunk, leader, lateral = self._split(TreeSpecies.BAY_LAUREL)

        assert lateral.length == pytest.approx(leader.length)
        assert _angle_from_vertical(leader) == pytest.approx(4.0)
        assert _angle_from_vertical(lateral) == pytest.approx(20.0)

    def test_zero_angle_grows_straight_up(self):
        branches = self._split(TreeSpecies.BAY_LAUREL, angle=0.0)
        for b in branches:
            assert b.start[0] == pytest.approx(b.end[0])
            assert b.start[2] == pytest.approx(b.end[2])


class TestInvalidInputs:
    """Inputs that would produce non-finite geometry are rejected up front."""

    @pytest.mark.parametrize("exponent", [0.0, -1.0])
    def test_non_positive_exponent(self, exponent):
        with pytest.raises(InvalidParameterError):
            generate_tree(TreeParams(exponent=exponent), np.random.default_rng(0))

    @pytest.mark.parametrize("exponent", [1e-4, 1e-3, 0.05])
    def test_tiny_exponent(self, exponent):
        """Tiny exponents would overflow 2^(1/n) or shrink radii to zero."""
        params = TreeParams(depth=12, exponent=exponent)
        with pytest.raises(InvalidParameterError) as excinfo:
            generate_tree(params, np.random.default_rng(0))
        assert "exponent" in str(excinfo.value)

    def test_smallest_exponent_keeps_radii_positive(self):
        params = TreeParams(depth=12, exponent=MIN_EXPONENT, branch_thickness=1.0)
        branches, _, _ = generate_tree(params, np.random.default_rng(0))
        assert min(b.radius for b in branches) > 0.0

    @pytest.mark.parametrize("field", [
        'branching_angle', 'length_ratio', 'exponent', 'trunk_thickness', 'randomness',
    ])
    def test_nan_rejected(self, field):
        params = TreeParams().replace(**{field: float('nan')})
        with pytest.raises(InvalidParameterError) as excinfo:
            generate_tree(params, np.random.default_rng(0))
        assert field in str(excinfo.value)

    def test_infinite_rejected(self):
        with pytest.raises(InvalidParameterError):
            generate_tree(TreeParams(trunk_thickness=float('inf')))

    def test_error_is_value_error(self):
        """Callers catching ValueError also catch parameter problems."""
        with pytest.raises(ValueError):
            generate_tree(TreeParams(exponent=0.0))


def test_generation_is_logged(tmp_path):
    """setup_logging routes the generator's debug summary to the log file."""
    import logging
    from leonardo_rule.logging_config import setup_logging, QUIET_LOGGERS

    log_file = tmp_path / "tree.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    logger = logging.getLogger("leonardo_rule")
    try:
        assert len(logger.handlers) == 2

        # Re-running must not stack handlers
        setup_logging(level=logging.DEBUG, log_file=str(log_file))
        assert len(logger.handlers) == 2

        generate_tree(TreeParams(depth=2), np.random.default_rng(0))
        text = log_file.read_text(encoding='utf-8')
        assert "Generated 7 branches" in text
        assert "Logging initialized (level=DEBUG" in text

        # HTTP client loggers stay quiet even at DEBUG
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)
