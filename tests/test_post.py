# File: tests/test_post.py
"""
Tests for slice profiles and tree summary metrics.
"""

import numpy as np
import pandas as pd
import pytest

from leonardo_rule.model import TreeParams
from leonardo_rule.generative import generate_tree
from leonardo_rule.generative.tree import BASE_Y
from leonardo_rule.analysis import (
    slice_profile, profile_heights, tree_summary, analyze_slice, PROFILE_COLUMNS,
    run_parameter_sweep, evaluate_tree,
)


@pytest.fixture
def tree():
    params = TreeParams(depth=5, randomness=0.1)
    return generate_tree(params, np.random.default_rng(9))


def test_profile_matches_individual_slices(tree):
    """Each row is exactly what analyze_slice reports at that height."""
    branches, _, area = tree
    heights = [0.0, 1.0, 2.5, 4.0]
    df = slice_profile(branches, area, heights)

    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == PROFILE_COLUMNS
    assert len(df) == len(heights)

    for row, h in zip(df.itertuples(index=False), heights):
        stats = analyze_slice(branches, area, h)
        assert row.height == h
        assert row.branch_count == stats.branch_count
        assert row.current_sum == pytest.approx(stats.current_sum)
        assert row.ratio == pytest.approx(stats.conservation_ratio)
        assert row.trunk_area == area

    print("✓ Profile rows match single slices")


def test_profile_starts_at_unity(tree):
    branches, _, area = tree
    df = slice_profile(branches, area, profile_heights(branches, n=20))

    assert df['ratio'].iloc[0] == pytest.approx(1.0)


def test_profile_heights(tree):
    branches, _, _ = tree
    heights = profile_heights(branches, n=11)

    assert len(heights) == 11
    assert heights[0] == 0.0
    assert heights[-1] == pytest.approx(max(b.max_y for b in branches) - BASE_Y)
    assert np.all(np.diff(heights) > 0)


def test_profile_of_empty_tree():
    assert len(profile_heights([])) == 0
    df = slice_profile([], 1.0, [])
    assert list(df.columns) == PROFILE_COLUMNS
    assert len(df) == 0


def test_tree_summary(tree):
    branches, volume, area = tree
    s = tree_summary(branches, volume, area)

    assert s['n_branches'] == 63
    assert s['n_main_path'] == 6
    assert s['n_leaves'] == 32
    assert s['volume'] == volume
    assert s['trunk_area'] == area
    assert s['tree_height'] > 0
    assert s['min_radius'] == min(b.radius for b in branches)
    assert s['total_length'] == pytest.approx(sum(b.length for b in branches))


def test_tree_summary_empty():
    s = tree_summary([], 0.0, 0.5)
    assert s['n_branches'] == 0
    assert s['tree_height'] == 0.0
    assert s['trunk_area'] == 0.5


# =============================================================================
# Parameter sweep
# =============================================================================

def test_parameter_sweep():
    """One row per (value, seed); out-of-range values fail without raising."""
    base = TreeParams(depth=3, randomness=0.1)
    df = run_parameter_sweep(
        base, 'exponent', [0.5, 2.0, 3.0], seeds=[0, 1], n_heights=10, show_progress=False,
    )

    assert len(df) == 6
    assert list(df['ok']) == [False, False, True, True, True, True]
    assert df.loc[0, 'reason'].startswith("Invalid tree parameters")
    assert np.isnan(df.loc[0, 'mean_ratio'])

    ok = df[df['ok']]
    assert (ok['n_branches'] == 15).all()
    # The base slice always sees exactly the trunk
    assert (ok['max_ratio'] >= 1.0 - 1e-9).all()

    print("✓ Parameter sweep records failures as rows")


def test_parameter_sweep_unknown_field():
    with pytest.raises(ValueError):
        run_parameter_sweep(TreeParams(), 'height', [1.0], show_progress=False)


def test_evaluate_depth_zero():
    success, metrics, reason = evaluate_tree(TreeParams(depth=0), seed=0)
    assert not success
    assert metrics == {}
    assert "depth 0" in reason
