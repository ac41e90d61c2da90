# leonardo_rule/analysis/sweep.py
"""
PARAMETER SWEEP: How well is area conserved across a range of settings?
=======================================================================

PURPOSE:
--------
One tree at one height tells you little. This module grows many trees,
varying a single parameter (usually the exponent) over several seeds, and
records how the branch-area sum tracks the trunk area through the crown.

For every (value, seed) pair we:
1. Build params with the swept field replaced
2. Validate and generate
3. Run a slice profile from base to top
4. Record summary metrics and ratio statistics

Failures (out-of-range values) are recorded as rows with ok=False and a
reason, never raised, so a sweep over a wide range still completes.
"""

import logging
from typing import Iterable, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from ..model import TreeParams
from ..generative.tree import generate_tree
from ..validation import InvalidParameterError, validate_params
from .post import profile_heights, slice_profile, tree_summary


logger = logging.getLogger(__name__)


METRIC_COLUMNS = [
    'n_branches', 'volume', 'tree_height',
    'mean_ratio', 'min_ratio', 'max_ratio', 'top_ratio',
]


def evaluate_tree(params: TreeParams, seed: int, n_heights: int = 40):
    """
    Generate one tree and summarise its conservation profile.

    Returns:
    --------
    (success, metrics, reason) in the service style
    """
    try:
        validate_params(params)
    except InvalidParameterError as e:
        return False, {}, str(e)

    branches, volume, area = generate_tree(params, np.random.default_rng(seed))
    if not branches:
        return False, {}, "empty tree (depth 0)"

    profile = slice_profile(branches, area, profile_heights(branches, n_heights))
    ratios = profile['ratio']
    summary = tree_summary(branches, volume, area)

    metrics = {
        'n_branches': summary['n_branches'],
        'volume': volume,
        'tree_height': summary['tree_height'],
        'mean_ratio': float(ratios.mean()),
        'min_ratio': float(ratios.min()),
        'max_ratio': float(ratios.max()),
        'top_ratio': float(ratios.iloc[-1]),
    }
    return True, metrics, ""


def run_parameter_sweep(
    base: TreeParams,
    field: str,
    values: Iterable[float],
    seeds: Sequence[int] = (0,),
    n_heights: int = 40,
    show_progress: bool = True,
) -> pd.DataFrame:
    """
    Sweep one TreeParams field over values, for each seed.

    Parameters:
    -----------
    base : TreeParams
        Parameters held fixed
    field : str
        Name of the TreeParams field to vary (e.g. 'exponent')
    values : Iterable[float]
        Values to try
    seeds : Sequence[int]
        One tree per seed and value
    n_heights : int
        Slice heights per profile
    show_progress : bool
        Whether to show a progress bar

    Returns:
    --------
    pd.DataFrame
        One row per (value, seed): field value, seed, ok, reason and the
        METRIC_COLUMNS (NaN for failed rows)
    """
    if field not in TreeParams.__dataclass_fields__:
        raise ValueError(f"Unknown parameter '{field}'")

    jobs = [(value, seed) for value in values for seed in seeds]
    iterator = tqdm(jobs, desc=f"Sweeping {field}") if show_progress else jobs

    rows = []
    for value, seed in iterator:
        params = base.replace(**{field: value})
        success, metrics, reason = evaluate_tree(params, seed, n_heights)

        row = {field: value, 'seed': seed, 'ok': success, 'reason': reason}
        if success:
            row.update(metrics)
        else:
            row.update({col: np.nan for col in METRIC_COLUMNS})
        rows.append(row)

    df = pd.DataFrame(rows, columns=[field, 'seed', 'ok', 'reason'] + METRIC_COLUMNS)
    logger.info("Sweep over %s: %d/%d trees ok", field, int(df['ok'].sum()), len(df))
    return df
