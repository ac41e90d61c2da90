#!/usr/bin/env python3
"""
RUN_EXPONENT_SWEEP: Which Exponent Conserves Area?
==================================================

Leonardo's observation corresponds to n = 2. This demo grows trees for a
range of exponents (several seeds each, all four species) and plots how the
mean branch-area / trunk-area ratio through the crown moves with n.

Below n = 2 children are thin enough that area drains away with height;
above it the sum grows, until the 95% taper cap takes over.

Run with:
    python demos/run_exponent_sweep.py

Outputs:
    artifacts/exponent_sweep.csv  - One row per tree
    artifacts/exponent_sweep.png  - Mean ratio vs exponent, per species
"""

import os
import sys
from pathlib import Path

import numpy as np
import pandas as pd

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from leonardo_rule.model import TreeSpecies
from leonardo_rule.species import params_for_species
from leonardo_rule.analysis import run_parameter_sweep


def plot_sweep(df: pd.DataFrame, outpath: str):
    """Mean conservation ratio against exponent, one line per species."""
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(10, 6))

    for species, group in df[df['ok']].groupby('species'):
        stats = group.groupby('exponent')['mean_ratio'].agg(['mean', 'std']).reset_index()
        ax.plot(stats['exponent'], stats['mean'], marker='o', label=species)
        ax.fill_between(
            stats['exponent'],
            stats['mean'] - stats['std'].fillna(0),
            stats['mean'] + stats['std'].fillna(0),
            alpha=0.15,
        )

    ax.axhline(1.0, color='gray', linestyle='--', linewidth=1)
    ax.axvline(2.0, color='#ef4444', linestyle=':', linewidth=1)

    ax.set_xlabel('Leonardo Exponent (n)', fontsize=12, fontweight='bold')
    ax.set_ylabel('Mean Σ Aₙ / A₀', fontsize=12, fontweight='bold')
    ax.set_title('Area Conservation vs Exponent', fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.3, linestyle='--')
    ax.legend(loc='upper left', fontsize=10)

    plt.tight_layout()

    os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
    plt.savefig(outpath, dpi=150, bbox_inches='tight')
    plt.close()

    print(f"Sweep plot saved to: {outpath}")


def main():
    exponents = np.round(np.arange(1.5, 3.01, 0.1), 2)
    seeds = range(5)

    frames = []
    for species in TreeSpecies:
        base = params_for_species(species).replace(depth=6)
        df = run_parameter_sweep(base, 'exponent', exponents, seeds=seeds)
        df.insert(0, 'species', species.value)
        frames.append(df)

    results = pd.concat(frames, ignore_index=True)

    os.makedirs("artifacts", exist_ok=True)
    results.to_csv("artifacts/exponent_sweep.csv", index=False)
    print(f"Results saved to: artifacts/exponent_sweep.csv ({len(results)} trees)")

    best = (
        results[results['ok']]
        .assign(error=lambda d: (d['mean_ratio'] - 1.0).abs())
        .groupby('species')
        .apply(lambda g: g.loc[g['error'].idxmin(), 'exponent'])
    )
    print("\nExponent closest to perfect conservation:")
    for species, n in best.items():
        print(f"  {species:<24} n = {n:.1f}")

    plot_sweep(results, "artifacts/exponent_sweep.png")


if __name__ == "__main__":
    main()
