#!/usr/bin/env python3
"""
RUN_TREE_SINGLE: Grow One Tree and Test Leonardo's Rule
=======================================================

This demo walks through the whole engine once:
1. Pick a species preset
2. Grow the branch structure (seeded, so it is reproducible)
3. Cut it with measuring planes at several heights
4. Export the branch table
5. Visualize in 3D

Run with:
    python demos/run_tree_single.py [species]

Outputs:
    artifacts/tree_branches.csv  - One row per branch
    artifacts/tree_3d.html       - Interactive 3D visualization
"""

import os
import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "app"))

from leonardo_rule.model import TreeSpecies, ObservationMode
from leonardo_rule.species import params_for_species, SPECIES_INFO, is_conic
from leonardo_rule.generative import generate_tree
from leonardo_rule.analysis import analyze_slice, tree_summary
from leonardo_rule.viz import plot_tree_3d
from leonardo_rule.logging_config import setup_logging
from services.export_service import ExportService


def print_header(text: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {text}")
    print("=" * 70)


def main(species_name: str = "Coast Redwood"):
    setup_logging()

    print_header("LEONARDO'S RULE: SINGLE TREE")

    # =========================================================================
    # STEP 1: PARAMETERS
    # =========================================================================
    print_header("STEP 1: Species Preset")

    species = TreeSpecies(species_name)
    params = params_for_species(species)

    print(f"""
    Species:        {species.value} ({'conic' if is_conic(species) else 'broadleaf'})
    Depth:          {params.depth}
    Angle:          {params.branching_angle} deg
    Length ratio:   {params.length_ratio}
    Exponent (n):   {params.exponent}
    Trunk radius:   {params.trunk_thickness}
    Limb scale:     {params.branch_thickness}
    Randomness:     {params.randomness}
    """)
    print(f"    {SPECIES_INFO[species]}")

    # =========================================================================
    # STEP 2: GROW
    # =========================================================================
    print_header("STEP 2: Grow")

    branches, total_volume, trunk_area = generate_tree(params, np.random.default_rng(42))
    summary = tree_summary(branches, total_volume, trunk_area)

    print(f"""
    Branches:       {summary['n_branches']}
    Main path:      {summary['n_main_path']}
    Leaves:         {summary['n_leaves']}
    Height:         {summary['tree_height']:.3f}
    Wood volume:    {total_volume:.4f}
    Thinnest r:     {summary['min_radius']:.5f}
    """)

    # =========================================================================
    # STEP 3: MEASURE
    # =========================================================================
    print_header("STEP 3: Measuring Planes")

    print(f"\n    {'Height':>8} {'Cut':>6} {'A0':>10} {'Sum An':>10} {'Ratio':>8}")
    print("    " + "-" * 46)
    for h in np.linspace(0.0, summary['tree_height'], 9):
        stats = analyze_slice(branches, trunk_area, float(h))
        print(f"    {stats.height:8.2f} {stats.branch_count:6d} {stats.trunk_area:10.4f} "
              f"{stats.current_sum:10.4f} {stats.conservation_ratio:8.3f}")

    # =========================================================================
    # STEP 4: EXPORT
    # =========================================================================
    print_header("STEP 4: Export")

    os.makedirs("artifacts", exist_ok=True)
    csv_path = "artifacts/tree_branches.csv"
    with open(csv_path, "w", newline="") as f:
        f.write(ExportService.generate_branches_csv(branches))
    print(f"Branch table exported to: {csv_path}")

    # =========================================================================
    # STEP 5: VISUALIZE
    # =========================================================================
    print_header("STEP 5: Visualize")

    plot_tree_3d(
        branches,
        outpath="artifacts/tree_3d.html",
        show=False,
        slice_height=3.5,
        mode=ObservationMode.PIPE_MODEL,
        title=f"{species.value} - measuring at 3.5",
    )


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "Coast Redwood")
