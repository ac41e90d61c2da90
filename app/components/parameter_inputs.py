# app/components/parameter_inputs.py
"""
Parameter input components for the tree controls.
"""

import streamlit as st
from typing import Optional, Tuple
import sys
from pathlib import Path

# Add app directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from config import CONFIG
from leonardo_rule.model import TreeParams, TreeSpecies
from leonardo_rule.species import SPECIES_INFO, is_conic
from leonardo_rule.generative.tree import MAX_TAPER


def check_taper_warning(exponent: float, branch_thickness: float) -> Optional[str]:
    """
    Warn when the 95% taper cap overrides the exponent/limb-scale sliders.

    Near the cap, moving either slider has no visible effect, which looks
    like a bug unless the user is told.
    """
    theoretical = branch_thickness / 2 ** (1.0 / exponent)
    if theoretical > MAX_TAPER:
        return (
            f"🌿 **Taper cap active**: Leonardo's rule with n={exponent:.2f} and "
            f"limb scale {branch_thickness:.2f}× would make children "
            f"{theoretical:.0%} of their parent. Children are capped at "
            f"{MAX_TAPER:.0%}, so further increases have no effect."
        )
    return None


def render_species_picker(current: TreeSpecies) -> Tuple[TreeSpecies, bool]:
    """
    Render the reference species picker.

    Returns (species, changed). When the species changes the caller should
    reset all parameters to that species' preset.
    """
    options = [s.value for s in TreeSpecies]
    choice = st.radio(
        "Reference Species",
        options=options,
        index=options.index(current.value),
        horizontal=True,
        key="species_picker",
    )
    species = TreeSpecies(choice)
    st.caption(SPECIES_INFO[species])
    if is_conic(species):
        st.caption("Conic crown: steeper, shorter laterals.")
    return species, species != current


def render_rule_inputs(params: TreeParams) -> TreeParams:
    """
    Render the Leonardo exponent, trunk girth and limb scale sliders.

    Returns params with those three fields updated.
    """
    exponent = st.slider(
        "Leonardo Exponent (n)",
        min_value=CONFIG.exponent_range[0],
        max_value=CONFIG.exponent_range[1],
        value=float(min(max(params.exponent, CONFIG.exponent_range[0]), CONFIG.exponent_range[1])),
        step=0.01,
        help="Area ∝ rⁿ. n=2 is strict cross-sectional area conservation.",
    )

    col1, col2 = st.columns(2)
    with col1:
        trunk_thickness = st.slider(
            "Trunk Girth",
            min_value=CONFIG.trunk_thickness_range[0],
            max_value=CONFIG.trunk_thickness_range[1],
            value=float(min(max(params.trunk_thickness, CONFIG.trunk_thickness_range[0]),
                            CONFIG.trunk_thickness_range[1])),
            step=0.01,
            help="Trunk base radius",
        )
    with col2:
        branch_thickness = st.slider(
            "Limb Scale",
            min_value=CONFIG.branch_thickness_range[0],
            max_value=CONFIG.branch_thickness_range[1],
            value=float(min(max(params.branch_thickness, CONFIG.branch_thickness_range[0]),
                            CONFIG.branch_thickness_range[1])),
            step=0.01,
            help="Multiplier on Leonardo's predicted child radius",
        )

    warning = check_taper_warning(exponent, branch_thickness)
    if warning:
        st.info(warning)

    return params.replace(
        exponent=exponent,
        trunk_thickness=trunk_thickness,
        branch_thickness=branch_thickness,
    )


def render_growth_inputs(params: TreeParams) -> TreeParams:
    """
    Render depth, branching angle, length ratio and randomness controls.

    Returns params with those four fields updated.
    """
    col1, col2 = st.columns(2)
    with col1:
        depth = st.slider(
            "Depth",
            min_value=CONFIG.depth_range[0],
            max_value=CONFIG.depth_range[1],
            value=int(params.depth),
            help="Branching levels above the trunk (2^(d+1) − 1 branches)",
        )
    with col2:
        branching_angle = st.slider(
            "Branch Angle (°)",
            min_value=CONFIG.branching_angle_range[0],
            max_value=CONFIG.branching_angle_range[1],
            value=float(params.branching_angle),
            step=1.0,
        )

    col1, col2 = st.columns(2)
    with col1:
        length_ratio = st.slider(
            "Length Ratio",
            min_value=CONFIG.length_ratio_range[0],
            max_value=CONFIG.length_ratio_range[1],
            value=float(params.length_ratio),
            step=0.01,
        )
    with col2:
        randomness = st.slider(
            "Randomness",
            min_value=CONFIG.randomness_range[0],
            max_value=CONFIG.randomness_range[1],
            value=float(params.randomness),
            step=0.01,
        )

    if depth >= 11:
        st.warning("⚠️ Depth ≥ 11 draws thousands of branches and may feel sluggish.")

    return params.replace(
        depth=depth,
        branching_angle=branching_angle,
        length_ratio=length_ratio,
        randomness=randomness,
    )
