# app/components/metrics_panel.py
"""
Conservation read-out and tree metrics components.
"""

import html
import streamlit as st
from typing import Dict, Any
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from config import CONFIG
from leonardo_rule.model import SliceStats


LEONARDO_QUOTE = (
    "\"All the branches of a tree at every stage of its height when put "
    "together are equal in thickness to the trunk.\" (Leonardo da Vinci)"
)


def render_conservation_panel(stats: SliceStats, factor: float = None) -> None:
    """
    Render A₀ vs Σ Aₙ for the current measuring height.

    Parameters:
    -----------
    stats : SliceStats
        Output of analyze_slice
    factor : float
        Display-only unit conversion applied to both areas
        (defaults to CONFIG.area_conversion_factor)
    """
    if factor is None:
        factor = CONFIG.area_conversion_factor

    st.markdown("### A₀ ≈ Σ Aₙ")
    st.caption("Area conservation proof")

    cols = st.columns(2)
    with cols[0]:
        st.metric("Trunk Area (A₀)", f"{stats.trunk_area * factor:.2f}")
        st.caption(CONFIG.area_unit)
    with cols[1]:
        ratio = stats.conservation_ratio
        st.metric(
            "Branch Sum (Σ Aₙ)",
            f"{stats.current_sum * factor:.2f}",
            delta=f"{(ratio - 1.0) * 100:+.0f}% vs trunk" if stats.branch_count else None,
            delta_color="off",
        )
        st.caption(f"{stats.branch_count} Nodes")

    pct = stats.height / CONFIG.reference_tree_height * 100
    st.caption(f"Measuring at {stats.height:.1f} ft ({pct:.0f}% of reference height)")
    st.caption(LEONARDO_QUOTE)


def render_tree_metrics(summary: Dict[str, Any], total_volume: float) -> None:
    """Render structure metrics for the generated tree."""
    st.subheader("Structure")
    cols = st.columns(3)
    with cols[0]:
        st.metric("Branches", summary.get('n_branches', 0))
    with cols[1]:
        st.metric("Main Path", summary.get('n_main_path', 0))
    with cols[2]:
        st.metric("Leaves", summary.get('n_leaves', 0))

    cols = st.columns(3)
    with cols[0]:
        st.metric("Wood Volume", f"{total_volume:.3f}")
    with cols[1]:
        st.metric("Height", f"{summary.get('tree_height', 0):.2f}")
    with cols[2]:
        st.metric("Thinnest r", f"{summary.get('min_radius', 0):.4f}")


def insight_box_html(text: str) -> str:
    """Wrap model text in the styled insight box, escaped so it renders as text."""
    return f'<div class="insight-box">{html.escape(text)}</div>'


def render_insight_note(text: str) -> None:
    st.markdown(insight_box_html(text), unsafe_allow_html=True)
