# app/main.py
"""
Leonardo's Rule - Real-Time Branching Conservation Explorer

A single interface where parameter changes instantly regrow the tree and
the measuring plane reports A₀ vs Σ Aₙ.

Run with:
    streamlit run app/main.py
"""

import streamlit as st
import sys
from pathlib import Path
import numpy as np

# Add app directory to path
sys.path.insert(0, str(Path(__file__).parent))
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import CONFIG
from services import TreeService, ExportService
from state import (
    get_params, set_params, reset_to_species,
    get_slice_height, set_slice_height,
    get_mode, set_mode,
    get_seed, set_seed,
    get_insight_requester,
    clear_all,
)
from components import (
    render_3d_model,
    render_profile_plot,
    render_conservation_panel,
    render_tree_metrics,
    render_insight_note,
    render_species_picker,
    render_rule_inputs,
    render_growth_inputs,
)
from leonardo_rule.model import ObservationMode
from leonardo_rule.analysis import slice_profile, profile_heights
from leonardo_rule.logging_config import setup_logging
from leonardo_rule.validation import clamp_params


# Page configuration - must be first Streamlit command
st.set_page_config(
    page_title=CONFIG.app_name,
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .block-container {
        padding-top: 1rem;
        padding-bottom: 1rem;
    }
    [data-testid="stMetricValue"] {
        font-size: 1.3rem;
        font-variant-numeric: tabular-nums;
    }
    .sidebar-header {
        font-size: 0.8rem;
        font-weight: 800;
        color: #94a3b8;
        text-transform: uppercase;
        letter-spacing: 0.1em;
        margin-top: 1rem;
        margin-bottom: 0.5rem;
    }
    .insight-box {
        background-color: #fffdf0;
        border-left: 4px solid #a65d1a;
        padding: 0.75rem 1rem;
        border-radius: 0.5rem;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def _init_logging() -> bool:
    setup_logging()
    return True


_init_logging()

params = get_params()


# =============================================================================
# SIDEBAR - All Parameter Controls
# =============================================================================

with st.sidebar:
    st.title("🌳 LEONARDO'S RULE")
    st.caption(CONFIG.app_subtitle)

    mode_label = st.radio(
        "Observation",
        options=CONFIG.observation_modes,
        index=CONFIG.observation_modes.index(get_mode().value),
        key="mode_radio",
        help="Cross-sections: branches cut by the plane turn red. "
             "Main path: the leader chain is highlighted.",
    )
    set_mode(ObservationMode(mode_label))

    st.divider()

    # -------------------------------------------------------------------------
    # MEASURING HEIGHT
    # -------------------------------------------------------------------------
    st.markdown('<p class="sidebar-header">📏 Measuring Height</p>', unsafe_allow_html=True)
    slice_height = st.slider(
        "Measuring Height (ft)",
        min_value=CONFIG.slice_height_range[0],
        max_value=CONFIG.slice_height_range[1],
        value=get_slice_height(),
        step=CONFIG.slice_height_step,
        key="slice_height_slider",
    )
    set_slice_height(slice_height)

    st.divider()

    # -------------------------------------------------------------------------
    # LEONARDO'S RULE
    # -------------------------------------------------------------------------
    st.markdown('<p class="sidebar-header">📐 Leonardo\'s Rule</p>', unsafe_allow_html=True)
    params = render_rule_inputs(params)

    st.divider()

    # -------------------------------------------------------------------------
    # GROWTH
    # -------------------------------------------------------------------------
    st.markdown('<p class="sidebar-header">🌱 Growth</p>', unsafe_allow_html=True)
    params = render_growth_inputs(params)

    col1, col2 = st.columns(2)
    with col1:
        seed = st.number_input("Seed", value=int(get_seed()), min_value=0, step=1, key="seed_input")
        set_seed(int(seed))
    with col2:
        st.write("")
        if st.button("🎲 Regrow", use_container_width=True):
            set_seed(int(np.random.default_rng().integers(0, 2**31 - 1)))
            del st.session_state["seed_input"]
            st.rerun()

    st.divider()

    # -------------------------------------------------------------------------
    # SPECIES
    # -------------------------------------------------------------------------
    st.markdown('<p class="sidebar-header">🌲 Species</p>', unsafe_allow_html=True)
    species, species_changed = render_species_picker(params.species)
    if species_changed:
        reset_to_species(species)
        st.rerun()

    params = clamp_params(params)
    set_params(params)

    st.divider()
    if st.button("↺ Reset everything", use_container_width=True):
        clear_all()
        st.rerun()


# =============================================================================
# GENERATE + MEASURE
# =============================================================================

success, result, error = TreeService.generate_and_analyze(
    params, slice_height, seed=get_seed()
)

st.title(f"🌳 {params.species.value}")
st.caption("Live mathematical proof • Drag to rotate • Scroll to zoom")

if success:
    col_view, col_metrics = st.columns([3, 2])

    with col_view:
        fig = render_3d_model(
            result['branches'],
            slice_height=slice_height,
            mode=get_mode(),
            height=620,
        )
        st.plotly_chart(fig, use_container_width=True, key="main_3d")

    with col_metrics:
        render_conservation_panel(result['slice'])

        st.divider()

        profile = slice_profile(
            result['branches'],
            result['trunk_area'],
            profile_heights(result['branches'], n=60),
        )
        if len(profile) > 0:
            st.plotly_chart(render_profile_plot(profile, slice_height), use_container_width=True)
            st.caption("Σ Aₙ / A₀ across the whole height • dashed line = perfect conservation")

        st.divider()
        render_tree_metrics(result['summary'], result['total_volume'])

    # -------------------------------------------------------------------------
    # NARRATIVE (best effort, never blocks the geometry above)
    # -------------------------------------------------------------------------
    st.divider()
    st.subheader("🧑‍🔬 Botanist's Note")

    requester = get_insight_requester()
    insight = requester.latest(params)
    if insight is None:
        if requester.pending_params != params:
            requester.request(params)
        st.caption("Thinking about your tree… (refresh to update)")
        if st.button("🔄 Refresh note"):
            st.rerun()
    else:
        render_insight_note(insight)

    # -------------------------------------------------------------------------
    # EXPORT
    # -------------------------------------------------------------------------
    st.divider()
    st.subheader("📥 Export")

    params_dict = params.to_dict()
    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            label="📄 Branches (CSV)",
            data=ExportService.generate_branches_csv(result['branches']),
            file_name="leonardo_branches.csv",
            mime="text/csv",
            use_container_width=True,
        )
    with col2:
        st.download_button(
            label="📦 Model (JSON)",
            data=ExportService.generate_model_json(
                result['branches'], params_dict, result['summary'], result['slice']
            ),
            file_name="leonardo_tree.json",
            mime="application/json",
            use_container_width=True,
        )
    with col3:
        st.download_button(
            label="📝 Summary (TXT)",
            data=ExportService.generate_summary_text(params_dict, result['summary'], result['slice']),
            file_name="leonardo_summary.txt",
            mime="text/plain",
            use_container_width=True,
        )

else:
    st.error(f"**Generation Failed:** {error}")
    st.info("Adjust parameters in the sidebar to regrow the tree.")


# =============================================================================
# FOOTER
# =============================================================================
st.divider()
st.caption(f"{CONFIG.app_name} v{CONFIG.version} • Da Vinci Laboratory")
