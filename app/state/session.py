# app/state/session.py
"""
Session state management for Streamlit.

Provides typed accessors for session state to avoid
scattered st.session_state['key'] calls throughout the app.
"""

import streamlit as st
from typing import Optional
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from config import CONFIG
from leonardo_rule.model import TreeParams, TreeSpecies, ObservationMode
from leonardo_rule.species import params_for_species
from services.insight_service import InsightRequester


# ============================================================================
# Tree Parameters
# ============================================================================

def get_params() -> TreeParams:
    """Get the current tree parameters (default species preset on first run)."""
    if 'params' not in st.session_state:
        st.session_state.params = params_for_species(TreeSpecies(CONFIG.default_species))
    return st.session_state.params


def set_params(params: TreeParams) -> None:
    st.session_state.params = params


def reset_to_species(species: TreeSpecies) -> TreeParams:
    """Replace all parameters with a species preset."""
    params = params_for_species(species)
    st.session_state.params = params
    return params


# ============================================================================
# Measuring Height and Mode
# ============================================================================

def get_slice_height() -> float:
    if 'slice_height' not in st.session_state:
        st.session_state.slice_height = CONFIG.default_slice_height
    return st.session_state.slice_height


def set_slice_height(height: float) -> None:
    st.session_state.slice_height = height


def get_mode() -> ObservationMode:
    if 'mode' not in st.session_state:
        st.session_state.mode = ObservationMode.PIPE_MODEL
    return st.session_state.mode


def set_mode(mode: ObservationMode) -> None:
    st.session_state.mode = mode


# ============================================================================
# Random Seed
# ============================================================================

def get_seed() -> Optional[int]:
    """
    Seed used for the current silhouette.

    Kept in session state so that moving the measuring height re-slices the
    same tree instead of growing a new one.
    """
    if 'seed' not in st.session_state:
        st.session_state.seed = CONFIG.default_seed
    return st.session_state.seed


def set_seed(seed: Optional[int]) -> None:
    st.session_state.seed = seed


# ============================================================================
# Narrative Worker
# ============================================================================

def get_insight_requester() -> InsightRequester:
    """
    This session's insight worker.

    One per browser session, so a request from another visitor never
    supersedes the note this session is waiting on.
    """
    if 'insight_requester' not in st.session_state:
        st.session_state.insight_requester = InsightRequester(
            delay_s=CONFIG.insight_debounce_s,
            model=CONFIG.insight_model,
        )
    return st.session_state.insight_requester


# ============================================================================
# Utility
# ============================================================================

def clear_all() -> None:
    """Clear all session state, stopping this session's insight worker."""
    requester = st.session_state.get('insight_requester')
    if requester is not None:
        requester.shutdown()
    for key in list(st.session_state.keys()):
        del st.session_state[key]
