# app/components/model_viewer.py
"""
3D tree viewer component using Plotly.
"""

import plotly.graph_objects as go
import plotly.express as px
import pandas as pd
from typing import List
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from leonardo_rule.model import Branch, ObservationMode
from leonardo_rule.viz import create_tree_figure


def render_3d_model(
    branches: List[Branch],
    slice_height: float,
    mode: ObservationMode,
    height: int = 600,
) -> go.Figure:
    """
    Create the main 3D view of the tree.

    Parameters:
    -----------
    branches : List[Branch]
        Generated branches
    slice_height : float
        Measuring height above the trunk base
    mode : ObservationMode
        Pipe model (cross-sections) or conical taper (main path)
    height : int
        Figure height in pixels

    Returns:
    --------
    go.Figure
    """
    fig = create_tree_figure(
        branches,
        slice_height=slice_height,
        mode=mode,
        height=height,
    )
    fig.update_layout(paper_bgcolor='#f8fafc')
    return fig


def render_profile_plot(profile: pd.DataFrame, slice_height: float, height: int = 260) -> go.Figure:
    """
    Plot Σ Aₙ / A₀ against measuring height.

    A flat line at 1.0 is perfect conservation.
    """
    fig = px.line(profile, x='height', y='ratio', markers=False)
    fig.add_hline(y=1.0, line_dash='dash', line_color='gray')
    fig.add_vline(x=slice_height, line_color='#ef4444')
    fig.update_layout(
        xaxis_title='Measuring height',
        yaxis_title='Σ Aₙ / A₀',
        margin=dict(l=0, r=0, t=10, b=0),
        height=height,
    )
    return fig
