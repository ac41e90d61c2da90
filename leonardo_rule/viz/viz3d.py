# leonardo_rule/viz/viz3d.py
"""
3D VISUALIZATION: Interactive Tree Viewer
=========================================

PURPOSE:
--------
Render a generated tree with Plotly so it can be rotated, zoomed and
inspected in a browser or in the Streamlit app:
- Each branch drawn as a line whose width follows its radius
- Branches crossing the measuring plane painted red (pipe model mode)
- The main path highlighted and everything else faded (conical taper mode)
- Cross-section discs and the translucent measuring plane

All rendering decisions live here. The generator and slice analyzer know
nothing about colors or modes.

COORDINATES:
------------
The engine uses y-up world coordinates. Plotly's 3D scene is z-up, so a
world point (x, y, z) is plotted at (x, z, y).
"""

import math
import os
from collections import OrderedDict
from typing import Dict, List, Optional, Any

import numpy as np
import plotly.graph_objects as go

from ..model import Branch, ObservationMode
from ..generative.tree import BASE_Y
from ..analysis.slice import is_sliced, world_height


SLICED_COLOR = '#ef4444'
MAIN_PATH_COLOR = '#fbbf24'
DISC_COLOR = '#ffffff'
PLANE_COLOR = '#ef4444'
DIMMED_OPACITY = 0.08
PLANE_RADIUS = 4.5
WIDTH_SCALE = 30.0  # px per unit radius


def depth_color(depth: int) -> str:
    """Bark brown that gets richer and lighter with the remaining depth tag."""
    level = 15 + depth * 5
    return f'hsl(25, {level}%, {level}%)'


def branch_style(
    branch: Branch,
    world_y: Optional[float],
    mode: ObservationMode = ObservationMode.PIPE_MODEL,
) -> Dict[str, Any]:
    """
    Decide how one branch is drawn.

    Parameters:
    -----------
    branch : Branch
        The branch to style
    world_y : Optional[float]
        World height of the measuring plane (None = no plane)
    mode : ObservationMode
        PIPE_MODEL highlights sliced branches; CONICAL_TAPER highlights
        the main path and fades the rest

    Returns:
    --------
    dict with color, opacity, width (px) and sliced (bool)
    """
    sliced = (
        mode == ObservationMode.PIPE_MODEL
        and world_y is not None
        and is_sliced(branch, world_y)
    )

    color = depth_color(branch.depth)
    opacity = 1.0

    if sliced:
        color = SLICED_COLOR
    elif mode == ObservationMode.CONICAL_TAPER:
        if branch.is_main_path:
            color = MAIN_PATH_COLOR
        else:
            opacity = DIMMED_OPACITY

    return {
        'color': color,
        'opacity': opacity,
        'width': max(1, int(round(branch.radius * WIDTH_SCALE))),
        'sliced': sliced,
    }


def _plot_xyz(point) -> tuple:
    x, y, z = point
    return x, z, y


def _crossing_point(branch: Branch, world_y: float) -> tuple:
    """Where the branch axis meets the plane (its midpoint if it lies in the plane)."""
    (x0, y0, z0), (x1, y1, z1) = branch.start, branch.end
    dy = y1 - y0
    if dy == 0:
        return (x0 + x1) / 2, world_y, (z0 + z1) / 2
    t = (world_y - y0) / dy
    return x0 + t * (x1 - x0), world_y, z0 + t * (z1 - z0)


def _disc_outline(center, radius: float, n: int = 32):
    """Circle of given radius in the horizontal plane through center."""
    cx, cy, cz = center
    angles = np.linspace(0.0, 2 * math.pi, n + 1)
    return [(cx + radius * math.cos(a), cy, cz + radius * math.sin(a)) for a in angles]


def create_tree_figure(
    branches: List[Branch],
    slice_height: Optional[float] = None,
    mode: ObservationMode = ObservationMode.PIPE_MODEL,
    title: Optional[str] = None,
    height: int = 600,
    show_plane: bool = True,
) -> go.Figure:
    """
    Create a Plotly figure for a generated tree.

    Parameters:
    -----------
    branches : List[Branch]
        Output of generate_tree

    slice_height : Optional[float]
        Measuring plane offset above the trunk base (None = no plane)

    mode : ObservationMode
        Emphasis mode (see branch_style)

    title : Optional[str]
        Plot title

    height : int
        Figure height in pixels

    show_plane : bool
        Whether to draw the translucent measuring plane in pipe model mode

    Returns:
    --------
    go.Figure
    """
    fig = go.Figure()
    world_y = world_height(slice_height) if slice_height is not None else None

    # =========================================================================
    # DRAW BRANCHES (one trace per distinct style)
    # =========================================================================

    groups: "OrderedDict[tuple, Dict[str, list]]" = OrderedDict()
    sliced_branches = []

    for i, branch in enumerate(branches):
        style = branch_style(branch, world_y, mode)
        if style['sliced']:
            sliced_branches.append(branch)

        key = (style['color'], style['opacity'], style['width'])
        group = groups.setdefault(key, {'x': [], 'y': [], 'z': [], 'text': []})

        (xs, ys, zs), (xe, ye, ze) = _plot_xyz(branch.start), _plot_xyz(branch.end)
        group['x'].extend([xs, xe, None])
        group['y'].extend([ys, ye, None])
        group['z'].extend([zs, ze, None])

        text = (f"Branch {i}<br>r: {branch.radius:.3f}<br>"
                f"L: {branch.length:.3f}<br>depth: {branch.depth}")
        group['text'].extend([text, text, None])

    for (color, opacity, width), group in groups.items():
        fig.add_trace(go.Scatter3d(
            x=group['x'], y=group['y'], z=group['z'],
            mode='lines',
            line=dict(color=color, width=width),
            opacity=opacity,
            showlegend=False,
            hovertext=group['text'],
            hoverinfo='text',
        ))

    # =========================================================================
    # MEASURING PLANE AND CROSS-SECTIONS
    # =========================================================================

    if world_y is not None and mode == ObservationMode.PIPE_MODEL:
        if sliced_branches:
            disc_x, disc_y, disc_z = [], [], []
            for branch in sliced_branches:
                center = _crossing_point(branch, world_y)
                for p in _disc_outline(center, branch.radius):
                    px, py, pz = _plot_xyz(p)
                    disc_x.append(px)
                    disc_y.append(py)
                    disc_z.append(pz)
                disc_x.append(None)
                disc_y.append(None)
                disc_z.append(None)

            fig.add_trace(go.Scatter3d(
                x=disc_x, y=disc_y, z=disc_z,
                mode='lines',
                line=dict(color=DISC_COLOR, width=3),
                name='Cross-sections',
                showlegend=False,
                hoverinfo='skip',
            ))

        if show_plane:
            angles = np.linspace(0.0, 2 * math.pi, 64, endpoint=False)
            ring_x = list(PLANE_RADIUS * np.cos(angles))
            ring_y = list(PLANE_RADIUS * np.sin(angles))
            n = len(angles)
            fig.add_trace(go.Mesh3d(
                x=[0.0] + ring_x,
                y=[0.0] + ring_y,
                z=[world_y] * (n + 1),
                i=[0] * n,
                j=list(range(1, n + 1)),
                k=[(j % n) + 1 for j in range(1, n + 1)],
                color=PLANE_COLOR,
                opacity=0.15,
                name='Measuring plane',
                hoverinfo='skip',
                showscale=False,
            ))

    # =========================================================================
    # LAYOUT
    # =========================================================================

    if branches:
        all_x = [p[0] for b in branches for p in (b.start, b.end)]
        all_z = [p[2] for b in branches for p in (b.start, b.end)]
        top = max(b.max_y for b in branches)
        half = max(max(abs(v) for v in all_x + all_z), 1.0) + 0.5
    else:
        top = BASE_Y + 1.0
        half = PLANE_RADIUS

    fig.update_layout(
        title=dict(text=title, font=dict(size=16)) if title else None,
        scene=dict(
            xaxis=dict(title='X', range=[-half, half],
                       backgroundcolor='rgba(240,240,240,0.5)'),
            yaxis=dict(title='Z', range=[-half, half],
                       backgroundcolor='rgba(240,240,240,0.5)'),
            zaxis=dict(title='Height', range=[BASE_Y, top + 0.5],
                       backgroundcolor='rgba(240,240,240,0.5)'),
            aspectmode='data',
            camera=dict(eye=dict(x=1.4, y=1.4, z=0.6)),
        ),
        margin=dict(l=0, r=0, t=40 if title else 0, b=0),
        height=height,
        showlegend=False,
    )

    return fig


def plot_tree_3d(
    branches: List[Branch],
    outpath: Optional[str] = None,
    show: bool = True,
    **kwargs
) -> go.Figure:
    """
    Create and optionally display/save a tree visualization.

    Parameters:
    -----------
    branches:
        See create_tree_figure()
    outpath : Optional[str]
        If provided, save as HTML file
    show : bool
        Whether to display the figure
    **kwargs:
        Passed to create_tree_figure()
    """
    fig = create_tree_figure(branches, **kwargs)

    if outpath:
        os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
        fig.write_html(outpath)
        print(f"3D visualization saved to: {outpath}")

    if show:
        fig.show()

    return fig
