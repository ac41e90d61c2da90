# leonardo_rule/viz - Visualization Tools
"""
VIZ: Visualization for generated trees
======================================

- viz3d: interactive 3D tree viewer (Plotly)
"""

from .viz3d import create_tree_figure, plot_tree_3d, branch_style

__all__ = ['create_tree_figure', 'plot_tree_3d', 'branch_style']
