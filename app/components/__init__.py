# app/components - Reusable UI components
from .model_viewer import render_3d_model, render_profile_plot
from .metrics_panel import (
    render_conservation_panel,
    render_tree_metrics,
    render_insight_note,
)
from .parameter_inputs import (
    render_species_picker,
    render_rule_inputs,
    render_growth_inputs,
    check_taper_warning,
)

__all__ = [
    'render_3d_model',
    'render_profile_plot',
    'render_conservation_panel',
    'render_tree_metrics',
    'render_insight_note',
    'render_species_picker',
    'render_rule_inputs',
    'render_growth_inputs',
    'check_taper_warning',
]
