# app/config.py
"""
Application configuration and defaults.
"""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass
class AppConfig:
    """Global application configuration."""

    # App metadata
    app_name: str = "Leonardo's Rule"
    app_subtitle: str = "Geometric Branching Conservation"
    version: str = "0.1.0"

    # Measuring plane (offset above trunk base)
    slice_height_range: Tuple[float, float] = (0.1, 6.5)
    slice_height_step: float = 0.1
    default_slice_height: float = 3.5
    reference_tree_height: float = 6.8

    # Slider ranges
    exponent_range: Tuple[float, float] = (1.5, 2.5)
    trunk_thickness_range: Tuple[float, float] = (0.1, 0.6)
    branch_thickness_range: Tuple[float, float] = (0.8, 1.2)
    depth_range: Tuple[int, int] = (0, 12)
    branching_angle_range: Tuple[float, float] = (0.0, 90.0)
    length_ratio_range: Tuple[float, float] = (0.5, 0.95)
    randomness_range: Tuple[float, float] = (0.0, 0.5)

    # Display-only scaling applied to areas in the read-outs
    area_conversion_factor: float = 10.7639
    area_unit: str = "Units²"

    default_species: str = 'Coast Redwood'
    default_seed: int = 42

    # Narrative text (Google GenAI)
    insight_model: str = 'gemini-2.5-flash'
    insight_debounce_s: float = 1.5

    observation_modes: List[str] = None

    def __post_init__(self):
        if self.observation_modes is None:
            self.observation_modes = [
                'Pipe Model (System)',
                'Conical Taper (Individual)',
            ]


# Global config instance
CONFIG = AppConfig()
