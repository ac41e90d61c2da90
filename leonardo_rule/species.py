"""
SPECIES CATALOG: Reference presets for the four demonstration trees
===================================================================

Instead of hand-tuning eight sliders, the user picks a species and gets a
preset that reproduces its characteristic silhouette. Sliders then modify
the preset.

CONIC SPECIES:
--------------
Redwood, Douglas fir and ponderosa pine grow pyramidal crowns. Their lateral
branches leave the stem at a steeper angle and stay shorter than the
leader, which is what sheds snow and keeps the crown a cone. The bay laurel
is a broadleaf without that constraint and grows a rounder, bushier volume.
"""

from typing import Dict

from .model import TreeParams, TreeSpecies


CONIC_SPECIES = frozenset({
    TreeSpecies.COAST_REDWOOD,
    TreeSpecies.DOUGLAS_FIR,
    TreeSpecies.PONDEROSA_PINE,
})


SPECIES_DEFAULTS: Dict[TreeSpecies, TreeParams] = {
    TreeSpecies.COAST_REDWOOD: TreeParams(
        branching_angle=25.0,
        depth=7,
        length_ratio=0.88,
        exponent=2.1,
        trunk_thickness=0.45,
        branch_thickness=1.0,
        species=TreeSpecies.COAST_REDWOOD,
        randomness=0.05,
    ),
    TreeSpecies.DOUGLAS_FIR: TreeParams(
        branching_angle=40.0,
        depth=7,
        length_ratio=0.82,
        exponent=1.85,
        trunk_thickness=0.35,
        branch_thickness=0.95,
        species=TreeSpecies.DOUGLAS_FIR,
        randomness=0.12,
    ),
    TreeSpecies.BAY_LAUREL: TreeParams(
        branching_angle=35.0,
        depth=6,
        length_ratio=0.78,
        exponent=2.0,
        trunk_thickness=0.28,
        branch_thickness=1.05,
        species=TreeSpecies.BAY_LAUREL,
        randomness=0.25,
    ),
    TreeSpecies.PONDEROSA_PINE: TreeParams(
        branching_angle=50.0,
        depth=7,
        length_ratio=0.84,
        exponent=1.95,
        trunk_thickness=0.38,
        branch_thickness=1.0,
        species=TreeSpecies.PONDEROSA_PINE,
        randomness=0.08,
    ),
}


SPECIES_INFO: Dict[TreeSpecies, str] = {
    TreeSpecies.COAST_REDWOOD: (
        "Coast Redwoods show extreme apical dominance, forming a massive central "
        "pillar with short, horizontal, water-collecting branches."
    ),
    TreeSpecies.DOUGLAS_FIR: (
        "Douglas Firs are quintessential conic trees. Their architecture ensures "
        "that heavy snow loads slide off the tapered branches rather than breaking them."
    ),
    TreeSpecies.BAY_LAUREL: (
        "The Bay Laurel is a broadleaf tree. Without the conic requirement of "
        "snow-shedding, it grows in a more rounded, chaotic 'bushy' volume."
    ),
    TreeSpecies.PONDEROSA_PINE: (
        "Ponderosa Pines exhibit clear whorled branching. Their conic shape in "
        "youth maximizes sunlight capture in the open mountain forests."
    ),
}


def is_conic(species: TreeSpecies) -> bool:
    return species in CONIC_SPECIES


def params_for_species(species: TreeSpecies) -> TreeParams:
    """Preset parameters for a species (accepts the enum or its display value)."""
    return SPECIES_DEFAULTS[TreeSpecies(species)]
