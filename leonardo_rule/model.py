# leonardo_rule/model.py
"""
TREE MODEL DEFINITIONS: TreeParams, Branch, SliceStats
======================================================

PURPOSE:
--------
This module defines the data structures shared by the generator, the slice
analyzer and every presentation layer:
- TreeParams: the parameter set for one generation pass
- Branch: one cylindrical segment of the tree
- SliceStats: what a horizontal measuring plane "sees"

BOTANICAL CONTEXT:
------------------
Leonardo noticed that if you bundle all the branches found at one height
together, they are about as thick as the trunk. In area terms:

    A_trunk ≈ Σ A_branches        (A = π r²)

Generalising the exponent (r^n instead of r²) gives the parameterized rule
used here. A branch splitting into two equal children then has:

    r_child = r_parent / 2^(1/n)

All structures below are immutable: a generation pass produces them once
and everything downstream only reads them.
"""

import math
from dataclasses import dataclass, asdict, replace as dc_replace
from enum import Enum
from typing import Any, Dict, Tuple


Vec3 = Tuple[float, float, float]


class TreeSpecies(str, Enum):
    """Reference species. Values are the display names."""
    COAST_REDWOOD = 'Coast Redwood'
    DOUGLAS_FIR = 'Douglas Fir'
    BAY_LAUREL = 'California Bay Laurel'
    PONDEROSA_PINE = 'Ponderosa Pine'


class ObservationMode(str, Enum):
    """How the rendered tree is emphasised. Has no effect on geometry."""
    PIPE_MODEL = 'Pipe Model (System)'
    CONICAL_TAPER = 'Conical Taper (Individual)'


@dataclass(frozen=True)
class TreeParams:
    """
    Parameters for one tree generation pass.

    Parameters:
    -----------
    branching_angle : float
        Lateral branching angle in degrees (documented range 0-90)

    depth : int
        Number of branching levels above the trunk (0-12)

    length_ratio : float
        Child length / parent length, in (0, 1)

    exponent : float
        Leonardo exponent n, in (1, 4]. n=2 is strict area conservation.

    trunk_thickness : float
        Trunk base radius, in (0, 2]

    branch_thickness : float
        Multiplier applied to the theoretical child radius, in (0, 2]

    species : TreeSpecies
        Reference species (controls conic lateral shaping)

    randomness : float
        Magnitude of the symmetric angular jitter, in radians

    Examples:
    ---------
    >>> p = TreeParams(depth=1, length_ratio=0.8, trunk_thickness=0.3)
    >>> p.replace(depth=4).depth
    4
    """
    branching_angle: float = 25.0
    depth: int = 7
    length_ratio: float = 0.88
    exponent: float = 2.1
    trunk_thickness: float = 0.45
    branch_thickness: float = 1.0
    species: TreeSpecies = TreeSpecies.COAST_REDWOOD
    randomness: float = 0.05

    def replace(self, **changes: Any) -> 'TreeParams':
        """Return a copy with some fields changed."""
        return dc_replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['species'] = self.species.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TreeParams':
        """Build params from a plain dict (species by display value or name)."""
        values = dict(data)
        species = values.get('species', TreeSpecies.COAST_REDWOOD)
        if not isinstance(species, TreeSpecies):
            try:
                species = TreeSpecies(species)
            except ValueError:
                species = TreeSpecies[str(species)]
        values['species'] = species
        values['depth'] = int(values.get('depth', cls.depth))
        return cls(**values)


@dataclass(frozen=True)
class Branch:
    """
    One cylindrical segment of the tree.

    Parameters:
    -----------
    start, end : Vec3
        Endpoints in world coordinates (y is up)
    radius : float
        Segment radius
    depth : int
        Remaining depth at creation (trunk carries the full depth, leaves 0)
    volume : float
        π r² L of this segment only
    is_main_path : bool
        True only along the unbroken chain of leader children from the trunk

    Notes:
    ------
    - There is no parent link. Lineage (main path) is carried as a flag
      during generation, so branches never reference each other.
    """
    start: Vec3
    end: Vec3
    radius: float
    depth: int
    volume: float
    is_main_path: bool

    @property
    def length(self) -> float:
        return math.dist(self.start, self.end)

    @property
    def area(self) -> float:
        """Cross-sectional area π r²."""
        return math.pi * self.radius ** 2

    @property
    def min_y(self) -> float:
        return min(self.start[1], self.end[1])

    @property
    def max_y(self) -> float:
        return max(self.start[1], self.end[1])


@dataclass(frozen=True)
class SliceStats:
    """
    Result of intersecting the tree with a horizontal plane.

    trunk_area is the fixed trunk cross-section (π · trunk_thickness²) and
    does not depend on the height. height is the queried offset above the
    trunk base, not the world y.
    """
    trunk_area: float
    current_sum: float
    branch_count: int
    branch_areas: Tuple[float, ...]
    height: float

    @property
    def conservation_ratio(self) -> float:
        """Σ A_branches / A_trunk (1.0 means perfectly conserved)."""
        if self.trunk_area <= 0:
            return 0.0
        return self.current_sum / self.trunk_area

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['branch_areas'] = list(self.branch_areas)
        data['conservation_ratio'] = self.conservation_ratio
        return data
