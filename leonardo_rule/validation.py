"""
Parameter ranges and validation.

The generator itself does not enforce slider ranges. Callers that accept
user input validate (reject) or clamp here before generating.
"""

import math
from typing import Dict, List, Tuple

from .model import TreeParams


class InvalidParameterError(ValueError):
    """Raised when a parameter set would produce invalid or non-finite geometry."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("Invalid tree parameters: " + "; ".join(self.problems))


# (low, high, low_inclusive, high_inclusive)
PARAM_RANGES: Dict[str, Tuple[float, float, bool, bool]] = {
    'branching_angle': (0.0, 90.0, True, True),
    'depth': (0, 12, True, True),
    'length_ratio': (0.0, 1.0, False, False),
    'exponent': (1.0, 4.0, False, True),
    'trunk_thickness': (0.0, 2.0, False, True),
    'branch_thickness': (0.0, 2.0, False, True),
}

# Keeps clamped values strictly inside open bounds
_OPEN_EPS = 1e-6

NUMERIC_FIELDS = (
    'branching_angle', 'depth', 'length_ratio', 'exponent',
    'trunk_thickness', 'branch_thickness', 'randomness',
)


def _format_range(low, high, low_inc, high_inc) -> str:
    return f"{'[' if low_inc else '('}{low}, {high}{']' if high_inc else ')'}"


def find_non_finite(params: TreeParams) -> List[str]:
    """Names of numeric fields that are NaN or infinite."""
    return [
        name for name in NUMERIC_FIELDS
        if not math.isfinite(float(getattr(params, name)))
    ]


def check_params(params: TreeParams) -> List[str]:
    """
    Check a parameter set against the documented ranges.

    Returns a list of human-readable problems (empty if valid).
    """
    problems = [f"{name} must be finite" for name in find_non_finite(params)]

    for name, (low, high, low_inc, high_inc) in PARAM_RANGES.items():
        value = getattr(params, name)
        if not math.isfinite(float(value)):
            continue
        below = value < low if low_inc else value <= low
        above = value > high if high_inc else value >= high
        if below or above:
            problems.append(
                f"{name}={value} outside {_format_range(low, high, low_inc, high_inc)}"
            )

    if math.isfinite(params.randomness) and params.randomness < 0:
        problems.append(f"randomness={params.randomness} must be >= 0")

    return problems


def validate_params(params: TreeParams) -> TreeParams:
    """Return params unchanged if valid, otherwise raise InvalidParameterError."""
    problems = check_params(params)
    if problems:
        raise InvalidParameterError(problems)
    return params


def clamp_params(params: TreeParams) -> TreeParams:
    """
    Clamp every ranged field into its documented range.

    Non-finite values cannot be clamped meaningfully and are rejected.
    """
    bad = find_non_finite(params)
    if bad:
        raise InvalidParameterError([f"{name} must be finite" for name in bad])

    changes = {}
    for name, (low, high, low_inc, high_inc) in PARAM_RANGES.items():
        value = getattr(params, name)
        lo = low if low_inc else low + _OPEN_EPS
        hi = high if high_inc else high - _OPEN_EPS
        clamped = min(max(value, lo), hi)
        if name == 'depth':
            clamped = int(round(clamped))
        if clamped != value:
            changes[name] = clamped

    if params.randomness < 0:
        changes['randomness'] = 0.0

    return params.replace(**changes) if changes else params
