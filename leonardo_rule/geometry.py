# leonardo_rule/geometry.py
"""
VECTOR GEOMETRY: Axis-angle rotation for branch directions
==========================================================

Every child branch direction is the parent direction rotated about some
horizontal axis. We use Rodrigues' rotation formula:

    v_rot = v cosθ + (k × v) sinθ + k (k · v)(1 − cosθ)

where k is the unit rotation axis. Positive θ is a right-handed
(counter-clockwise looking down k) rotation, so rotating by −θ bends the
branch the opposite way.

The horizontal axis itself is the X axis spun about the vertical Y axis by
an azimuth φ:

    k(φ) = (cos φ, 0, −sin φ)
"""

import numpy as np


UP = np.array([0.0, 1.0, 0.0])


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector in the direction of v (v must be non-zero)."""
    n = np.linalg.norm(v)
    if n == 0:
        raise ValueError("Cannot normalize a zero-length vector")
    return v / n


def rotate_about_axis(v: np.ndarray, axis: np.ndarray, angle: float) -> np.ndarray:
    """
    Rotate vector v about a unit axis by angle (radians), right-handed.

    Examples:
    ---------
    >>> rotate_about_axis(np.array([0., 1., 0.]), np.array([1., 0., 0.]), np.pi / 2)
    array([0., 0., 1.])  # approximately
    """
    k = normalize(np.asarray(axis, dtype=float))
    v = np.asarray(v, dtype=float)
    c = np.cos(angle)
    s = np.sin(angle)
    return v * c + np.cross(k, v) * s + k * np.dot(k, v) * (1.0 - c)


def horizontal_axis(azimuth: float) -> np.ndarray:
    """The X axis rotated about +Y by azimuth (radians)."""
    return np.array([np.cos(azimuth), 0.0, -np.sin(azimuth)])
