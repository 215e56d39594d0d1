"""
Map-view geometry helpers.

Distances here are plain Euclidean distances on (lat, lng) degrees, not
geodesic ones. They only decide whether the map view still sits on the
satellite marker.
"""

from typing import Optional, Sequence

import numpy as np

DEFAULT_CENTER_THRESHOLD_DEG = 0.01


def degree_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two (lat, lng) points, in degrees."""
    delta = np.asarray(a, dtype=float)[:2] - np.asarray(b, dtype=float)[:2]
    return float(np.hypot(delta[0], delta[1]))


def is_centered(
    center: Optional[Sequence[float]],
    target: Optional[Sequence[float]],
    threshold: float = DEFAULT_CENTER_THRESHOLD_DEG,
) -> bool:
    """True when center lies strictly within threshold degrees of target."""
    if center is None or target is None:
        return False
    return degree_distance(center, target) < threshold
