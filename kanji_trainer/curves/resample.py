"""Spacing-aware resampling of polylines.

Reference polylines come out of tessellation with uneven gaps: long flat
curve sections produce widely spaced points, tight bends produce dense
ones. Resampling fills every gap wider than the spacing unit with evenly
interpolated points so later grouping works on roughly equal arc lengths.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from ..domain.geometry import Point, Polyline


def _to_array(points: Sequence[Point]) -> np.ndarray:
    return np.array([[p.x, p.y] for p in points], dtype=float).reshape(-1, 2)


def _to_points(arr: np.ndarray) -> Polyline:
    return [Point(float(x), float(y)) for x, y in arr]


def subdivision_count(distance: float, spacing: float) -> int:
    """Number of points emitted for one pair of consecutive points.

    Pairs closer than the spacing keep only their first point. Otherwise
    the gap is cut into floor(distance / spacing) pieces, never fewer than
    one even when rounding pulls an exact multiple just under. A
    non-finite distance raises ValueError.
    """
    if not math.isfinite(distance):
        raise ValueError(f"distance must be finite, got {distance!r}")
    if distance < spacing:
        return 1
    return max(1, int(math.floor(distance / spacing)))


def resample_polyline(points: Sequence[Point], spacing: float) -> Polyline:
    """Re-emit points so consecutive points are at most ~spacing apart.

    For every consecutive pair (a, b) closer than ``spacing`` only ``a`` is
    kept. Wider pairs are replaced by k = floor(|ab| / spacing) points
    running from ``a`` (inclusive) toward ``b`` (exclusive) in steps of
    1/k. The final input point is appended once at the end.

    Args:
        points: Input polyline.
        spacing: Spacing unit, must be positive.

    Returns:
        New polyline with the same endpoints and at least as many points.
        Inputs with fewer than two points are returned as a copy.

    Raises:
        ValueError: If spacing is not positive or a coordinate is not
            finite.

    Example:
        >>> pts = resample_polyline([Point(0, 0), Point(4, 0)], 1.0)
        >>> [p.x for p in pts]
        [0.0, 1.0, 2.0, 3.0, 4.0]
    """
    if not spacing > 0:
        raise ValueError(f"spacing must be positive, got {spacing!r}")
    if len(points) < 2:
        return list(points)

    arr = _to_array(points)
    if not np.isfinite(arr).all():
        raise ValueError("points must have finite coordinates")
    seg = np.diff(arr, axis=0)
    dist = np.hypot(seg[:, 0], seg[:, 1])

    counts = np.array([subdivision_count(float(d), spacing) for d in dist], dtype=int)

    # Pair index and step number for every emitted point
    pair_idx = np.repeat(np.arange(len(seg)), counts)
    first_of_pair = np.repeat(np.cumsum(counts) - counts, counts)
    step_no = np.arange(int(counts.sum())) - first_of_pair
    frac = step_no / counts[pair_idx]

    emitted = arr[pair_idx] + frac[:, None] * seg[pair_idx]

    result = _to_points(emitted)
    last = points[-1]
    result.append(Point(float(last.x), float(last.y)))
    return result
