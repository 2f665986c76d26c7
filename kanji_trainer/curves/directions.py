"""Direction signatures: a polyline reduced to a few motion vectors.

Reference and live signatures are built differently:

* Reference strokes are cut into fixed-size groups of ``points_per_group``
  points, so the signature length depends on the stroke's length.
* Live strokes are cut into exactly as many groups as the reference has
  vectors, so the two signatures line up index by index.

Reference vectors have their y component negated; live vectors do not.
Reference paths are in document space (y down) while live points arrive
in the host's world space (y up), so the flip puts both in the same frame
before the angles are compared.
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

import numpy as np

from ..domain.geometry import Point
from ..errors import DrawnPointDeficit, InsufficientPoints

logger = logging.getLogger(__name__)


def _group_vectors(points: Sequence[Point], group_size: int, group_count: int,
                   flip_y: bool) -> List[Point]:
    arr = np.array([[p.x, p.y] for p in points], dtype=float).reshape(-1, 2)
    starts = np.arange(group_count) * group_size
    ends = np.minimum(starts + group_size - 1, len(arr) - 1)
    vectors = arr[ends] - arr[starts]
    if flip_y:
        vectors[:, 1] *= -1
    return [Point(float(dx), float(dy)) for dx, dy in vectors]


def summarize_reference(points: Sequence[Point], points_per_group: int,
                        flip_y: bool = True, strict: bool = False) -> List[Point]:
    """Reduce a reference polyline to one direction vector per group.

    The polyline is split into ceil(len / points_per_group) consecutive
    groups. Each vector runs from the group's first point to its last
    point; the last group ends at the final point of the polyline.

    Args:
        points: Resampled reference polyline.
        points_per_group: Group size g (>= 1).
        flip_y: Negate the y component (document space to world space).
        strict: Raise InsufficientPoints instead of logging it.

    Returns:
        The direction signature, ceil(len(points) / g) vectors long.

    Raises:
        InsufficientPoints: Only when strict and len(points) < g.
    """
    if points_per_group < 1:
        raise ValueError(f"points_per_group must be >= 1, got {points_per_group}")
    if not points:
        return []

    if len(points) < points_per_group:
        if strict:
            raise InsufficientPoints(
                f"{len(points)} points is fewer than the group size {points_per_group}")
        logger.warning("Number of points on curve (%d) is less than points per group (%d)",
                       len(points), points_per_group)

    group_count = math.ceil(len(points) / points_per_group)
    return _group_vectors(points, points_per_group, group_count, flip_y)


def summarize_live(points: Sequence[Point], reference_count: int,
                   strict: bool = False) -> List[Point]:
    """Reduce a drawn polyline to exactly ``reference_count`` vectors.

    The group size is floor(len(points) / reference_count); trailing
    points that do not fill a group are left out. The y component is kept
    as drawn.

    Args:
        points: Live polyline, already densified.
        reference_count: Length of the reference signature to match.
        strict: Raise DrawnPointDeficit instead of logging it.

    Returns:
        The live signature, or an empty list when there are fewer drawn
        points than reference vectors.

    Raises:
        DrawnPointDeficit: Only when strict and the stroke is too short.
    """
    if reference_count <= 0:
        return []

    if reference_count > len(points):
        if strict:
            raise DrawnPointDeficit(
                f"drew {len(points)} points, reference has {reference_count} vectors")
        logger.warning("Drawn points count (%d) less than direction list count (%d)",
                       len(points), reference_count)
        return []

    group_size = len(points) // reference_count
    return _group_vectors(points, group_size, reference_count, flip_y=False)
