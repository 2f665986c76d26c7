"""Cubic Bezier tessellation by forward differencing.

The curve is stepped at even parameter intervals. Rather than evaluating
the cubic at every step, the first, second and third differences are
computed once from the control points and then accumulated, so each step
costs a handful of additions.

Reference: "Interpolation with Bezier Curves", Maxim Shemanarev,
http://antigrain.com/research/bezier_interpolation/
"""

from __future__ import annotations

from ..domain.geometry import Point, Polyline


def tessellate_cubic(p1: Point, p2: Point, p3: Point, p4: Point,
                     subdivisions: int) -> Polyline:
    """Convert one cubic segment into polyline points.

    Args:
        p1: Start point. Not included in the output, the caller already
            holds it from the previous segment or the move-to.
        p2: First control point.
        p3: Second control point.
        p4: End point.
        subdivisions: Number of interior points N (>= 0).

    Returns:
        N interior points at t = 1/(N+1), 2/(N+1), ... followed by p4
        itself, N + 1 points in all. The last point is p4 exactly, not the
        accumulated value.

    Example:
        >>> pts = tessellate_cubic(Point(0, 0), Point(10, 0), Point(20, 0), Point(30, 0), 1)
        >>> [p.to_tuple() for p in pts]
        [(15.0, 0.0), (30.0, 0.0)]
    """
    if subdivisions < 0:
        raise ValueError(f"subdivisions must be >= 0, got {subdivisions}")

    step = 1.0 / (subdivisions + 1)
    step2 = step * step
    step3 = step2 * step

    pre1 = 3.0 * step
    pre2 = 3.0 * step2
    pre4 = 6.0 * step2
    pre5 = 6.0 * step3

    tmp1x = p1.x - p2.x * 2.0 + p3.x
    tmp1y = p1.y - p2.y * 2.0 + p3.y

    tmp2x = (p2.x - p3.x) * 3.0 - p1.x + p4.x
    tmp2y = (p2.y - p3.y) * 3.0 - p1.y + p4.y

    fx = p1.x
    fy = p1.y

    dfx = (p2.x - p1.x) * pre1 + tmp1x * pre2 + tmp2x * step3
    dfy = (p2.y - p1.y) * pre1 + tmp1y * pre2 + tmp2y * step3

    ddfx = tmp1x * pre4 + tmp2x * pre5
    ddfy = tmp1y * pre4 + tmp2y * pre5

    dddfx = tmp2x * pre5
    dddfy = tmp2y * pre5

    points = []
    for _ in range(subdivisions):
        fx += dfx
        fy += dfy
        dfx += ddfx
        dfy += ddfy
        ddfx += dddfx
        ddfy += dddfy
        points.append(Point(fx, fy))

    points.append(Point(float(p4.x), float(p4.y)))
    return points
