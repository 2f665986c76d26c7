"""Curve processing for reference and live strokes.

The module exports the following functions:
    tessellate_cubic: Forward-difference tessellation of one cubic segment.
    resample_polyline: Fill gaps wider than a spacing unit.
    summarize_reference: Fixed group-size direction signature (y flipped).
    summarize_live: Direction signature matched to a reference length.

Example usage::

    from kanji_trainer.curves import resample_polyline, summarize_reference

    dense = resample_polyline(points, spacing=2.0)
    signature = summarize_reference(dense, points_per_group=5)
"""

from .bezier import tessellate_cubic
from .directions import summarize_live, summarize_reference
from .resample import resample_polyline, subdivision_count

__all__ = [
    'tessellate_cubic',
    'resample_polyline', 'subdivision_count',
    'summarize_reference', 'summarize_live',
]
