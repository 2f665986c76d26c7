"""Angular comparison of live strokes against reference signatures.

Each live vector is compared with the reference vector at the same index.
A pair is valid when the live angle lies strictly inside the window
``(ref - tolerance, ref + tolerance)``. Counts accumulate in an
AccuracyTally across all strokes of one character attempt.

By default the window does not wrap at +/-180 degrees, so a reference
pointing almost straight left can reject a live stroke that points the
same way but lands on the other side of the seam. Pass
``wrap_angles=True`` to compare around the circle instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..domain.geometry import Point

logger = logging.getLogger(__name__)


@dataclass
class AccuracyTally:
    """Running valid/total counts for one character attempt.

    Attributes:
        total: Reference vectors seen so far.
        valid: Live vectors accepted so far.
    """
    total: int = 0
    valid: int = 0

    def record(self, valid: int, total: int) -> None:
        self.valid += valid
        self.total += total

    @property
    def accuracy(self) -> float:
        """valid / total, or 0.0 before anything was recorded."""
        if self.total == 0:
            return 0.0
        return self.valid / self.total

    def reset(self) -> None:
        self.total = 0
        self.valid = 0

    def to_dict(self) -> dict:
        return {'total': self.total, 'valid': self.valid, 'accuracy': self.accuracy}


@dataclass(frozen=True)
class StrokeScore:
    """Result of comparing one live stroke with its reference.

    Attributes:
        valid: Pairs whose angles matched.
        total: Length of the reference signature (added to the tally).
        compared: Pairs actually compared; less than total when the live
            signature ran out early.
    """
    valid: int
    total: int
    compared: int

    @property
    def accuracy(self) -> float:
        return self.valid / self.total if self.total else 0.0


def _angles(vectors: Sequence[Point]) -> np.ndarray:
    return np.array([v.angle_degrees() for v in vectors], dtype=float)


class StrokeScorer:
    """Compare direction signatures within an angular tolerance.

    Attributes:
        tolerance_degrees: Half-width of the accepted window.
        wrap_angles: Measure the angular difference around the circle
            instead of on the raw -180..180 line.

    Example:
        >>> scorer = StrokeScorer(25.0)
        >>> tally = AccuracyTally()
        >>> scorer.score([Point(10, 0)], [Point(9, 1)], tally).valid
        1
        >>> tally.accuracy
        1.0
    """

    def __init__(self, tolerance_degrees: float, wrap_angles: bool = False):
        if not tolerance_degrees > 0:
            raise ValueError(f"tolerance_degrees must be positive, got {tolerance_degrees!r}")
        self.tolerance_degrees = float(tolerance_degrees)
        self.wrap_angles = wrap_angles

    def matches(self, reference: Sequence[Point], live: Sequence[Point]) -> np.ndarray:
        """Boolean match per compared pair, len = min(len(reference), len(live))."""
        compared = min(len(reference), len(live))
        if compared == 0:
            return np.zeros(0, dtype=bool)

        ref_angles = _angles(reference[:compared])
        live_angles = _angles(live[:compared])

        if self.wrap_angles:
            diff = (live_angles - ref_angles + 180.0) % 360.0 - 180.0
            return np.abs(diff) < self.tolerance_degrees

        min_angles = ref_angles - self.tolerance_degrees
        max_angles = ref_angles + self.tolerance_degrees
        return (live_angles > min_angles) & (live_angles < max_angles)

    def score(self, reference: Sequence[Point], live: Sequence[Point],
              tally: Optional[AccuracyTally] = None) -> StrokeScore:
        """Score one stroke and add the result to ``tally`` if given.

        The whole reference length counts toward the total even when the
        live signature is shorter; missing live vectors count as misses.
        """
        matched = self.matches(reference, live)
        result = StrokeScore(valid=int(matched.sum()), total=len(reference),
                             compared=len(matched))
        if tally is not None:
            tally.record(result.valid, result.total)
        logger.debug("Stroke scored: valid=%d total=%d compared=%d",
                     result.valid, result.total, result.compared)
        return result
