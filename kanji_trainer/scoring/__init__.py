"""Stroke scoring.

    AccuracyTally: running valid/total counts for a character attempt.
    StrokeScorer: angular comparison of two direction signatures.
    StrokeScore: per-stroke comparison result.
"""

from .scorer import AccuracyTally, StrokeScore, StrokeScorer

__all__ = ['AccuracyTally', 'StrokeScore', 'StrokeScorer']
