"""Live stroke capture and per-user practice sessions.

A PracticeSession walks through the strokes of one character at a time.
The host feeds it serial stroke events (begin, extend, end); each ended
stroke is scored against the reference for the current stroke number and
the cursor moves on. When the last stroke of a character is drawn the
session reports the character's accuracy and clears its tally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .config import TrainerConfig
from .curves.directions import summarize_live
from .curves.resample import resample_polyline
from .domain.geometry import Point
from .errors import UnknownCharacter
from .library import ReferenceLibrary
from .scoring.scorer import AccuracyTally, StrokeScore, StrokeScorer

logger = logging.getLogger(__name__)


class LiveStroke:
    """Growable buffer of the points of the stroke being drawn.

    Every new point is joined to the previous one with the same spacing
    rule the resampler uses, so the buffer always equals the resampled
    raw input.

    Example:
        >>> stroke = LiveStroke(spacing=1.0)
        >>> stroke.add_point(Point(0, 0))
        [Point(x=0.0, y=0.0)]
        >>> len(stroke.add_point(Point(3, 0)))
        3
        >>> len(stroke)
        4
    """

    def __init__(self, spacing: float):
        self.spacing = spacing
        self._points: List[Point] = []

    def __len__(self) -> int:
        return len(self._points)

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    def add_point(self, point: Point) -> List[Point]:
        """Append a point and return the points newly added to the buffer."""
        point = Point(float(point.x), float(point.y))
        if not self._points:
            self._points.append(point)
            return [point]
        added = resample_polyline([self._points[-1], point], self.spacing)[1:]
        self._points.extend(added)
        return added

    def extend(self, points: Iterable[Point]) -> None:
        for p in points:
            self.add_point(p)

    def clear(self) -> None:
        self._points.clear()

    def signature(self, reference_count: int) -> List[Point]:
        """Direction signature matched to a reference of the given length."""
        return summarize_live(self._points, reference_count)


@dataclass(frozen=True)
class StrokeOutcome:
    """What happened when a stroke ended.

    Attributes:
        character: Index of the character the stroke belonged to.
        stroke: 1-based stroke number that was scored.
        score: Comparison result for this stroke.
        character_complete: True when this was the character's last stroke.
        accuracy: Character accuracy (valid / total), only set when the
            character is complete.
    """
    character: int
    stroke: int
    score: StrokeScore
    character_complete: bool = False
    accuracy: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            'character': self.character,
            'stroke': self.stroke,
            'valid': self.score.valid,
            'total': self.score.total,
            'compared': self.score.compared,
            'character_complete': self.character_complete,
            'accuracy': self.accuracy,
        }


class PracticeSession:
    """Stroke-by-stroke practice of the characters in a library.

    Attributes:
        library: Reference library being practised.
        config: Settings for spacing and tolerance.
        tally: Running counts for the current character attempt.
        current_character: 0-based index of the character being drawn.
        current_stroke: 0-based index of the next stroke to draw.
    """

    def __init__(self, library: ReferenceLibrary, config: Optional[TrainerConfig] = None,
                 character: int = 0):
        self.library = library
        self.config = config or library.config
        self.scorer = StrokeScorer(self.config.tolerance_degrees, self.config.wrap_angles)
        self.tally = AccuracyTally()
        self.live = LiveStroke(self.config.live_spacing)
        self.current_character = 0
        self.current_stroke = 0
        self.set_character(character)

    @property
    def stroke_count(self) -> int:
        return self.library.stroke_count(self.current_character)

    @property
    def display_name(self) -> str:
        return self.library.display_name(self.current_character)

    def set_character(self, index: int) -> None:
        """Select the character to draw and restart at its first stroke."""
        if not 0 <= index < self.library.character_count:
            raise UnknownCharacter(
                f"character index {index} out of range "
                f"(library has {self.library.character_count})")
        self.current_character = index
        self.current_stroke = 0
        self.live.clear()
        logger.debug("Session now on character %d ('%s')", index, self.display_name)

    def begin_stroke(self, point: Point) -> List[Point]:
        """Start a new stroke, dropping anything left in the buffer."""
        self.live.clear()
        return self.live.add_point(point)

    def extend_stroke(self, point: Point) -> List[Point]:
        return self.live.add_point(point)

    def abandon_stroke(self) -> None:
        """Discard the stroke in progress without scoring it."""
        self.live.clear()

    def end_stroke(self) -> StrokeOutcome:
        """Score the buffered stroke and advance to the next stroke."""
        character = self.current_character
        stroke_no = self.current_stroke + 1

        reference = self.library.reference_directions(character, stroke_no)
        live = self.live.signature(len(reference))
        score = self.scorer.score(reference, live, self.tally)
        self.live.clear()

        self.current_stroke += 1
        if self.current_stroke < self.stroke_count:
            return StrokeOutcome(character, stroke_no, score)

        accuracy = self.tally.accuracy
        logger.info("Character %d ('%s') complete: %d/%d valid, accuracy %.2f",
                    character, self.display_name, self.tally.valid, self.tally.total, accuracy)
        self.tally.reset()
        self.current_stroke = 0
        return StrokeOutcome(character, stroke_no, score, character_complete=True,
                             accuracy=accuracy)

    def submit_stroke(self, points: Sequence[Point]) -> StrokeOutcome:
        """Feed a whole drawn stroke at once and score it."""
        if points:
            self.begin_stroke(points[0])
            for p in points[1:]:
                self.extend_stroke(p)
        else:
            self.live.clear()
        return self.end_stroke()

    def state(self) -> dict:
        """Cursor and tally as a JSON-ready dictionary."""
        return {
            'character': self.current_character,
            'name': self.display_name,
            'stroke': self.current_stroke + 1,
            'stroke_count': self.stroke_count,
            'tally': self.tally.to_dict(),
            'config': self.config.to_dict(),
        }
