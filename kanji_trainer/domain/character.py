"""Character records produced by the decoder and the reference pipeline."""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from ..errors import UnknownStroke
from .geometry import Point, polyline_to_list


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Character:
    """A named character with its raw path strings.

    Attributes:
        name: Display name from the document, e.g. ``"ichi one"``.
        strokes: Stroke number (1-based, document order) to raw path text.
    """
    name: str
    strokes: Mapping[int, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'strokes', _freeze(self.strokes))

    @property
    def audio_key(self) -> str:
        """First word of the name, used to look up the pronunciation clip."""
        parts = self.name.split(' ')
        return parts[0]

    @property
    def stroke_count(self) -> int:
        return len(self.strokes)

    def __str__(self):
        return f"{self.name} ({self.stroke_count} strokes)"


@dataclass(frozen=True)
class DecodedCharacter:
    """A character after tessellation, resampling and summarising.

    Attributes:
        name: Display name copied from the source Character.
        points: Stroke number to the resampled reference polyline.
        directions: Stroke number to the reference direction signature.
    """
    name: str
    points: Mapping[int, Tuple[Point, ...]]
    directions: Mapping[int, Tuple[Point, ...]]

    def __post_init__(self):
        object.__setattr__(self, 'points', _freeze(
            {k: tuple(v) for k, v in self.points.items()}))
        object.__setattr__(self, 'directions', _freeze(
            {k: tuple(v) for k, v in self.directions.items()}))

    @property
    def audio_key(self) -> str:
        return self.name.split(' ')[0]

    @property
    def stroke_count(self) -> int:
        return len(self.directions)

    def stroke_points(self, stroke: int) -> Tuple[Point, ...]:
        """Reference polyline for a 1-based stroke number."""
        try:
            return self.points[stroke]
        except KeyError:
            raise UnknownStroke(
                f"'{self.name}' has no stroke {stroke} (1..{self.stroke_count})") from None

    def stroke_directions(self, stroke: int) -> Tuple[Point, ...]:
        """Reference direction signature for a 1-based stroke number."""
        try:
            return self.directions[stroke]
        except KeyError:
            raise UnknownStroke(
                f"'{self.name}' has no stroke {stroke} (1..{self.stroke_count})") from None

    def to_dict(self) -> Dict:
        """Convert to a JSON-ready dictionary."""
        return {
            'name': self.name,
            'audio_key': self.audio_key,
            'stroke_count': self.stroke_count,
            'strokes': [
                {
                    'stroke': n,
                    'points': polyline_to_list(self.points[n]),
                    'directions': polyline_to_list(self.directions[n]),
                }
                for n in sorted(self.directions)
            ],
        }
