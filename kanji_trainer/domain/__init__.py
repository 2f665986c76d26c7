"""Domain objects for the kanji trainer.

Geometry classes:
    Point: Immutable 2D point, doubling as a direction vector.

Character classes:
    Character: Name plus raw path strings, as decoded from the document.
    DecodedCharacter: Name plus reference polylines and direction signatures.

Example usage::

    from kanji_trainer.domain import Point, polyline_to_list

    p1 = Point(0, 0)
    p2 = Point(3, 4)
    (p2 - p1).angle_degrees() # 53.13...
    polyline_to_list([p1, p2])  # [[0.0, 0.0], [3.0, 4.0]]
"""

from .character import Character, DecodedCharacter
from .geometry import Point, Polyline, polyline_from_list, polyline_to_list

__all__ = [
    'Point', 'Polyline', 'polyline_to_list', 'polyline_from_list',
    'Character', 'DecodedCharacter',
]
