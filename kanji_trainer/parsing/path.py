"""Parser for stroke path strings.

Stroke paths use a small subset of the SVG path grammar:

    M x y                       absolute move-to
    c dx1 dy1 dx2 dy2 dx y      relative cubic Bezier (repeatable)
    C x1 y1 x2 y2 x y           absolute cubic Bezier (repeatable)

Numbers are separated by commas, whitespace or simply by the sign of the
next number (``c1.5-2,3-4...``). Every cubic segment is tessellated as it
is read, so the parser's output is a ready polyline.
"""

from __future__ import annotations

import logging
import re
from typing import List, NamedTuple, Optional

from ..curves.bezier import tessellate_cubic
from ..domain.geometry import Point, Polyline
from ..errors import MalformedOperands, PathError, UnrecognizedCommand

logger = logging.getLogger(__name__)

MOVE_TO = 'M'
CUBIC_RELATIVE = 'c'
CUBIC_ABSOLUTE = 'C'

OPERAND_COUNTS = {MOVE_TO: 2, CUBIC_RELATIVE: 6, CUBIC_ABSOLUTE: 6}
REPEATABLE = {CUBIC_RELATIVE, CUBIC_ABSOLUTE}


class Token(NamedTuple):
    kind: str  # 'command', 'number' or 'other'
    text: str
    position: int


_TOKEN_RE = re.compile(
    r'(?P<number>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)'
    r'|(?P<command>[A-Za-z])'
    r'|(?P<other>[^\s,])'
)


def tokenize(d: str) -> List[Token]:
    """Split a path string into command letters and signed numbers.

    Example:
        >>> [t.text for t in tokenize('M1,2c3-4-5,6')]
        ['M', '1', '2', 'c', '3', '-4', '-5', '6']
    """
    return [Token(m.lastgroup, m.group(), m.start()) for m in _TOKEN_RE.finditer(d)]


class PathParser:
    """Parse a stroke path string into a polyline.

    Attributes:
        subdivisions: Interior points per cubic segment.
        chained_relative: When True, each relative offset in a ``c``
            command is added to the previous control point rather than to
            the segment start.
        strict: Raise PathError subclasses instead of logging and
            recovering.

    Example:
        >>> parser = PathParser(subdivisions=1)
        >>> [p.to_tuple() for p in parser.parse('M0,0c10,0,20,0,30,0')]
        [(0.0, 0.0), (15.0, 0.0), (30.0, 0.0)]
    """

    def __init__(self, subdivisions: int, chained_relative: bool = False,
                 strict: bool = False):
        self.subdivisions = subdivisions
        self.chained_relative = chained_relative
        self.strict = strict

    def parse(self, d: str) -> Polyline:
        """Parse one path string.

        Unknown commands and stray numbers are skipped together with any
        numbers that follow them, up to the next known command. A command
        with missing or unreadable operands ends the parse and the points
        gathered so far are returned.
        """
        tokens = tokenize(d)
        points: List[Point] = []
        current: Optional[Point] = None
        last_command: Optional[str] = None
        skipping = False
        i = 0

        while i < len(tokens):
            token = tokens[i]

            if token.kind == 'command' and token.text in OPERAND_COUNTS:
                command = token.text
                skipping = False
                i += 1
            elif token.kind == 'number' and last_command in REPEATABLE and not skipping:
                command = last_command
            elif token.kind == 'number' and skipping:
                i += 1
                continue
            else:
                self._recover(UnrecognizedCommand(
                    f"Unknown first character : {token.text!r} at offset {token.position}",
                    token=token.text, position=token.position))
                skipping = True
                last_command = None
                i += 1
                continue

            count = OPERAND_COUNTS[command]
            try:
                values = self._operands(tokens, i, count, command)
            except MalformedOperands as e:
                self._recover(e)
                break
            i += count

            if command == MOVE_TO:
                current = Point(values[0], values[1])
                points.append(current)
            else:
                if current is None:
                    logger.warning("Cubic command before move-to in %r, starting at origin", d)
                    current = Point(0.0, 0.0)
                    points.append(current)
                p2, p3, p4 = self._control_points(command, current, values)
                points.extend(tessellate_cubic(current, p2, p3, p4, self.subdivisions))
                current = p4

            last_command = command

        return points

    def _control_points(self, command: str, current: Point, values: List[float]):
        p2 = Point(values[0], values[1])
        p3 = Point(values[2], values[3])
        p4 = Point(values[4], values[5])
        if command == CUBIC_ABSOLUTE:
            return p2, p3, p4
        if self.chained_relative:
            p2 = current + p2
            p3 = p2 + p3
            p4 = p3 + p4
            return p2, p3, p4
        return current + p2, current + p3, current + p4

    @staticmethod
    def _operands(tokens: List[Token], start: int, count: int, command: str) -> List[float]:
        chunk = tokens[start:start + count]
        if len(chunk) < count or any(t.kind != 'number' for t in chunk):
            got = ' '.join(t.text for t in chunk) or 'nothing'
            position = chunk[0].position if chunk else -1
            raise MalformedOperands(
                f"{command!r} needs {count} numbers, got {got}",
                token=command, position=position)
        return [float(t.text) for t in chunk]

    def _recover(self, error: PathError) -> None:
        if self.strict:
            raise error
        logger.warning("%s", error)


def parse_path(d: str, subdivisions: int, chained_relative: bool = False,
               strict: bool = False) -> Polyline:
    """Parse a path string with a one-off PathParser."""
    return PathParser(subdivisions, chained_relative, strict).parse(d)
