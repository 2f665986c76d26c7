"""Reference library: decoded characters and the query surface over them.

The library is built once at startup. Every stroke of every character is
run through the reference pipeline::

    path string -> PathParser (tessellates cubics)
                -> resample_polyline (spacing = point diameter)
                -> summarize_reference (fixed group size, y flipped)

and the results are kept read-only for the rest of the program.

Example usage::

    from kanji_trainer import ReferenceLibrary, TrainerConfig

    library = ReferenceLibrary.from_file('kanji.xml', TrainerConfig(point_radius=0.5))
    for i in range(library.character_count):
        print(library.display_name(i), library.stroke_count(i))
    signature = library.reference_directions(0, 1)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .config import TrainerConfig
from .curves.directions import summarize_reference
from .curves.resample import resample_polyline
from .domain.character import Character, DecodedCharacter
from .domain.geometry import Point
from .errors import UnknownCharacter
from .parsing.document import decode_document
from .parsing.path import PathParser

logger = logging.getLogger(__name__)


def build_reference(character: Character, config: TrainerConfig,
                    parser: Optional[PathParser] = None) -> DecodedCharacter:
    """Run every stroke of a character through the reference pipeline."""
    if parser is None:
        parser = PathParser(config.subdivisions, config.chained_relative)

    points = {}
    directions = {}
    for stroke_no, d in character.strokes.items():
        polyline = parser.parse(d)
        if not polyline:
            logger.warning("Stroke %d of '%s' produced no points", stroke_no, character.name)
        dense = resample_polyline(polyline, config.reference_spacing)
        points[stroke_no] = dense
        directions[stroke_no] = summarize_reference(dense, config.points_per_group)
        logger.debug("'%s' stroke %d: %d raw points, %d resampled, %d vectors",
                     character.name, stroke_no, len(polyline), len(dense),
                     len(directions[stroke_no]))

    return DecodedCharacter(name=character.name, points=points, directions=directions)


class ReferenceLibrary:
    """Read-only collection of decoded reference characters.

    Characters are addressed by 0-based index in document order; strokes
    by their 1-based number within the character.

    Attributes:
        config: The TrainerConfig the references were built with.
    """

    def __init__(self, characters: Sequence[DecodedCharacter], config: TrainerConfig):
        self._characters: Tuple[DecodedCharacter, ...] = tuple(characters)
        self.config = config

    @classmethod
    def from_characters(cls, characters: Sequence[Character],
                        config: Optional[TrainerConfig] = None,
                        strict: bool = False) -> ReferenceLibrary:
        """Build references for already decoded characters.

        Args:
            characters: Output of decode_document.
            config: Pipeline settings; defaults to TrainerConfig().
            strict: Raise on malformed path strings instead of recovering.
        """
        config = config or TrainerConfig()
        parser = PathParser(config.subdivisions, config.chained_relative, strict=strict)
        decoded = [build_reference(c, config, parser) for c in characters]
        logger.info("Built references for %d characters (%d strokes)",
                    len(decoded), sum(c.stroke_count for c in decoded))
        return cls(decoded, config)

    @classmethod
    def from_document(cls, text: str, config: Optional[TrainerConfig] = None,
                      strict: bool = False) -> ReferenceLibrary:
        """Decode document text and build the library.

        Raises:
            DecodeError: If the document is empty or malformed.
        """
        return cls.from_characters(decode_document(text), config, strict)

    @classmethod
    def from_file(cls, path: Union[str, Path], config: Optional[TrainerConfig] = None,
                  strict: bool = False) -> ReferenceLibrary:
        """Read a document file (UTF-8) and build the library."""
        text = Path(path).read_text(encoding='utf-8')
        logger.debug("Read %d characters of document text from %s", len(text), path)
        return cls.from_document(text, config, strict)

    def __len__(self) -> int:
        return len(self._characters)

    def __iter__(self) -> Iterator[DecodedCharacter]:
        return iter(self._characters)

    @property
    def character_count(self) -> int:
        return len(self._characters)

    def character(self, index: int) -> DecodedCharacter:
        if not 0 <= index < len(self._characters):
            raise UnknownCharacter(
                f"character index {index} out of range (0..{len(self._characters) - 1})")
        return self._characters[index]

    def stroke_count(self, index: int) -> int:
        return self.character(index).stroke_count

    def display_name(self, index: int) -> str:
        return self.character(index).name

    def audio_key(self, index: int) -> str:
        return self.character(index).audio_key

    def audio_keys(self) -> List[str]:
        """First word of every character name, in library order."""
        return [c.audio_key for c in self._characters]

    def reference_directions(self, index: int, stroke: int) -> Tuple[Point, ...]:
        """Direction signature of a 1-based stroke of a character."""
        return self.character(index).stroke_directions(stroke)

    def reference_points(self, index: int, stroke: int) -> Tuple[Point, ...]:
        """Resampled reference polyline of a 1-based stroke of a character."""
        return self.character(index).stroke_points(stroke)

    def summary(self) -> List[dict]:
        """Per-character overview for listings."""
        return [
            {
                'index': i,
                'name': c.name,
                'audio_key': c.audio_key,
                'stroke_count': c.stroke_count,
            }
            for i, c in enumerate(self._characters)
        ]
