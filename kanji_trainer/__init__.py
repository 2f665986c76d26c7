"""Kanji stroke trainer.

Decodes stroke-order character documents into reference direction
signatures and scores hand-drawn strokes against them.

Architecture Overview:
    - parsing turns document text into Character records and path strings
      into tessellated polylines
    - curves holds the Bezier tessellator, the resampler and the direction
      summarizers
    - library runs the reference pipeline once and answers queries
    - scoring compares live and reference signatures
    - session tracks a user's progress through a character
    - api exposes the library and sessions over HTTP

Example usage::

    from kanji_trainer import PracticeSession, ReferenceLibrary, TrainerConfig
    from kanji_trainer.domain import Point

    library = ReferenceLibrary.from_file('kanji.xml', TrainerConfig(point_radius=0.5))
    session = PracticeSession(library)
    outcome = session.submit_stroke([Point(0, 0), Point(30, 0)])
    if outcome.character_complete:
        print(f"accuracy {outcome.accuracy:.0%}")

Attributes:
    __version__ (str): Package version string.
"""

from .config import TrainerConfig, configure_logging
from .domain import Character, DecodedCharacter, Point
from .errors import (
    ConfigError,
    DecodeError,
    DrawnPointDeficit,
    InsufficientPoints,
    KanjiTrainerError,
    MalformedOperands,
    PathError,
    UnknownCharacter,
    UnknownStroke,
    UnrecognizedCommand,
)
from .library import ReferenceLibrary, build_reference
from .parsing import PathParser, decode_document, parse_path
from .scoring import AccuracyTally, StrokeScore, StrokeScorer
from .session import LiveStroke, PracticeSession, StrokeOutcome

__all__ = [
    # Configuration
    'TrainerConfig', 'configure_logging',
    # Domain objects
    'Point', 'Character', 'DecodedCharacter',
    # Pipeline
    'decode_document', 'PathParser', 'parse_path', 'build_reference', 'ReferenceLibrary',
    # Scoring
    'AccuracyTally', 'StrokeScore', 'StrokeScorer',
    'LiveStroke', 'PracticeSession', 'StrokeOutcome',
    # Errors
    'KanjiTrainerError', 'DecodeError', 'ConfigError', 'PathError',
    'UnrecognizedCommand', 'MalformedOperands', 'InsufficientPoints',
    'DrawnPointDeficit', 'UnknownCharacter', 'UnknownStroke',
]

__version__ = '1.0.0'
