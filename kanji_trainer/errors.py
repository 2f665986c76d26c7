"""Exception hierarchy for the kanji trainer.

Only DecodeError and ConfigError are fatal. The path and summarizer
conditions are normally logged and recovered from; they are raised only
when a caller asks for strict behaviour.
"""


class KanjiTrainerError(Exception):
    """Base class for all trainer errors."""


class DecodeError(KanjiTrainerError):
    """The source document is empty or structurally malformed."""

    EMPTY_SOURCE = 'empty source'
    MALFORMED = 'malformed structure'

    def __init__(self, reason: str, detail: str = ''):
        self.reason = reason
        self.detail = detail
        message = f"{reason}: {detail}" if detail else reason
        super().__init__(message)


class ConfigError(KanjiTrainerError, ValueError):
    """A configuration value is out of range."""


class PathError(KanjiTrainerError):
    """Base class for problems inside a single path string."""

    def __init__(self, message: str, token: str = '', position: int = -1):
        self.token = token
        self.position = position
        super().__init__(message)


class UnrecognizedCommand(PathError):
    """A token did not start with M, c or C."""


class MalformedOperands(PathError):
    """A command was missing operands or had non-numeric ones."""


class InsufficientPoints(KanjiTrainerError):
    """A polyline is shorter than the configured group size."""


class DrawnPointDeficit(KanjiTrainerError):
    """A live stroke has fewer points than the reference has vectors."""


class UnknownCharacter(KanjiTrainerError, LookupError):
    """A character index is outside the loaded library."""


class UnknownStroke(KanjiTrainerError, LookupError):
    """A stroke number does not exist for the character."""
