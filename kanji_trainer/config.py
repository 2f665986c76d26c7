"""Shared configuration for the reference pipeline and the scorer.

Both the reference side and the live side read spacing, grouping and
tolerance from the same TrainerConfig.

Attributes:
    DEFAULT_POINT_RADIUS (float): Radius of a drawn point in source units.
    DEFAULT_SUBDIVISIONS (int): Interior points emitted per Bezier segment.
    DEFAULT_POINTS_PER_GROUP (int): Points summarised by one direction vector.
    DEFAULT_TOLERANCE_DEGREES (float): Half-width of the accepted angle window.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_POINT_RADIUS = 1.0
DEFAULT_SUBDIVISIONS = 2
DEFAULT_POINTS_PER_GROUP = 5
DEFAULT_TOLERANCE_DEGREES = 25.0

LOG_FORMAT = '%(asctime)s %(levelname)-8s [%(name)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class TrainerConfig:
    """Tunable values for decoding references and scoring strokes.

    Attributes:
        point_radius: Radius of a drawn point. Reference polylines are
            resampled at the point diameter, live strokes at the radius.
        subdivisions: Interior points per cubic segment (N >= 0).
        points_per_group: Points per direction vector on the reference
            side (g >= 1).
        tolerance_degrees: Accepted deviation either side of the reference
            angle, in degrees (> 0).
        wrap_angles: Compare angles across the +/-180 degree seam.
        chained_relative: Treat each relative control-point offset as
            relative to the previous control point instead of the segment
            start.
    """
    point_radius: float = DEFAULT_POINT_RADIUS
    subdivisions: int = DEFAULT_SUBDIVISIONS
    points_per_group: int = DEFAULT_POINTS_PER_GROUP
    tolerance_degrees: float = DEFAULT_TOLERANCE_DEGREES
    wrap_angles: bool = False
    chained_relative: bool = False

    def __post_init__(self):
        if not self.point_radius > 0:
            raise ConfigError(f"point_radius must be positive, got {self.point_radius!r}")
        if not _is_int(self.subdivisions) or self.subdivisions < 0:
            raise ConfigError(f"subdivisions must be an integer >= 0, got {self.subdivisions!r}")
        if not _is_int(self.points_per_group) or self.points_per_group < 1:
            raise ConfigError(f"points_per_group must be an integer >= 1, got {self.points_per_group!r}")
        if not self.tolerance_degrees > 0:
            raise ConfigError(f"tolerance_degrees must be positive, got {self.tolerance_degrees!r}")

    @property
    def reference_spacing(self) -> float:
        """Spacing unit for reference polylines (one point diameter)."""
        return self.point_radius * 2

    @property
    def live_spacing(self) -> float:
        """Spacing unit used while densifying live input."""
        return self.point_radius

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> TrainerConfig:
        """Build a config from a plain mapping such as a parsed JSON file.

        Unknown keys are logged and ignored. A missing point radius falls
        back to the default with a warning.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ', '.join(unknown))

        kwargs = {k: v for k, v in values.items() if k in known}
        if 'point_radius' not in kwargs:
            logger.warning("Point radius not configured, using default %.2f", DEFAULT_POINT_RADIUS)
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise ConfigError(str(e)) from e


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Configure application-wide logging.

    Call once at program startup. Library modules only create loggers.

    Args:
        level: Log level string ('DEBUG', 'INFO', 'WARNING', 'ERROR').
        log_file: Optional path to a log file. If None, logs to stderr only.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # werkzeug logs one INFO line per HTTP request
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

    logger.info("Logging configured: level=%s, file=%s", level, log_file or 'stderr')
