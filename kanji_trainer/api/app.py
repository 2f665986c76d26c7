"""Flask application core: app instance, registry access and request helpers.

Route handlers live in kanji_trainer.api.routes and register themselves on
the ``app`` defined here when that module is imported. ``create_app``
attaches a reference library to the app and makes sure the routes are
loaded.

Helpers follow one convention: they return ``(value, None)`` on success or
``(None, error_response)`` where ``error_response`` is ready to be returned
from a route.

Example:
    Serve a document::

        from kanji_trainer import ReferenceLibrary
        from kanji_trainer.api import create_app

        app = create_app(ReferenceLibrary.from_file('kanji.xml'))
        app.run(port=5000)
"""

import logging
import math

from flask import Flask, jsonify

from ..domain.geometry import polyline_from_list
from ..errors import UnknownCharacter, UnknownStroke
from ..library import ReferenceLibrary
from .sessions import SessionRegistry

_logger = logging.getLogger(__name__)

EXTENSION_KEY = 'kanji_trainer'

app = Flask(__name__)


def get_registry() -> SessionRegistry:
    """Session registry of the running app."""
    return app.extensions[EXTENSION_KEY]


def get_library() -> ReferenceLibrary:
    """Reference library of the running app."""
    return get_registry().library


def not_found(message: str):
    return jsonify(error=message), 404


def bad_request(message: str):
    return jsonify(error=message), 400


def session_not_found(sid: str):
    return not_found(f"Session not found: {sid}")


def get_character_or_error(index: int):
    """Look up a decoded character by index.

    Returns:
        tuple: (DecodedCharacter, None) if found, or (None, error_response).
    """
    try:
        return get_library().character(index), None
    except UnknownCharacter as e:
        return None, not_found(str(e))


def get_stroke_or_error(index: int, stroke: int):
    """Look up the reference points and directions of a 1-based stroke.

    Returns:
        tuple: ((points, directions), None) if found, or (None, error_response).
    """
    character, err = get_character_or_error(index)
    if err:
        return None, err
    try:
        return (character.stroke_points(stroke), character.stroke_directions(stroke)), None
    except UnknownStroke as e:
        return None, not_found(str(e))


def get_json_object(body):
    """Validate that a request body is a JSON object; a missing body is empty.

    Returns:
        tuple: (dict, None) if valid, or (None, error_response).
    """
    if body is None:
        return {}, None
    if not isinstance(body, dict):
        return None, bad_request("Request body must be a JSON object")
    return body, None


def get_int_field(body: dict, key: str, default=None):
    """Read an integer field from a JSON body.

    Returns:
        tuple: (int, None) if valid, or (None, error_response).
    """
    value = body.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        return None, bad_request(f"'{key}' must be an integer")
    return value, None


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def get_points_field(body: dict):
    """Read ``points`` as a list of [x, y] pairs.

    Returns:
        tuple: (Polyline, None) if valid, or (None, error_response).
    """
    raw = body.get('points')
    if not isinstance(raw, list):
        return None, bad_request("'points' must be a list of [x, y] pairs")
    for item in raw:
        if not isinstance(item, (list, tuple)) or len(item) != 2 or not all(map(_is_number, item)):
            return None, bad_request(f"Invalid point {item!r}, expected [x, y]")
    return polyline_from_list(raw), None


def create_app(library: ReferenceLibrary) -> Flask:
    """Attach ``library`` to the app and return it with all routes loaded.

    Calling this again replaces the library and drops existing sessions.
    """
    from . import routes  # noqa: F401

    app.extensions[EXTENSION_KEY] = SessionRegistry(library)
    _logger.info("App serving %d characters", library.character_count)
    return app
