"""Flask routes for the reference library and practice sessions.

Routes:
    GET    /api/characters
    GET    /api/characters/<index>
    GET    /api/characters/<index>/strokes/<stroke>
    GET    /api/config
    POST   /api/sessions
    GET    /api/sessions/<sid>
    PUT    /api/sessions/<sid>/character
    POST   /api/sessions/<sid>/strokes
    DELETE /api/sessions/<sid>
"""

from flask import jsonify, request

from ..domain.geometry import polyline_to_list
from ..errors import UnknownCharacter
from .app import (
    app, get_character_or_error, get_int_field, get_json_object,
    get_library, get_points_field, get_registry, get_stroke_or_error, not_found,
    session_not_found,
)
from .sessions import UnknownSession


@app.route('/api/characters')
def api_list_characters():
    return jsonify(characters=get_library().summary())


@app.route('/api/characters/<int:index>')
def api_get_character(index):
    character, err = get_character_or_error(index)
    if err:
        return err
    return jsonify(index=index, **character.to_dict())


@app.route('/api/characters/<int:index>/strokes/<int:stroke>')
def api_get_stroke(index, stroke):
    found, err = get_stroke_or_error(index, stroke)
    if err:
        return err
    points, directions = found
    return jsonify(
        character=index,
        stroke=stroke,
        points=polyline_to_list(points),
        directions=polyline_to_list(directions),
    )


@app.route('/api/config')
def api_config():
    return jsonify(get_library().config.to_dict())


@app.route('/api/sessions', methods=['POST'])
def api_create_session():
    body, err = get_json_object(request.get_json(silent=True))
    if err:
        return err
    character, err = get_int_field(body, 'character', 0)
    if err:
        return err

    registry = get_registry()
    try:
        sid = registry.create(character)
    except UnknownCharacter as e:
        return not_found(str(e))
    with registry.use(sid) as session:
        state = session.state()
    return jsonify(session=sid, **state), 201


@app.route('/api/sessions/<sid>')
def api_get_session(sid):
    try:
        with get_registry().use(sid) as session:
            state = session.state()
    except UnknownSession:
        return session_not_found(sid)
    return jsonify(session=sid, **state)


@app.route('/api/sessions/<sid>/character', methods=['PUT'])
def api_set_character(sid):
    body, err = get_json_object(request.get_json(silent=True))
    if err:
        return err
    index, err = get_int_field(body, 'index')
    if err:
        return err

    try:
        with get_registry().use(sid) as session:
            session.set_character(index)
            state = session.state()
    except UnknownSession:
        return session_not_found(sid)
    except UnknownCharacter as e:
        return not_found(str(e))
    return jsonify(session=sid, **state)


@app.route('/api/sessions/<sid>/strokes', methods=['POST'])
def api_submit_stroke(sid):
    body, err = get_json_object(request.get_json(silent=True))
    if err:
        return err
    points, err = get_points_field(body)
    if err:
        return err

    try:
        with get_registry().use(sid) as session:
            outcome = session.submit_stroke(points)
    except UnknownSession:
        return session_not_found(sid)
    return jsonify(session=sid, **outcome.to_dict())


@app.route('/api/sessions/<sid>', methods=['DELETE'])
def api_delete_session(sid):
    try:
        get_registry().remove(sid)
    except UnknownSession:
        return session_not_found(sid)
    return '', 204
