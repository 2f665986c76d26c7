"""Integration tests for the Flask API.

Uses Flask's test client against an app built from the sample document.
"""

import threading
import unittest

import pytest

from kanji_trainer import ReferenceLibrary
from kanji_trainer.api import SessionRegistry, UnknownSession, create_app
from kanji_trainer.domain.geometry import Point

from conftest import SAMPLE_DOCUMENT

HORIZONTAL = [[0, 0], [30, 0]]
VERTICAL = [[0, 0], [0, 30]]


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        """Create Flask test client."""
        self.library = ReferenceLibrary.from_document(SAMPLE_DOCUMENT)
        self.app = create_app(self.library)
        self.app.config['TESTING'] = True
        self.client = self.app.test_client()

    def new_session(self, **body):
        response = self.client.post('/api/sessions', json=body)
        self.assertEqual(response.status_code, 201)
        return response.get_json()['session']


class TestCharacterRoutes(ApiTestCase):
    """Tests for the read-only character and config routes."""

    def test_list_characters(self):
        response = self.client.get('/api/characters')
        self.assertEqual(response.status_code, 200)
        characters = response.get_json()['characters']
        self.assertEqual([c['name'] for c in characters], ['ichi one', 'ni two'])
        self.assertEqual(characters[1]['stroke_count'], 2)

    def test_get_character(self):
        data = self.client.get('/api/characters/1').get_json()
        self.assertEqual(data['index'], 1)
        self.assertEqual(data['audio_key'], 'ni')
        self.assertEqual([s['stroke'] for s in data['strokes']], [1, 2])

    def test_get_stroke(self):
        data = self.client.get('/api/characters/0/strokes/1').get_json()
        self.assertEqual(len(data['points']), 16)
        self.assertEqual(len(data['directions']), 4)
        self.assertEqual(data['directions'][0], [8.0, 0.0])

    def test_unknown_character(self):
        response = self.client.get('/api/characters/5')
        self.assertEqual(response.status_code, 404)
        self.assertIn('error', response.get_json())

    def test_unknown_stroke(self):
        response = self.client.get('/api/characters/0/strokes/3')
        self.assertEqual(response.status_code, 404)

    def test_config(self):
        data = self.client.get('/api/config').get_json()
        self.assertEqual(data['points_per_group'], 5)
        self.assertEqual(data['tolerance_degrees'], 25.0)


class TestSessionRoutes(ApiTestCase):
    """Tests for practice session routes."""

    def test_create_session(self):
        response = self.client.post('/api/sessions', json={'character': 1})
        data = response.get_json()
        self.assertEqual(response.status_code, 201)
        self.assertEqual(data['character'], 1)
        self.assertEqual(data['stroke'], 1)
        self.assertEqual(data['stroke_count'], 2)

    def test_create_session_without_body(self):
        response = self.client.post('/api/sessions')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json()['character'], 0)

    def test_create_session_bad_character(self):
        response = self.client.post('/api/sessions', json={'character': 9})
        self.assertEqual(response.status_code, 404)

    def test_submit_completes_character(self):
        sid = self.new_session()
        response = self.client.post(f'/api/sessions/{sid}/strokes', json={'points': HORIZONTAL})
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertTrue(data['character_complete'])
        self.assertEqual(data['accuracy'], 1.0)
        self.assertEqual(data['valid'], data['total'])

    def test_two_stroke_flow(self):
        sid = self.new_session(character=1)
        first = self.client.post(f'/api/sessions/{sid}/strokes',
                                 json={'points': HORIZONTAL}).get_json()
        self.assertFalse(first['character_complete'])
        self.assertIsNone(first['accuracy'])

        state = self.client.get(f'/api/sessions/{sid}').get_json()
        self.assertEqual(state['stroke'], 2)
        self.assertEqual(state['tally']['valid'], first['valid'])

        second = self.client.post(f'/api/sessions/{sid}/strokes',
                                  json={'points': VERTICAL}).get_json()
        self.assertTrue(second['character_complete'])
        self.assertAlmostEqual(second['accuracy'], 0.5)

    def test_set_character(self):
        sid = self.new_session()
        response = self.client.put(f'/api/sessions/{sid}/character', json={'index': 1})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['name'], 'ni two')

    def test_set_character_needs_integer(self):
        sid = self.new_session()
        response = self.client.put(f'/api/sessions/{sid}/character', json={'index': 'one'})
        self.assertEqual(response.status_code, 400)

    def test_bad_points(self):
        sid = self.new_session()
        for body in ({}, {'points': 'nope'}, {'points': [[1, 2, 3]]}, {'points': [['a', 1]]}):
            with self.subTest(body=body):
                response = self.client.post(f'/api/sessions/{sid}/strokes', json=body)
                self.assertEqual(response.status_code, 400)
                self.assertIn('error', response.get_json())

    def test_non_finite_points_rejected(self):
        """Infinite, NaN and oversized coordinates are a bad request, not a crash."""
        sid = self.new_session()
        bodies = (
            '{"points": [[0, 0], [1e400, 0]]}',
            '{"points": [[0, 0], [NaN, 0]]}',
            '{"points": [[0, 0], [-Infinity, 0]]}',
            '{"points": [[0, 0], [1' + '0' * 400 + ', 0]]}',
        )
        for body in bodies:
            with self.subTest(body=body[:40]):
                response = self.client.post(f'/api/sessions/{sid}/strokes', data=body,
                                            content_type='application/json')
                self.assertEqual(response.status_code, 400)
                self.assertIn('error', response.get_json())
        state = self.client.get(f'/api/sessions/{sid}').get_json()
        self.assertEqual(state['stroke'], 1)

    def test_unknown_session(self):
        response = self.client.get('/api/sessions/missing')
        self.assertEqual(response.status_code, 404)
        self.assertIn('Session not found', response.get_json()['error'])

    def test_delete_session(self):
        sid = self.new_session()
        self.assertEqual(self.client.delete(f'/api/sessions/{sid}').status_code, 204)
        self.assertEqual(self.client.get(f'/api/sessions/{sid}').status_code, 404)
        self.assertEqual(self.client.delete(f'/api/sessions/{sid}').status_code, 404)

    def test_sessions_are_independent(self):
        a = self.new_session(character=1)
        b = self.new_session(character=1)
        self.client.post(f'/api/sessions/{a}/strokes', json={'points': HORIZONTAL})
        self.assertEqual(self.client.get(f'/api/sessions/{a}').get_json()['stroke'], 2)
        self.assertEqual(self.client.get(f'/api/sessions/{b}').get_json()['stroke'], 1)


class TestSessionRegistry(unittest.TestCase):
    """Tests for SessionRegistry."""

    def setUp(self):
        self.registry = SessionRegistry(ReferenceLibrary.from_document(SAMPLE_DOCUMENT))

    def test_create_and_use(self):
        sid = self.registry.create(1)
        with self.registry.use(sid) as session:
            self.assertEqual(session.current_character, 1)
        self.assertEqual(len(self.registry), 1)

    def test_unknown_id(self):
        with self.assertRaises(UnknownSession):
            with self.registry.use('nope'):
                pass
        with self.assertRaises(UnknownSession):
            self.registry.remove('nope')

    def test_count_during_concurrent_creates(self):
        """len() is taken under the registry lock while other threads add sessions."""
        counts = []

        def create_and_count():
            for _ in range(20):
                self.registry.create(0)
                counts.append(len(self.registry))

        threads = [threading.Thread(target=create_and_count) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(len(self.registry), 80)
        self.assertEqual(max(counts), 80)

    def test_concurrent_submissions_are_serialised(self):
        """Strokes from several threads each land exactly once."""
        sid = self.registry.create(1)

        def submit():
            with self.registry.use(sid) as session:
                session.submit_stroke([Point(0, 0), Point(30, 0)])

        threads = [threading.Thread(target=submit) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        with self.registry.use(sid) as session:
            # three strokes on a two-stroke character: one completion, then stroke 1 drawn
            self.assertEqual(session.current_stroke, 1)
            self.assertEqual(session.tally.total,
                             len(self.registry.library.reference_directions(1, 1)))


@pytest.mark.integration
def test_index_listing(flask_client):
    response = flask_client.get('/api/characters')
    assert response.status_code == 200
    assert len(response.get_json()['characters']) == 2


if __name__ == '__main__':
    unittest.main()
