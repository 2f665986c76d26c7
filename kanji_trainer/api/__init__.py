"""HTTP surface for the kanji trainer.

    app: The Flask application; routes are in kanji_trainer.api.routes.
    create_app: Attach a reference library to the app and return it.
    SessionRegistry: Thread-safe store of PracticeSession objects.
"""

from .app import app, create_app
from .sessions import SessionRegistry, UnknownSession

__all__ = ['app', 'create_app', 'SessionRegistry', 'UnknownSession']
