"""Shared pytest fixtures for the kanji_trainer test suite.

Fixtures:
    sample_document: Two-character document with three strokes in total.
    one_stroke_document: Single character, single relative cubic.
    default_config: TrainerConfig with default values.
    library: ReferenceLibrary built from sample_document.
    flask_client: Flask test client serving the sample library.

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sys
from pathlib import Path

import pytest

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from kanji_trainer import ReferenceLibrary, TrainerConfig  # noqa: E402

# "ichi" is a straight horizontal stroke, "ni" two horizontal strokes; the
# second "ni" stroke has uneven control points so its tessellation is not
# evenly spaced.
SAMPLE_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<stages>
  <kanji>
    <g name="ichi one">
      <path d="M10,50c10,0,20,0,30,0"/>
    </g>
    <g name="ni two">
      <path d="M20,30C30,30,40,30,50,30"/>
      <path d="M10,70c10,0,30,0,40,0"/>
    </g>
  </kanji>
</stages>
"""

ONE_STROKE_DOCUMENT = '<kanji><g name="one"><path d="M0,0c10,0,20,0,30,0"/></g></kanji>'


@pytest.fixture
def sample_document():
    """Return the two-character sample document text."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def one_stroke_document():
    """Return the smallest useful document: one character, one stroke."""
    return ONE_STROKE_DOCUMENT


@pytest.fixture
def default_config():
    """Return a TrainerConfig with default values.

    Returns:
        TrainerConfig: radius 1.0, 2 subdivisions, 5 points per group,
            25 degree tolerance.
    """
    return TrainerConfig()


@pytest.fixture
def library(sample_document, default_config):
    """Return a ReferenceLibrary built from the sample document."""
    return ReferenceLibrary.from_document(sample_document, default_config)


@pytest.fixture
def flask_client(library):
    """Create a Flask test client for the API.

    Yields:
        FlaskClient: Test client for making requests.
    """
    from kanji_trainer.api import create_app

    app = create_app(library)
    app.config['TESTING'] = True

    with app.test_client() as client:
        yield client
