# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Fixtures shared by all tests:
# - app: a Flask app bound to a fresh SQLite file per test
# - client: the Flask test client for that app
# =============================================================================

import pytest

from blog import create_app
from blog.models import db, Post, Comment


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def app(tmp_path):
    """Application backed by a temporary SQLite database."""
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'blog.db'}",
    })
    yield app
    with app.app_context():
        db.engine.dispose()


@pytest.fixture
def client(app):
    """Test client for issuing requests against the app."""
    return app.test_client()


@pytest.fixture
def row_counts(app):
    """Return a callable giving (posts, comments) row counts."""
    def counts():
        with app.app_context():
            return Post.query.count(), Comment.query.count()
    return counts
