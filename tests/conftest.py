import pytest

from main import create_app


@pytest.fixture
def app():
    """Return a Flask app configured for testing."""
    app = create_app()
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()
