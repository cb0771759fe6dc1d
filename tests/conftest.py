"""
Pytest Configuration and Fixtures
==================================
Temporary JSON stores, a fake content host and a configured Flask client.
"""

import base64

import pytest

from alertbridge.app import create_app
from alertbridge.config import Settings
from alertbridge.errors import RecordCreationError
from alertbridge.services.content_host import CATEGORY_NOT_FOUND, LocalContentHost
from alertbridge.services.options_store import Options, OptionsStore


# =============================================================================
# FAKES
# =============================================================================

class FakeHost:
    """In-memory content host recording every created record."""

    def __init__(self, categories=None, error=None):
        self.categories = {"alertsu": 11, "alert": 12} if categories is None else categories
        self.error = error
        self.records = []
        self.lookups = []

    def resolve_category(self, name):
        self.lookups.append(name)
        return self.categories.get(name, CATEGORY_NOT_FOUND)

    def create_record(self, record):
        if self.error is not None:
            raise RecordCreationError(self.error)
        self.records.append(record)
        return 100 + len(self.records)

    def list_authors(self, roles=("administrator", "editor")):
        return [{"id": 1, "display_name": "admin"}, {"id": 7, "display_name": "Comms Editor"}]


# =============================================================================
# STORE FIXTURES
# =============================================================================

@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DATA_DIR=str(tmp_path),
        OPTIONS_FILE=str(tmp_path / "options.json"),
        SITE_FILE=str(tmp_path / "site.json"),
        CONTENT_HOST="local",
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD="letmein",
        STRICT_JSON=False,
    )


@pytest.fixture
def options_store(test_settings):
    store = OptionsStore(test_settings.OPTIONS_FILE)
    store.save(Options(username="everbridge", password="s3cret", authorid=7))
    return store


@pytest.fixture
def fake_host():
    return FakeHost()


@pytest.fixture
def local_host(tmp_path):
    return LocalContentHost(str(tmp_path / "site.json"))


# =============================================================================
# FLASK FIXTURES
# =============================================================================

@pytest.fixture
def app(test_settings, options_store, fake_host):
    app = create_app(test_settings, options_store=options_store, host=fake_host)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def basic_auth():
    """Build an Authorization header for a username/password pair."""
    def _basic_auth(username, password):
        token = base64.b64encode(f"{username}:{password}".encode()).decode()
        return {"Authorization": f"Basic {token}"}
    return _basic_auth


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: Tests that drive the Flask app end to end")
