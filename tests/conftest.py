"""
Test configuration and fixtures for the context server tests.

Every test that touches HTTP gets an app built from its own Settings, backed
by a FileContentStore rooted in a temporary data directory.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from context_server.config import Settings
from context_server.main import create_app
from context_server.services.content_store import FileContentStore, get_content_store
from tests._helpers import SAMPLE_BODY, SAMPLE_POSTS, SAMPLE_PROFILE


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as tempdir:
        yield Path(tempdir)


@pytest.fixture
def data_dir(temp_dir):
    """Populated content directory: profile, post index and one post body."""
    root = temp_dir / "data"
    posts = root / "posts"
    posts.mkdir(parents=True)
    (root / "profile.json").write_text(json.dumps(SAMPLE_PROFILE), encoding="utf-8")
    (posts / "index.json").write_text(json.dumps(SAMPLE_POSTS), encoding="utf-8")
    (posts / "hello-world.md").write_text(SAMPLE_BODY, encoding="utf-8")
    return root


@pytest.fixture
def test_settings(temp_dir, data_dir):
    """Settings pointing at the temporary data directory."""
    return Settings(
        server_name="Test MCP Server",
        server_description="Contexts for tests",
        port=3000,
        data_dir=str(data_dir),
        static_dir=str(temp_dir / "no-static"),
        content_read_timeout=5.0,
    )


@pytest.fixture
def store(data_dir):
    return FileContentStore(data_dir)


@pytest.fixture
def app(test_settings, store):
    """Create FastAPI app instance for testing."""
    test_app = create_app(test_settings)
    test_app.dependency_overrides[get_content_store] = lambda: store
    yield test_app
    test_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Create test client for HTTP requests."""
    with TestClient(app) as test_client:
        yield test_client


# Test markers
def pytest_configure(config):
    """Configure custom test markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as end-to-end HTTP tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
