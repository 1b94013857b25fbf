"""
Pytest fixtures for store tests.
"""

import os
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from lector.config import state
from lector.database import DBArticle, open_store
from lector.server import app

FEED_URL = "https://a.example/rss"


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        yield Path(f.name)
    # Cleanup
    if os.path.exists(f.name):
        os.unlink(f.name)


@pytest.fixture
def test_store(temp_db_path):
    """Create a migrated store on a fresh file."""
    return open_store(temp_db_path)


@pytest.fixture
def sample_article():
    """Article belonging to FEED_URL."""
    return DBArticle(
        id="art-1",
        feed_url=FEED_URL,
        feed_name="Example Feed",
        title="Title",
        link=None,
        published=None,
        published_ts=2000,
        content="body",
        author="auth",
        is_read=False,
        is_starred=False,
        fetched_at=3000,
    )


@pytest.fixture
def client(temp_db_path):
    """Create a test client with an isolated store."""
    original_store = state.store
    state.store = open_store(temp_db_path)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    state.store = original_store


@pytest.fixture
def client_with_data(temp_db_path, sample_article):
    """Test client with one feed and two articles pre-populated."""
    original_store = state.store
    test_store = open_store(temp_db_path)
    state.store = test_store

    test_store.upsert_feed(FEED_URL, "Example Feed", 1000)
    test_store.upsert_article(sample_article)
    test_store.upsert_article(DBArticle(
        id="art-2",
        feed_url=FEED_URL,
        feed_name="Example Feed",
        title="Newer",
        published_ts=5000,
        fetched_at=3000,
    ))
    test_store.set_article_flags("art-1", is_read=True)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client, {
            "feed_url": FEED_URL,
            "article_ids": ["art-1", "art-2"],
        }

    state.store = original_store
