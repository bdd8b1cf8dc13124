"""
Pytest fixtures for Tatu News tests.
"""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from tatu_news.config import state
from tatu_news.http_client import HttpClient
from tatu_news.kv_storage import KVStorage, MemoryNamespace
from tatu_news.server import app

from .samples import FakeHttpClient


@pytest.fixture
def temp_kv_dir():
    """Create a temporary KV directory."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def memory_kv():
    """KV service over a fresh in-memory namespace."""
    return KVStorage(MemoryNamespace())


@pytest.fixture
def fake_http():
    return FakeHttpClient()


@pytest.fixture
def web_responses(monkeypatch):
    """
    Route every HttpClient.get in the app to canned responses.

    Tests fill the returned dict with url -> body or exception.
    """
    fake = FakeHttpClient()

    async def fake_get(self, url, **kwargs):
        return await fake.get(url, **kwargs)

    monkeypatch.setattr(HttpClient, "get", fake_get)
    return fake.responses


@pytest.fixture
def client(web_responses):
    """Create a test client with an isolated in-memory KV namespace and no AI provider."""
    # Store original state
    original_kv = state.kv_namespace
    original_provider = state.provider

    state.kv_namespace = MemoryNamespace()
    state.provider = None

    with TestClient(app, raise_server_exceptions=False) as test_client:
        # Lifespan may bind a provider from the environment; keep tests offline
        state.provider = None
        yield test_client

    # Restore original state
    state.kv_namespace = original_kv
    state.provider = original_provider
