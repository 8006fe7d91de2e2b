"""
Fixtures for HTTP API tests.

The app runs its real lifespan with an AppContext built from fake
providers; no database is configured, so the in-memory store is active.
"""

import pytest
from fastapi.testclient import TestClient

from backend.api.deps import build_app_context
from backend.api.main import create_app


@pytest.fixture
def app_context(test_settings, fake_embeddings, fake_chat_model):
    return build_app_context(
        test_settings,
        embeddings=fake_embeddings,
        chat_model=fake_chat_model,
    )


@pytest.fixture
def client(test_settings, app_context):
    """TestClient with lifespan (startup selects the in-memory fallback)."""
    app = create_app(test_settings, context_factory=lambda settings: app_context)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def upload(client):
    """Upload helper posting one file under the "document" field."""

    def do_upload(content: bytes, name: str = "notes.txt", media_type: str = "text/plain"):
        response = client.post(
            "/api/v1/documents/upload",
            files={"document": (name, content, media_type)},
        )
        return response

    return do_upload
