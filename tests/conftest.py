import base64
import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from photostrip.main import app
from photostrip.api.dependencies import get_session_service
from photostrip.services.session import SessionService


def png_bytes(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_png():
    """Factory for solid-color PNG files held in memory."""
    def _make(width, height, color=(255, 0, 0)):
        return png_bytes(Image.new("RGB", (width, height), color))
    return _make


@pytest.fixture
def make_b64(make_png):
    def _make(width, height, color=(255, 0, 0)):
        return base64.b64encode(make_png(width, height, color)).decode("utf-8")
    return _make


@pytest.fixture
def session_service():
    return SessionService()


@pytest.fixture
def client(session_service):
    app.dependency_overrides[get_session_service] = lambda: session_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
