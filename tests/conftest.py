import os
import sys
import pytest
from fastapi.testclient import TestClient

# Add the project root directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from imgurl.main import app
from imgurl.models.request import UrlRequestContext

URL_ENDPOINT = "https://ik.imagekit.io/demo/"


@pytest.fixture
def client():
    """Create a test client for the app."""
    return TestClient(app)


@pytest.fixture
def request_context():
    """Request context with test credentials."""
    return UrlRequestContext(
        public_key="public_key",
        private_key="private_key",
        url_endpoint=URL_ENDPOINT,
        transformation_position="path",
    )
