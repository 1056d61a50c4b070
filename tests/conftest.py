"""Pytest configuration and shared fixtures."""
import json
from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest

from donatello_gateway.clients import BackendClient, BlobVerifier
from donatello_gateway.config import Settings
from donatello_gateway.models import ImageFile, UploadResult

BACKEND = "http://backend.test:5000"
AGGREGATOR = "https://aggregator.walrus-testnet.walrus.space"

UPLOAD_BODY = {
    "success": True,
    "image_url": f"{BACKEND}/image/blob123",
    "image_blob_id": "blob123",
    "metadata_blob_id": "meta456",
    "image_object_id": "0xobj1",
    "metadata_object_id": "0xobj2",
    "metadata": {
        "file_info": {
            "filename": "art.png",
            "format": "PNG",
            "size": {"width": 640, "height": 480},
            "mode": "RGBA",
            "file_size": 204800,
            "analyzed_at": "2025-06-01T12:00:00",
        },
        "dominant_colors": ["#ff0000", "#00ff00", "#0000ff", "#ffffff"],
    },
}

Reply = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class FakeBackend:
    """Routes requests by (method, url) to canned responses and records them."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Reply] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, url: str, reply: Reply) -> None:
        self.routes[(method, url)] = reply

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.routes.get((request.method, str(request.url)))
        if reply is None:
            return httpx.Response(404)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(request)
        return reply

    def calls(self, method: str, url: str) -> List[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and str(r.url) == url
        ]

    def json_body(self, method: str, url: str) -> Any:
        return json.loads(self.calls(method, url)[-1].content)


@pytest.fixture
def settings():
    """Settings pointing at the fake backend, isolated from any .env file."""
    return Settings(_env_file=None, backend_url=BACKEND, walrus_network="testnet")


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def http_client(fake_backend):
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_backend.handler))


@pytest.fixture
def backend_client(settings, http_client):
    return BackendClient(settings, http_client, BlobVerifier(settings, http_client))


@pytest.fixture
def upload_result():
    return UploadResult.model_validate(UPLOAD_BODY)


@pytest.fixture
def png_image():
    return ImageFile(filename="art.png", content_type="image/png", data=b"\x89PNG" + b"0" * 1024)
