"""FastAPI dependencies resolving the shared clients from application state."""

from fastapi import Request

from ..clients.backend_client import BackendClient
from ..config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_backend_client(request: Request) -> BackendClient:
    return request.app.state.backend_client
