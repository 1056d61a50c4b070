"""HTTP clients for the backend and Walrus aggregator."""

from .backend_client import BackendClient
from .walrus import BlobStatus, BlobVerifier

__all__ = ["BackendClient", "BlobStatus", "BlobVerifier"]
