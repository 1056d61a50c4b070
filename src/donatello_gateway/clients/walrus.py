"""Walrus blob URLs and existence checks."""

import logging
import re
from enum import Enum
from typing import Optional

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)

WALRUS_ENDPOINTS = {
    "testnet": {
        "publisher": "https://publisher.walrus-testnet.walrus.space",
        "aggregator": "https://aggregator.walrus-testnet.walrus.space",
    },
    "mainnet": {
        "publisher": "https://publisher.walrus.space",
        "aggregator": "https://aggregator.walrus.space",
    },
}

_BLOB_ID_IN_URL = re.compile(r"/v1/blobs/([a-zA-Z0-9_-]+)")
_BLOB_URL = re.compile(r"/v1/blobs/[a-zA-Z0-9_-]+$")


def get_walrus_blob_url(blob_id: str, network: str = "testnet") -> str:
    """Aggregator URL for reading a blob."""
    return f"{WALRUS_ENDPOINTS[network]['aggregator']}/v1/blobs/{blob_id}"


def get_walrus_store_url(network: str = "testnet") -> str:
    """Publisher URL for storing new data."""
    return f"{WALRUS_ENDPOINTS[network]['publisher']}/v1/store"


def extract_blob_id_from_url(url: str) -> Optional[str]:
    match = _BLOB_ID_IN_URL.search(url)
    return match.group(1) if match else None


def is_walrus_blob_url(url: str) -> bool:
    return bool(_BLOB_URL.search(url))


def format_blob_id(blob_id: str, max_length: int = 16) -> str:
    """Truncate a blob ID for display, keeping both ends."""
    if len(blob_id) <= max_length:
        return blob_id
    start = (max_length - 3) // 2
    end = -(-(max_length - 3) // 2)
    return f"{blob_id[:start]}...{blob_id[-end:]}"


class BlobStatus(str, Enum):
    """Result of probing the aggregator for a blob."""

    PRESENT = "present"
    ABSENT = "absent"
    UNKNOWN = "unknown"


class BlobVerifier:
    """Checks that a blob is actually retrievable from the Walrus aggregator."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self.settings = settings
        self.http_client = http_client

    def blob_url(self, blob_id: str) -> str:
        return get_walrus_blob_url(blob_id, self.settings.walrus_network)

    async def probe(self, blob_id: str) -> BlobStatus:
        """Issue a HEAD request and tell apart "not stored" from "could not check"."""
        url = self.blob_url(blob_id)
        try:
            response = await self.http_client.head(
                url, headers={"Cache-Control": "no-cache"}
            )
        except httpx.HTTPError as e:
            logger.warning(f"Could not verify blob {blob_id}: {e}")
            return BlobStatus.UNKNOWN

        if response.is_success:
            return BlobStatus.PRESENT
        logger.info(f"Blob {blob_id} probe returned status {response.status_code}")
        return BlobStatus.ABSENT

    async def verify(self, blob_id: str) -> bool:
        """Return True only when the aggregator confirms the blob exists.

        Transport failures count as "not found".
        """
        return await self.probe(blob_id) is BlobStatus.PRESENT
