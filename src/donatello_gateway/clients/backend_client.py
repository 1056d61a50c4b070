"""HTTP client for the image analysis / Walrus / Gemini backend."""

import json
import logging
from typing import Any, Optional, Type

import httpx

from ..config import Settings
from ..errors import (
    BackendError,
    ChatError,
    ErrorKind,
    HealthCheckError,
    MintError,
    UploadError,
)
from ..models.chat import ChatHistory, ChatResponse
from ..models.health import HealthStatus
from ..models.mint import MintRequest, MintResponse
from ..models.nft import OpenSeaNFTMetadata
from ..models.upload import ImageFile, UploadResult
from .walrus import BlobVerifier

logger = logging.getLogger(__name__)


def _error_text(response: httpx.Response) -> Optional[str]:
    """Pull the ``error`` field out of a JSON error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


def _decode_json(
    response: httpx.Response, error_cls: Type[BackendError], message: str
) -> Any:
    """Decode a 2xx JSON body, mapping an unreadable body to ``error_cls``."""
    try:
        return response.json()
    except ValueError as e:
        logger.error(f"Unexpected backend response: {response.text}")
        raise error_cls(message, status_code=response.status_code) from e


def _connection_error(
    error_cls: Type[BackendError], e: httpx.HTTPError
) -> BackendError:
    if isinstance(e, httpx.TimeoutException):
        return error_cls(
            "Request timeout. The backend service might be slow or unavailable.",
            kind=ErrorKind.CONNECTIVITY,
        )
    return error_cls(
        f"Failed to connect to backend service: {str(e)}",
        kind=ErrorKind.CONNECTIVITY,
    )


class BackendClient:
    """Async client for every backend endpoint the gateway consumes.

    One instance is built at startup from the shared settings and HTTP
    client. Each call makes exactly one attempt.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient,
        blob_verifier: Optional[BlobVerifier] = None,
    ):
        self.settings = settings
        self.http_client = http_client
        self.blob_verifier = blob_verifier or BlobVerifier(settings, http_client)

    @property
    def base_url(self) -> str:
        return self.settings.backend_base

    def get_image_url(self, image_blob_id: str) -> str:
        """Backend proxy URL serving a stored image."""
        return f"{self.base_url}/image/{image_blob_id}"

    def get_direct_walrus_url(self, image_blob_id: str) -> str:
        return self.blob_verifier.blob_url(image_blob_id)

    async def upload_image(self, image: ImageFile) -> UploadResult:
        """Upload an image for analysis and Walrus storage."""
        url = f"{self.base_url}/analyze/image"
        files = {"image": (image.filename, image.data, image.content_type)}

        logger.info(f"Uploading {image.filename} ({image.size} bytes) to {url}")
        try:
            response = await self.http_client.post(url, files=files)
        except httpx.HTTPError as e:
            logger.error(f"Upload request error: {str(e)}")
            raise _connection_error(UploadError, e) from e

        if not response.is_success:
            server_error = _error_text(response)
            logger.error(
                f"Upload failed with status {response.status_code}: {response.text}"
            )
            if server_error:
                raise UploadError(server_error, status_code=response.status_code)
            raise UploadError(
                f"Upload failed: {response.reason_phrase}",
                kind=ErrorKind.CONNECTIVITY,
                status_code=response.status_code,
            )

        try:
            result = UploadResult.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Unexpected upload response: {response.text}")
            raise UploadError("Invalid upload response from backend") from e

        logger.info("🐋 Walrus Storage Success:")
        logger.info(f"- Image Blob ID: {result.image_blob_id}")
        logger.info(f"- Metadata Blob ID: {result.metadata_blob_id}")
        logger.info(f"- Direct Walrus URL: {self.get_direct_walrus_url(result.image_blob_id)}")
        logger.info(f"- Backend Proxy URL: {result.image_url}")

        if await self.blob_verifier.verify(result.image_blob_id):
            logger.info("Blob verified on Walrus")
        else:
            logger.warning(
                f"Blob {result.image_blob_id} could not be confirmed on Walrus "
                f"({self.settings.walrus_network}); check the backend logs"
            )

        return result

    async def send_chat_message(
        self, message: str, image_context: Optional[UploadResult] = None
    ) -> ChatResponse:
        """Send a prompt to the backend chat endpoint.

        Raises:
            ChatError: on transport failure, non-2xx status or ``success: false``
        """
        url = f"{self.base_url}/chat"
        payload = {
            "message": message,
            "image_context": image_context.to_chat_context() if image_context else None,
        }

        try:
            response = await self.http_client.post(url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Chat request error: {str(e)}")
            raise _connection_error(ChatError, e) from e

        if not response.is_success:
            server_error = _error_text(response)
            logger.error(
                f"Chat failed with status {response.status_code}: {response.text}"
            )
            if server_error:
                raise ChatError(server_error, status_code=response.status_code)
            raise ChatError(
                f"Chat failed: {response.reason_phrase}",
                kind=ErrorKind.CONNECTIVITY,
                status_code=response.status_code,
            )

        try:
            result = ChatResponse.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Unexpected chat response: {response.text}")
            raise ChatError("Invalid chat response from backend") from e

        if not result.success:
            raise ChatError(result.error or "Failed to get AI response")
        return result

    async def check_health(self) -> HealthStatus:
        url = f"{self.base_url}/health"
        try:
            response = await self.http_client.get(url)
        except httpx.HTTPError as e:
            raise _connection_error(HealthCheckError, e) from e

        if not response.is_success:
            raise HealthCheckError(
                f"Health check failed: {response.reason_phrase}",
                status_code=response.status_code,
            )
        try:
            return HealthStatus.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Unexpected health response: {response.text}")
            raise HealthCheckError(
                "Invalid health response from backend", status_code=response.status_code
            ) from e

    async def get_chat_history(self) -> ChatHistory:
        response = await self._get(f"{self.base_url}/chat/history", "chat history")
        body = _decode_json(response, BackendError, "Invalid chat history from backend")
        try:
            return ChatHistory.model_validate(body)
        except ValueError as e:
            raise BackendError("Invalid chat history from backend") from e

    async def get_image_metadata(self, metadata_blob_id: str) -> Any:
        response = await self._get(
            f"{self.base_url}/metadata/{metadata_blob_id}", "metadata"
        )
        return _decode_json(response, BackendError, "Invalid metadata from backend")

    async def upload_nft_metadata(self, metadata: OpenSeaNFTMetadata) -> str:
        """Store NFT metadata JSON on Walrus through the backend.

        Returns:
            The metadata blob ID
        """
        url = f"{self.base_url}/upload/metadata"
        document = json.dumps(metadata.model_dump(exclude_none=True), indent=2)
        files = {"metadata": ("metadata.json", document.encode("utf-8"), "application/json")}

        try:
            response = await self.http_client.post(url, files=files)
        except httpx.HTTPError as e:
            raise _connection_error(BackendError, e) from e

        if not response.is_success:
            logger.error(f"Metadata upload failed with status {response.status_code}")
            raise BackendError(
                "Failed to upload metadata to Walrus", status_code=response.status_code
            )
        body = _decode_json(response, BackendError, "Invalid metadata upload response")
        if not isinstance(body, dict) or not body.get("metadata_blob_id"):
            raise BackendError("Metadata upload response has no metadata_blob_id")
        return str(body["metadata_blob_id"])

    async def mint_nft(self, request: MintRequest) -> MintResponse:
        """Forward a mint request to the mint backend."""
        url = f"{self.settings.mint_url}/api/mint-nft"
        logger.info(f"Forwarding mint request for {request.user_address} to {url}")

        try:
            response = await self.http_client.post(url, json=request.to_backend_payload())
        except httpx.HTTPError as e:
            raise _connection_error(MintError, e) from e

        if not response.is_success:
            logger.error(
                f"Mint failed with status {response.status_code}: {response.text}"
            )
            raise MintError("Failed to mint NFT", status_code=response.status_code)

        data = _decode_json(response, MintError, "Failed to mint NFT")
        try:
            return MintResponse(
                success=True,
                transaction_hash=data.get("transactionHash"),
                token_id=None if data.get("tokenId") is None else str(data["tokenId"]),
                contract_address=data.get("contractAddress"),
                opensea_url=data.get("openseaUrl"),
                message="NFT successfully minted and listed on OpenSea!",
            )
        except (ValueError, AttributeError, TypeError) as e:
            logger.error(f"Unexpected mint response: {response.text}")
            raise MintError("Failed to mint NFT", status_code=response.status_code) from e

    async def _get(self, url: str, what: str) -> httpx.Response:
        try:
            response = await self.http_client.get(url)
        except httpx.HTTPError as e:
            raise _connection_error(BackendError, e) from e

        if not response.is_success:
            raise BackendError(
                f"Failed to fetch {what}: {response.reason_phrase}",
                status_code=response.status_code,
            )
        return response
