"""Chat relay behind the ``/api/chat`` route."""

import logging
from typing import Any, Dict, Optional

from ..clients.backend_client import BackendClient
from ..errors import GatewayError
from ..models.chat import ChatRelayRequest, ChatRelayResponse
from ..models.upload import ImageMetadata, UploadResult
from .prompts import (
    GREETING_REPLY,
    color_names,
    build_stored_image_prompt,
    keyword_fallback,
    stored_image_fallback,
)

logger = logging.getLogger(__name__)


def upload_from_loose_fields(
    image_blob_id: str,
    image_url: Optional[str],
    metadata: Optional[Dict[str, Any]],
) -> UploadResult:
    """Rebuild an UploadResult from the loose fields a UI sends back."""
    metadata = dict(metadata or {})
    colors = metadata.get("dominant_colors")
    metadata["dominant_colors"] = color_names(colors) if colors else None
    image_metadata = (
        ImageMetadata.model_validate(metadata)
        if "file_info" in metadata
        else ImageMetadata(dominant_colors=metadata["dominant_colors"])
    )
    return UploadResult(
        success=True,
        image_url=image_url or "",
        image_blob_id=image_blob_id,
        metadata_blob_id=metadata.get("metadata_blob_id") or "",
        image_object_id=metadata.get("image_object_id") or "",
        metadata_object_id=metadata.get("metadata_object_id") or "",
        metadata=image_metadata,
    )


class ChatRelayService:
    """Answers a chat turn, falling back to canned text when the AI is down."""

    def __init__(self, backend_client: BackendClient):
        self.backend_client = backend_client

    async def relay(self, request: ChatRelayRequest) -> ChatRelayResponse:
        walrus_url = None
        direct_url = None

        if request.image_file and request.image_blob_id:
            blob_id = request.image_blob_id
            walrus_url = request.image_url or self.backend_client.get_image_url(blob_id)
            direct_url = self.backend_client.get_direct_walrus_url(blob_id)
            logger.info(f"🐋 Chat about stored image {blob_id} ({direct_url})")

            try:
                upload = upload_from_loose_fields(blob_id, request.image_url, request.metadata)
                prompt = build_stored_image_prompt(
                    request.message, blob_id, walrus_url, direct_url, request.metadata
                )
                reply = await self.backend_client.send_chat_message(prompt, upload)
                response_text = reply.response
            except ValueError as e:
                logger.error(f"Unusable image metadata for {blob_id}: {e}")
                response_text = stored_image_fallback(
                    blob_id, walrus_url, direct_url, request.metadata
                )
            except GatewayError as e:
                logger.error(f"Gemini API error: {e.message}")
                response_text = stored_image_fallback(
                    blob_id, walrus_url, direct_url, request.metadata
                )
        elif request.message and request.message.strip():
            try:
                reply = await self.backend_client.send_chat_message(request.message)
                response_text = reply.response
            except GatewayError as e:
                logger.error(f"Gemini API error: {e.message}")
                response_text = keyword_fallback(request.message)
        else:
            response_text = GREETING_REPLY

        try:
            await self.backend_client.check_health()
            logger.info("Backend is healthy")
        except GatewayError as e:
            logger.warning(f"Backend health check failed: {e.message}")

        return ChatRelayResponse(
            success=True,
            response=response_text,
            can_mint_nft=bool(request.image_blob_id),
            image_blob_id=request.image_blob_id or None,
            walrus_url=walrus_url,
            walrus_direct_url=(
                self.backend_client.get_direct_walrus_url(request.image_blob_id)
                if request.image_blob_id
                else None
            ),
        )
