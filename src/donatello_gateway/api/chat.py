"""Chat API endpoint."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import Dict, Any
import json
import logging

from ..clients.backend_client import BackendClient
from ..config import Settings
from ..models.chat import ChatRelayRequest
from ..services.chat_relay_service import ChatRelayService
from .dependencies import get_backend_client, get_settings

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/chat")
async def chat(
    request: Dict[str, Any],
    backend_client: BackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
):
    """
    Answer a chat turn, optionally about an image already stored on Walrus.

    Request body:
    {
        "message": "...",
        "imageFile": <truthy when an image was uploaded>,
        "image_blob_id": "...",
        "metadata": {...},
        "image_url": "..."
    }

    Falls back to canned replies when the AI backend is unavailable.
    """
    logger.info(f"Chat request: {json.dumps(request, ensure_ascii=False)}")

    try:
        chat_request = ChatRelayRequest.model_validate(request)
        result = await ChatRelayService(backend_client).relay(chat_request)
    except Exception as e:
        logger.error(f"Error processing chat message: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "response": (
                    "I apologize, but I'm having trouble processing your request right "
                    "now. Please ensure your backend is running on "
                    f"{settings.backend_base} and try again."
                ),
            },
        )

    return result.model_dump(by_alias=True)
