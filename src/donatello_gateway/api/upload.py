"""Image upload API endpoint."""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from ..clients.backend_client import BackendClient
from ..config import Settings
from ..errors import GatewayError
from ..models.upload import ImageFile
from ..services.validation import validate_image_file
from .dependencies import get_backend_client, get_settings

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/upload-image")
async def upload_image(
    image: Optional[UploadFile] = File(None),
    backend_client: BackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
):
    """Validate an image and forward it to the backend for analysis and storage."""
    if image is None:
        return JSONResponse(status_code=400, content={"error": "No image file provided"})

    image_file = ImageFile(
        filename=image.filename or "image",
        content_type=image.content_type or "",
        # at most one byte past the ceiling
        data=await image.read(settings.max_image_size_bytes + 1),
    )

    validation = validate_image_file(image_file, settings.max_image_size_bytes)
    if not validation.is_valid:
        return JSONResponse(status_code=400, content={"error": validation.error})

    logger.info(f"📤 Uploading to backend: {settings.backend_base}")
    try:
        result = await backend_client.upload_image(image_file)
    except GatewayError as e:
        logger.error(f"Error processing image upload: {e.message}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": e.message,
                "message": f"Make sure your backend is running on {settings.backend_base}",
            },
        )

    return {
        **result.model_dump(),
        "success": True,
        "message": "Image successfully analyzed and stored on Walrus",
        "walrus_direct_url": backend_client.get_direct_walrus_url(result.image_blob_id),
    }
