"""Health API endpoint reporting gateway and backend status."""

from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .. import __version__
from ..clients.backend_client import BackendClient
from ..config import Settings
from ..errors import GatewayError
from .dependencies import get_backend_client, get_settings

logger = logging.getLogger(__name__)
router = APIRouter()

FRONTEND_STATUS = {
    "status": "healthy",
    "service": "Donatello Gateway",
    "version": __version__,
}


@router.get("/health")
async def health(
    backend_client: BackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
):
    """Check the backend and report both sides; 503 when the backend is down."""
    timestamp = datetime.now(timezone.utc).isoformat()

    try:
        backend_health = await backend_client.check_health()
    except GatewayError as e:
        logger.error(f"Health check failed: {e.message}")
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "timestamp": timestamp,
                "frontend": FRONTEND_STATUS,
                "backend": {"status": "unreachable", "error": e.message},
                "message": "Gateway is healthy but backend connection failed",
                "troubleshooting": {
                    "check": f"Ensure the backend is running on {settings.backend_base}",
                    "start_command": "python app.py",
                    "requirements": "Backend server with /health, /analyze/image, and /chat endpoints",
                },
            },
        )

    return {
        "success": True,
        "timestamp": timestamp,
        "frontend": FRONTEND_STATUS,
        "backend": backend_health.model_dump(exclude_none=True),
        "message": "Both gateway and backend are connected and healthy",
        "endpoints": {
            "upload": f"{settings.api_prefix}/upload-image",
            "chat": f"{settings.api_prefix}/chat",
            "health": f"{settings.api_prefix}/health",
        },
    }
