"""HTTP routes proxying the backend."""

from fastapi import APIRouter

from .chat import router as chat_router
from .health import router as health_router
from .mint import router as mint_router
from .upload import router as upload_router

router = APIRouter()
router.include_router(chat_router)
router.include_router(health_router)
router.include_router(upload_router)
router.include_router(mint_router)

__all__ = ["router"]
