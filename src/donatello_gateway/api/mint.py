"""NFT mint relay API endpoint."""

from typing import Dict, Any
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..clients.backend_client import BackendClient
from ..models.mint import MintRequest
from ..services.mint_service import MintService
from .dependencies import get_backend_client

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/mint-nft")
async def mint_nft(
    request: Dict[str, Any],
    backend_client: BackendClient = Depends(get_backend_client),
):
    """
    Relay a mint request to the backend.

    Request body:
    {
        "svgUrl": "...",
        "userAddress": "0x...",
        "artworkTitle": "...",        (optional)
        "artworkDescription": "..."   (optional)
    }
    """
    mint_request = MintRequest.model_validate(request)
    if not mint_request.svg_url or not mint_request.user_address:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Missing required parameters"},
        )

    result = await MintService(backend_client).relay(mint_request)
    if not result.success:
        return JSONResponse(
            status_code=500,
            content=result.model_dump(by_alias=True, exclude_none=True),
        )

    return result.model_dump(by_alias=True, exclude_none=True)
