"""Mint request relay."""

import logging

from ..clients.backend_client import BackendClient
from ..errors import GatewayError
from ..models.mint import MintRequest, MintResponse

logger = logging.getLogger(__name__)

MINT_FAILED = "Failed to mint NFT"


class MintService:
    """Relays mint requests to the backend for bookkeeping.

    Signing and broadcasting happen in the wallet layer, not here.
    """

    def __init__(self, backend_client: BackendClient):
        self.backend_client = backend_client

    async def relay(self, request: MintRequest) -> MintResponse:
        """Forward a mint request; any failure becomes a generic error response."""
        try:
            result = await self.backend_client.mint_nft(request)
        except GatewayError as e:
            logger.error(f"Error minting NFT: {e.message}")
            return MintResponse(success=False, error=MINT_FAILED)

        logger.info(
            f"Minted token {result.token_id} for {request.user_address}: "
            f"{result.transaction_hash}"
        )
        return result
