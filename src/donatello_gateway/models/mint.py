"""NFT mint relay models."""

from typing import Optional
from pydantic import BaseModel, Field

DEFAULT_ARTWORK_TITLE = "Donatello AI Artwork"
DEFAULT_ARTWORK_DESCRIPTION = "AI-generated artwork converted to SVG"


class MintRequest(BaseModel):
    """Mint request forwarded to the backend."""

    svg_url: Optional[str] = Field(None, alias="svgUrl")
    user_address: Optional[str] = Field(None, alias="userAddress")
    artwork_title: Optional[str] = Field(None, alias="artworkTitle")
    artwork_description: Optional[str] = Field(None, alias="artworkDescription")

    class Config:
        populate_by_name = True

    def to_backend_payload(self) -> dict:
        return {
            "svgUrl": self.svg_url,
            "userAddress": self.user_address,
            "title": self.artwork_title or DEFAULT_ARTWORK_TITLE,
            "description": self.artwork_description or DEFAULT_ARTWORK_DESCRIPTION,
        }


class MintResponse(BaseModel):
    """Outcome of a mint relay."""

    success: bool
    transaction_hash: Optional[str] = Field(None, alias="transactionHash")
    token_id: Optional[str] = Field(None, alias="tokenId")
    contract_address: Optional[str] = Field(None, alias="contractAddress")
    opensea_url: Optional[str] = Field(None, alias="openseaUrl")
    message: Optional[str] = None
    error: Optional[str] = None

    class Config:
        populate_by_name = True
