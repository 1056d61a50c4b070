"""NFT metadata models."""

from typing import List, Optional, Union, Any
from pydantic import BaseModel, Field

from .upload import FileInfo


class NFTAttribute(BaseModel):
    """OpenSea trait."""

    trait_type: str
    value: Union[str, int, float]
    display_type: Optional[str] = None


class WalrusStorage(BaseModel):
    """Where the artwork lives on Walrus."""

    image_blob_id: str
    metadata_blob_id: str
    image_object_id: str
    metadata_object_id: str
    stored_at: str


class TechnicalMetadata(BaseModel):
    """Backend analysis carried along with the token."""

    file_info: FileInfo
    color_analysis: Optional[Any] = None
    dominant_colors: Optional[List[str]] = None


class OpenSeaNFTMetadata(BaseModel):
    """ERC721 metadata JSON readable by OpenSea."""

    name: str
    description: str
    image: str
    external_url: Optional[str] = None
    attributes: List[NFTAttribute] = Field(default_factory=list)


class NFTMetadata(OpenSeaNFTMetadata):
    """OpenSea metadata extended with Walrus storage details."""

    animation_url: Optional[str] = None
    walrus_storage: WalrusStorage
    technical_metadata: TechnicalMetadata
