"""NFT metadata generation from Walrus upload results."""

import base64
import json
from datetime import date, datetime
from typing import List, Optional

from ..clients.walrus import get_walrus_blob_url
from ..models.nft import (
    NFTAttribute,
    NFTMetadata,
    OpenSeaNFTMetadata,
    TechnicalMetadata,
    WalrusStorage,
)
from ..models.upload import UploadResult

EXTERNAL_URL_BASE = "https://donatello.ai/nft"


def _created_date(analyzed_at: str) -> str:
    try:
        return datetime.fromisoformat(analyzed_at.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return analyzed_at


def _file_attributes(upload: UploadResult, dimension_prefix: str = "") -> List[NFTAttribute]:
    file_info = upload.metadata.file_info
    return [
        NFTAttribute(trait_type="Storage Network", value="Walrus"),
        NFTAttribute(trait_type="File Format", value=file_info.format),
        NFTAttribute(trait_type=f"{dimension_prefix}Width", value=file_info.size.width, display_type="number"),
        NFTAttribute(trait_type=f"{dimension_prefix}Height", value=file_info.size.height, display_type="number"),
        NFTAttribute(
            trait_type="File Size (KB)",
            value=round(file_info.file_size / 1024),
            display_type="number",
        ),
    ]


def _color_attribute(upload: UploadResult) -> List[NFTAttribute]:
    colors = upload.metadata.dominant_colors
    if not colors:
        return []
    return [NFTAttribute(trait_type="Dominant Colors", value=", ".join(colors[:3]))]


def generate_nft_metadata(
    upload: UploadResult,
    name: str,
    description: str,
    backend_url: str,
    additional_attributes: Optional[List[NFTAttribute]] = None,
    network: str = "testnet",
) -> NFTMetadata:
    """Full metadata document including Walrus storage and analysis details."""
    file_info = upload.metadata.file_info
    attributes = _file_attributes(upload, dimension_prefix="Image ")
    attributes.append(
        NFTAttribute(trait_type="Created", value=_created_date(file_info.analyzed_at))
    )
    attributes.extend(_color_attribute(upload))

    return NFTMetadata(
        name=name,
        description=description,
        image=get_walrus_blob_url(upload.image_blob_id, network),
        external_url=f"{backend_url.rstrip('/')}/image/{upload.image_blob_id}",
        attributes=attributes + list(additional_attributes or []),
        walrus_storage=WalrusStorage(
            image_blob_id=upload.image_blob_id,
            metadata_blob_id=upload.metadata_blob_id,
            image_object_id=upload.image_object_id,
            metadata_object_id=upload.metadata_object_id,
            stored_at=file_info.analyzed_at,
        ),
        technical_metadata=TechnicalMetadata(
            file_info=file_info,
            color_analysis=upload.metadata.color_analysis,
            dominant_colors=upload.metadata.dominant_colors,
        ),
    )


def generate_opensea_metadata(
    upload: UploadResult,
    custom_name: Optional[str] = None,
    custom_description: Optional[str] = None,
    network: str = "testnet",
) -> OpenSeaNFTMetadata:
    """OpenSea-compatible ERC721 metadata referenced by tokenURI."""
    file_name = upload.metadata.file_info.filename
    today = date.today().isoformat()

    name = custom_name or f"Donatello AI Art - {file_name}"
    description = custom_description or (
        "AI-generated artwork created with Donatello and permanently stored on Walrus "
        f"decentralized storage. Original file: {file_name}. Created on {today}."
    )

    attributes = [NFTAttribute(trait_type="Platform", value="Donatello AI")]
    attributes.extend(_file_attributes(upload))
    attributes.append(NFTAttribute(trait_type="Created", value=today))
    attributes.extend(_color_attribute(upload))

    return OpenSeaNFTMetadata(
        name=name,
        description=description,
        image=get_walrus_blob_url(upload.image_blob_id, network),
        external_url=f"{EXTERNAL_URL_BASE}/{upload.image_blob_id}",
        attributes=attributes,
    )


def create_metadata_data_url(metadata: OpenSeaNFTMetadata) -> str:
    """Inline the metadata as a data URL when it cannot be stored on Walrus."""
    document = json.dumps(metadata.model_dump(exclude_none=True), indent=2)
    encoded = base64.b64encode(document.encode("utf-8")).decode("ascii")
    return f"data:application/json;base64,{encoded}"
