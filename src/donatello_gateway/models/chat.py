"""Chat-related models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from .upload import UploadResult


class ChatRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Individual chat message."""

    role: ChatRole = Field(..., description="Message role: 'user' or 'assistant'")
    content: str = Field(..., description="Message content")
    image_context: Optional[UploadResult] = Field(
        None, alias="imageContext", description="Upload this message refers to"
    )
    timestamp: Optional[datetime] = Field(default_factory=datetime.now)

    class Config:
        populate_by_name = True


class ChatResponse(BaseModel):
    """Envelope returned by the backend chat endpoint."""

    success: bool = False
    response: str = ""
    message_id: Optional[int] = None
    error: Optional[str] = None


class HistoryEntry(BaseModel):
    """One entry of the backend chat history."""

    role: str
    content: str


class ChatHistory(BaseModel):
    """Backend chat history."""

    history: List[HistoryEntry] = Field(default_factory=list)


class ChatRelayRequest(BaseModel):
    """Request body for the ``/api/chat`` route."""

    message: Optional[str] = Field(None, description="User's message")
    image_file: Optional[Any] = Field(
        None, alias="imageFile", description="Marker that an image was uploaded"
    )
    image_blob_id: Optional[str] = Field(None, description="Walrus blob ID")
    metadata: Optional[Dict[str, Any]] = Field(
        None, description="Image metadata, flat or nested under file_info"
    )
    image_url: Optional[str] = Field(None, description="Backend proxy URL")

    class Config:
        populate_by_name = True


class ChatRelayResponse(BaseModel):
    """Response body of the ``/api/chat`` route."""

    success: bool
    response: str
    can_mint_nft: bool = Field(False, alias="canMintNFT")
    image_blob_id: Optional[str] = None
    walrus_url: Optional[str] = None
    walrus_direct_url: Optional[str] = None

    class Config:
        populate_by_name = True
