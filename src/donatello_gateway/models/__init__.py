"""Data models for Donatello Gateway."""

from .chat import (
    ChatMessage,
    ChatRole,
    ChatResponse,
    ChatHistory,
    ChatRelayRequest,
    ChatRelayResponse,
)
from .health import HealthStatus
from .mint import MintRequest, MintResponse
from .nft import NFTAttribute, NFTMetadata, OpenSeaNFTMetadata
from .upload import (
    FileInfo,
    ImageFile,
    ImageMetadata,
    ImageSize,
    UploadResult,
    ValidationResult,
)

__all__ = [
    "ChatMessage",
    "ChatRole",
    "ChatResponse",
    "ChatHistory",
    "ChatRelayRequest",
    "ChatRelayResponse",
    "HealthStatus",
    "MintRequest",
    "MintResponse",
    "NFTAttribute",
    "NFTMetadata",
    "OpenSeaNFTMetadata",
    "FileInfo",
    "ImageFile",
    "ImageMetadata",
    "ImageSize",
    "UploadResult",
    "ValidationResult",
]
