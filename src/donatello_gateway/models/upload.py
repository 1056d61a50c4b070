"""Upload, validation and image metadata models."""

from datetime import datetime
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from ..errors import ErrorKind


class ImageFile(BaseModel):
    """An image selected for upload, held in memory."""

    filename: str = Field(..., description="Original file name")
    content_type: str = Field(..., description="Declared MIME type")
    data: bytes = Field(default=b"", repr=False, description="Raw file bytes")

    @property
    def size(self) -> int:
        return len(self.data)


class ValidationResult(BaseModel):
    """Outcome of validating a selected file."""

    is_valid: bool
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None


class ImageSize(BaseModel):
    """Pixel dimensions of an analyzed image."""

    width: int = 0
    height: int = 0

    class Config:
        frozen = True


class FileInfo(BaseModel):
    """File-level facts reported by the backend analysis."""

    filename: str = "uploaded_image"
    format: str = "unknown"
    size: ImageSize = Field(default_factory=ImageSize)
    mode: str = "RGB"
    file_size: int = 0
    analyzed_at: str = Field(default_factory=lambda: datetime.now().isoformat())

    class Config:
        frozen = True


class ImageMetadata(BaseModel):
    """Derived metadata for a stored image."""

    file_info: FileInfo = Field(default_factory=FileInfo)
    dominant_colors: Optional[List[str]] = None
    color_analysis: Optional[Any] = None
    technical_metadata: Optional[Any] = None

    class Config:
        frozen = True
        extra = "allow"


class UploadResult(BaseModel):
    """Backend response describing a stored image and its metadata."""

    success: bool = True
    image_url: str = ""
    image_blob_id: str = Field(..., description="Walrus blob ID of the image")
    metadata_blob_id: str = ""
    image_object_id: str = ""
    metadata_object_id: str = ""
    metadata: ImageMetadata = Field(default_factory=ImageMetadata)

    class Config:
        frozen = True
        extra = "ignore"

    def to_chat_context(self) -> Dict[str, Any]:
        """Flatten to the ``image_context`` payload of a chat request."""
        file_info = self.metadata.file_info
        return {
            "filename": file_info.filename,
            "size": file_info.size.model_dump(),
            "format": file_info.format,
            "file_size": file_info.file_size,
            "blob_id": self.image_blob_id,
            "image_url": self.image_url,
            "dominant_colors": self.metadata.dominant_colors,
            "analyzed_at": file_info.analyzed_at,
        }
