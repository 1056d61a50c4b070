"""Validation of image files before upload."""

from ..errors import ErrorKind
from ..models.upload import ImageFile, ValidationResult

ALLOWED_IMAGE_TYPES = (
    "image/png",
    "image/jpg",
    "image/jpeg",
    "image/gif",
    "image/bmp",
    "image/webp",
)
MAX_IMAGE_SIZE = 16 * 1024 * 1024  # 16MB
MAX_PNG_SIZE = 10 * 1024 * 1024  # 10MB


def _megabytes(size: int) -> int:
    return size // (1024 * 1024)


def validate_image_file(
    file: ImageFile, max_size: int = MAX_IMAGE_SIZE
) -> ValidationResult:
    """Check an image against the allowed types and the size ceiling.

    Args:
        file: The selected file
        max_size: Size ceiling in bytes (inclusive)

    Returns:
        ValidationResult with a user-facing reason on failure
    """
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        return ValidationResult(
            is_valid=False,
            error="Invalid file type. Allowed: PNG, JPG, JPEG, GIF, BMP, WEBP",
            kind=ErrorKind.INVALID_FILE_TYPE,
        )

    if file.size > max_size:
        return ValidationResult(
            is_valid=False,
            error=f"File size must be less than {_megabytes(max_size)}MB",
            kind=ErrorKind.FILE_TOO_LARGE,
        )

    return ValidationResult(is_valid=True)


def validate_png_file(file: ImageFile) -> ValidationResult:
    """Stricter check used for artwork that is about to be minted."""
    if file.content_type != "image/png":
        return ValidationResult(
            is_valid=False,
            error="Please select a PNG image file only.",
            kind=ErrorKind.INVALID_FILE_TYPE,
        )

    if file.size > MAX_PNG_SIZE:
        return ValidationResult(
            is_valid=False,
            error="File size must be less than 10MB.",
            kind=ErrorKind.FILE_TOO_LARGE,
        )

    return ValidationResult(is_valid=True)
