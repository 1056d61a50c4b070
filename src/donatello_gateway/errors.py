"""Error types raised by the gateway clients and services."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure categories surfaced to the user."""

    INVALID_FILE_TYPE = "invalid_file_type"
    FILE_TOO_LARGE = "file_too_large"
    CONNECTIVITY = "connectivity"
    BACKEND = "backend"


class GatewayError(Exception):
    """Base class for all gateway failures."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.BACKEND):
        super().__init__(message)
        self.message = message
        self.kind = kind


class InvalidFileError(GatewayError):
    """A selected file failed validation before any network call."""


class BackendError(GatewayError):
    """The backend could not be reached or answered with an error."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.BACKEND,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, kind)
        self.status_code = status_code


class UploadError(BackendError):
    """Image upload to the backend failed."""


class ChatError(BackendError):
    """Chat request to the backend failed."""


class HealthCheckError(BackendError):
    """Backend health endpoint failed."""


class MintError(BackendError):
    """Mint relay to the backend failed."""


class ConversationBusyError(GatewayError):
    """A send was triggered while another send is still in flight."""

    def __init__(self, message: str = "A message is already being sent"):
        super().__init__(message, ErrorKind.BACKEND)
