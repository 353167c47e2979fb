"""Error types raised by the Google Photos client."""

from enum import Enum, IntEnum


class UploadPhase(IntEnum):
    """Step of the two-phase upload protocol."""

    BINARY_UPLOAD = 1
    MEDIA_ITEM_CREATION = 2


class UploadFailure(str, Enum):
    """Why an upload phase failed."""

    HTTP_STATUS = "http_status"
    SERVER_REPORTED = "server_reported"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSPORT = "transport"


class GooglePhotosError(Exception):
    """Base exception for Google Photos client errors."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code is not None:
            parts.append(f"HTTP {self.status_code}")
        if self.body:
            parts.append(self.body)
        return "\n".join(parts)


class AuthError(GooglePhotosError):
    """Raised when credentials cannot be loaded or an access token cannot be obtained."""


class UploadError(GooglePhotosError):
    """Raised when a phase of the upload protocol fails."""

    def __init__(
        self,
        phase: UploadPhase,
        reason: UploadFailure,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message, status_code=status_code, body=body)
        self.phase = UploadPhase(phase)
        self.reason = UploadFailure(reason)

    def __str__(self) -> str:
        return f"phase {int(self.phase)} ({self.reason.value}): {super().__str__()}"
