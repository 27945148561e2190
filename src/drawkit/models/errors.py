"""Error codes and exception types for drawkit."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error category codes for generation operations."""

    # Retryable errors (retryable=True)
    NETWORK_ERROR = "NETWORK_ERROR"
    PROVIDER_OVERLOADED = "PROVIDER_OVERLOADED"
    RATE_LIMITED = "RATE_LIMITED"

    # Not retryable errors (retryable=False)
    CREDENTIAL_NOT_FOUND = "CREDENTIAL_NOT_FOUND"
    CREDENTIAL_STORE_ERROR = "CREDENTIAL_STORE_ERROR"
    CONFIG_INVALID = "CONFIG_INVALID"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    NO_RESULTS_FOUND = "NO_RESULTS_FOUND"
    IMAGE_DECODE_FAILED = "IMAGE_DECODE_FAILED"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    PROVIDER_REJECTED = "PROVIDER_REJECTED"


# Set of retryable error codes
RETRYABLE_ERRORS = {
    ErrorCode.NETWORK_ERROR,
    ErrorCode.PROVIDER_OVERLOADED,
    ErrorCode.RATE_LIMITED,
}


def is_retryable(code: ErrorCode) -> bool:
    """Check if an error code indicates a retryable error."""
    return code in RETRYABLE_ERRORS


class GenerationFailure(Exception):
    """Base exception for every failure surfaced by drawkit.

    Attributes:
        code: Error category
        message: Human-readable description
        details: Diagnostic context (provider, path, status, stage, ...)
        original_exception: Underlying exception, if any
    """

    code: ErrorCode = ErrorCode.PROVIDER_REJECTED

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        original_exception: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = dict(details or {})
        self.original_exception = original_exception

    @property
    def retryable(self) -> bool:
        return is_retryable(self.code)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"


class CredentialNotFound(GenerationFailure):
    """No secret is stored for the requested provider."""

    code = ErrorCode.CREDENTIAL_NOT_FOUND

    def __init__(self, provider: str):
        super().__init__(
            f"API key not found for provider '{provider}'",
            details={"provider": provider},
        )
        self.provider = provider


class CredentialStoreError(GenerationFailure):
    """The secret store backend failed."""

    code = ErrorCode.CREDENTIAL_STORE_ERROR


class ConfigInvalid(GenerationFailure):
    """Stored configuration could not be parsed or is unusable."""

    code = ErrorCode.CONFIG_INVALID


class NetworkError(GenerationFailure):
    """Transport-level failure (timeout, DNS, connection loss), after retries."""

    code = ErrorCode.NETWORK_ERROR


class InvalidResponse(GenerationFailure):
    """The response body does not have the expected shape."""

    code = ErrorCode.INVALID_RESPONSE


class NoResultsFound(GenerationFailure):
    """The response carried no candidate or no image fragment."""

    code = ErrorCode.NO_RESULTS_FOUND


class ImageDecodeFailed(GenerationFailure):
    """An image fragment was present but its payload could not be decoded."""

    code = ErrorCode.IMAGE_DECODE_FAILED


class FileNotFound(GenerationFailure):
    code = ErrorCode.FILE_NOT_FOUND

    def __init__(self, path: str):
        super().__init__(f"File not found: {path}", details={"path": path})
        self.path = path


class UnsupportedFormat(GenerationFailure):
    code = ErrorCode.UNSUPPORTED_FORMAT

    def __init__(self, extension: str, path: str | None = None):
        details = {"extension": extension}
        if path is not None:
            details["path"] = path
        super().__init__(f"Unsupported image format: '{extension}'", details=details)
        self.extension = extension


class FileReadError(GenerationFailure):
    code = ErrorCode.FILE_READ_ERROR

    def __init__(self, path: str, original_exception: BaseException | None = None):
        super().__init__(
            f"Failed to read file: {path}",
            details={"path": path},
            original_exception=original_exception,
        )
        self.path = path


class FileWriteError(GenerationFailure):
    code = ErrorCode.FILE_WRITE_ERROR

    def __init__(self, path: str, original_exception: BaseException | None = None):
        super().__init__(
            f"Failed to write file: {path}",
            details={"path": path},
            original_exception=original_exception,
        )
        self.path = path


class ProviderAPIError(GenerationFailure):
    """The provider answered with a non-2xx status."""

    def __init__(self, provider: str, status_code: int, message: str):
        super().__init__(
            f"[{provider}] {message}",
            details={"provider": provider, "status_code": status_code},
        )
        self.provider = provider
        self.status_code = status_code
        self.api_message = message
        self.code = status_to_error_code(status_code)


def status_to_error_code(status_code: int) -> ErrorCode:
    """Map a final HTTP status to an error category."""
    if status_code == 429:
        return ErrorCode.RATE_LIMITED
    if status_code >= 500:
        return ErrorCode.PROVIDER_OVERLOADED
    if status_code in (401, 403):
        return ErrorCode.AUTHENTICATION_REQUIRED
    return ErrorCode.PROVIDER_REJECTED
