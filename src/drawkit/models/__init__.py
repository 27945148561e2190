"""Models package for drawkit."""

from drawkit.models.capabilities import (
    ImageSize,
    ModelCapability,
    ModelFamily,
    SUPPORTED_ASPECT_RATIOS,
    capability_for,
    describe_resolution,
    expected_dimensions,
    is_supported_aspect_ratio,
    model_family,
)
from drawkit.models.config import AppConfig, HttpClientConfig, ProviderConfig, ProviderEndpoint, RuntimeSettings
from drawkit.models.errors import (
    ConfigInvalid,
    CredentialNotFound,
    CredentialStoreError,
    ErrorCode,
    FileNotFound,
    FileReadError,
    FileWriteError,
    GenerationFailure,
    ImageDecodeFailed,
    InvalidResponse,
    NetworkError,
    NoResultsFound,
    ProviderAPIError,
    UnsupportedFormat,
    is_retryable,
)
from drawkit.models.metrics import GenerationMetrics
from drawkit.models.requests import MAX_REFERENCE_IMAGES, GenerationRequest, ReferenceImage
from drawkit.models.responses import ExtractedImage, GenerationResult

__all__ = [
    "AppConfig",
    "ConfigInvalid",
    "CredentialNotFound",
    "CredentialStoreError",
    "ErrorCode",
    "ExtractedImage",
    "FileNotFound",
    "FileReadError",
    "FileWriteError",
    "GenerationFailure",
    "GenerationMetrics",
    "GenerationRequest",
    "GenerationResult",
    "HttpClientConfig",
    "ImageDecodeFailed",
    "ImageSize",
    "InvalidResponse",
    "MAX_REFERENCE_IMAGES",
    "ModelCapability",
    "ModelFamily",
    "NetworkError",
    "NoResultsFound",
    "ProviderAPIError",
    "ProviderConfig",
    "ProviderEndpoint",
    "ReferenceImage",
    "RuntimeSettings",
    "SUPPORTED_ASPECT_RATIOS",
    "UnsupportedFormat",
    "capability_for",
    "describe_resolution",
    "expected_dimensions",
    "is_retryable",
    "is_supported_aspect_ratio",
    "model_family",
]
