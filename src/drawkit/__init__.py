"""drawkit - Gemini image generation client."""

from drawkit.interfaces import CredentialSource, ProviderConfigSource
from drawkit.models.config import AppConfig, HttpClientConfig, ProviderConfig, RuntimeSettings
from drawkit.models.errors import ErrorCode, GenerationFailure, is_retryable
from drawkit.models.metrics import GenerationMetrics
from drawkit.models.requests import GenerationRequest, ReferenceImage
from drawkit.models.responses import GenerationResult
from drawkit.providers.base import ImageProvider
from drawkit.providers.gemini_provider import GeminiProvider, GenerationStage
from drawkit.services.config_service import ConfigService
from drawkit.services.credential_service import (
    EnvironmentCredentialStore,
    InMemoryCredentialStore,
    KeyringCredentialStore,
)
from drawkit.services.http_client import HttpClient, HttpResponse
from drawkit.services.metrics_service import MetricsService

__version__ = "0.1.0"

__all__ = [
    # Interfaces
    "CredentialSource",
    "ProviderConfigSource",
    # Request/Result types
    "GenerationRequest",
    "GenerationResult",
    "GenerationMetrics",
    "ReferenceImage",
    # Errors
    "ErrorCode",
    "GenerationFailure",
    "is_retryable",
    # Configuration
    "AppConfig",
    "HttpClientConfig",
    "ProviderConfig",
    "RuntimeSettings",
    # Providers
    "GeminiProvider",
    "GenerationStage",
    "ImageProvider",
    # Services
    "ConfigService",
    "EnvironmentCredentialStore",
    "HttpClient",
    "HttpResponse",
    "InMemoryCredentialStore",
    "KeyringCredentialStore",
    "MetricsService",
]
