"""Gemini-compatible image generation provider."""

import json
import logging
import os
import time
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Sequence

from drawkit.interfaces import CredentialSource, ProviderConfigSource
from drawkit.models.capabilities import DEFAULT_ASPECT_RATIO, DEFAULT_IMAGE_SIZE, describe_resolution
from drawkit.models.config import ProviderConfig, ProviderEndpoint, RuntimeSettings
from drawkit.models.errors import ErrorCode, GenerationFailure, ProviderAPIError
from drawkit.models.metrics import GenerationMetrics
from drawkit.models.requests import GenerationRequest, ReferenceImage
from drawkit.models.responses import GenerationResult
from drawkit.services.config_service import ConfigService
from drawkit.services.credential_service import KeyringCredentialStore, mask_secret
from drawkit.services.http_client import HttpClient
from drawkit.services.metrics_service import MetricsService
from drawkit.services.request_builder import build_payload
from drawkit.services.response_parser import extract_error_message, extract_image
from drawkit.utils.file_utils import generate_output_path, validate_image_file, write_file_bytes

logger = logging.getLogger(__name__)


class GenerationStage(str, Enum):
    """Steps of one generation call, in order."""

    VALIDATE_REFERENCES = "validate_references"
    RESOLVE_CREDENTIAL = "resolve_credential"
    RESOLVE_CONFIG = "resolve_config"
    BUILD_REQUEST = "build_request"
    SEND = "send"
    INTERPRET = "interpret"
    PERSIST = "persist"
    DONE = "done"


class GeminiProvider:
    """
    Image provider for the Gemini generateContent API and compatible endpoints.

    Every call resolves the credential and configuration afresh, so key or
    config changes apply to the next call. The provider holds no per-call state
    and can run many generations concurrently over one HttpClient.
    """

    DEFAULT_MODEL = "gemini-3-pro-image-preview"
    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
    API_KEY_HEADER = "x-goog-api-key"

    def __init__(
        self,
        provider_name: str = "gemini",
        http_client: HttpClient | None = None,
        credentials: CredentialSource | None = None,
        config_source: ProviderConfigSource | None = None,
        settings: RuntimeSettings | None = None,
        metrics_service: MetricsService | None = None,
    ):
        """
        Initialize the provider.

        Args:
            provider_name: Key used for the credential and config lookups
            http_client: Shared transport (a private one is created and owned if omitted)
            credentials: Secret store (defaults to the OS keyring)
            config_source: Provider configuration (defaults to the JSON config file)
            settings: Output verbosity
            metrics_service: Optional MetricsService recording every call
        """
        self.provider_name = provider_name
        self._owns_http_client = http_client is None
        self.http_client = http_client or HttpClient()
        self.credentials = credentials or KeyringCredentialStore()
        self.config_source = config_source or ConfigService()
        self.settings = settings or RuntimeSettings()
        self._metrics_service = metrics_service

    async def __aenter__(self) -> "GeminiProvider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self.http_client.aclose()

    def resolve_model(self, requested: str | None, config: ProviderConfig) -> str:
        """Explicit argument, then stored config, then the built-in default."""
        return requested or config.model or self.DEFAULT_MODEL

    def resolve_endpoint(self, config: ProviderConfig, model: str) -> ProviderEndpoint:
        return ProviderEndpoint(base_url=config.base_url or self.DEFAULT_BASE_URL, model=model)

    async def generate_image(
        self,
        prompt: str,
        references: Sequence[str | os.PathLike[str] | ReferenceImage] = (),
        model: str | None = None,
        aspect_ratio: str = DEFAULT_ASPECT_RATIO,
        image_size: str | None = DEFAULT_IMAGE_SIZE.value,
        output_path: str | os.PathLike[str] | None = None,
        enable_search: bool = False,
    ) -> GenerationResult:
        """
        Validate reference paths, then generate and persist one image.

        Raises:
            FileNotFound: A reference path does not exist
            UnsupportedFormat: A reference file is not a supported image type
            GenerationFailure: Anything raised by generate()
        """
        start_time = time.time()
        try:
            reference_images = [
                ref if isinstance(ref, ReferenceImage) else ReferenceImage(path=validate_image_file(ref))
                for ref in references
            ]
        except GenerationFailure as e:
            inputs = self._input_summary(prompt, model, aspect_ratio, image_size, len(references), enable_search)
            self._handle_failure(e, GenerationStage.VALIDATE_REFERENCES, start_time, model, 0, inputs)
            raise

        request = GenerationRequest(
            prompt=prompt,
            references=reference_images,
            model=model,
            aspect_ratio=aspect_ratio,
            image_size=image_size,
            enable_search=enable_search,
        )
        return await self.generate(request, output_path=output_path)

    async def generate(
        self,
        request: GenerationRequest,
        output_path: str | os.PathLike[str] | None = None,
    ) -> GenerationResult:
        """
        Generate one image and write it to disk.

        Stages run in order: resolve credential, resolve config, build request,
        send, interpret, persist. A failure in any stage is re-raised with the
        provider name and stage added to its details. No output file exists
        unless every stage succeeded.

        Args:
            request: Prompt, references and image parameters
            output_path: Target file (timestamped name in the current directory if omitted)

        Returns:
            GenerationResult with the written path and the decoded bytes

        Raises:
            CredentialNotFound: No API key stored for this provider
            ConfigInvalid: Stored config is malformed or the base URL is unusable
            FileReadError: A reference image could not be read
            NetworkError: Transport failure after retries
            ProviderAPIError: The service answered with a non-2xx status
            InvalidResponse / NoResultsFound / ImageDecodeFailed: Unusable response
            FileWriteError: The image could not be written
        """
        start_time = time.time()
        stage = GenerationStage.RESOLVE_CREDENTIAL
        model = request.model
        attempts = 0
        inputs = self._input_summary(
            request.prompt,
            request.model,
            request.aspect_ratio,
            request.image_size,
            len(request.references),
            request.enable_search,
        )

        try:
            api_key = self.credentials.get(self.provider_name)

            stage = GenerationStage.RESOLVE_CONFIG
            provider_config = self.config_source.get_provider_config(self.provider_name)
            model = self.resolve_model(request.model, provider_config)
            url = self.resolve_endpoint(provider_config, model).url
            self._report_request(request, model, output_path, api_key)

            stage = GenerationStage.BUILD_REQUEST
            payload = build_payload(request, model)

            stage = GenerationStage.SEND
            headers = {
                name: value
                for name, value in (provider_config.custom_headers or {}).items()
                if name.lower() != self.API_KEY_HEADER
            }
            headers[self.API_KEY_HEADER] = api_key
            self._progress(f"⏳ [GeminiProvider] Generating with {model}...")
            response = await self.http_client.post_json(url, payload, headers=headers)
            attempts = response.attempts
            if not response.ok:
                raise ProviderAPIError(self.provider_name, response.status_code, extract_error_message(response.body))

            stage = GenerationStage.INTERPRET
            image = extract_image(response.body)

            stage = GenerationStage.PERSIST
            target = Path(output_path) if output_path is not None else generate_output_path()
            written = write_file_bytes(target, image.data)

        except GenerationFailure as e:
            self._handle_failure(e, stage, start_time, model, attempts, inputs)
            raise

        stage = GenerationStage.DONE
        metrics = self._record_metrics(
            start_time,
            model,
            attempts,
            {**inputs, "model": model},
            output={"path": str(written), "bytes": len(image.data)},
        )
        if image.text:
            logger.debug(f"[GeminiProvider] Model text: {image.text}")
        self._progress(f"[GeminiProvider] Saved to {written}")

        return GenerationResult(
            output_path=written,
            data=image.data,
            mime_type=image.mime_type,
            model_used=model,
            text=image.text,
            metrics=metrics,
        )

    def _report_request(
        self,
        request: GenerationRequest,
        model: str,
        output_path: str | os.PathLike[str] | None,
        api_key: str,
    ) -> None:
        level = logging.INFO if self.settings.verbose else logging.DEBUG
        if not logger.isEnabledFor(level):
            return

        lines = [
            f"provider: {self.provider_name}",
            f"model: {model}",
            f"prompt: {request.prompt}",
            f"aspect ratio: {request.aspect_ratio}",
            f"resolution: {describe_resolution(model, request.aspect_ratio, request.image_size)}",
        ]
        if request.references:
            names = ", ".join(ref.name for ref in request.references)
            lines.append(f"references ({len(request.references)}): {names}")
        lines.append(f"output: {output_path if output_path is not None else 'auto (current directory)'}")
        if request.enable_search:
            lines.append("search grounding: enabled")
        lines.append(f"api key: {mask_secret(api_key)}")
        logger.log(level, "[GeminiProvider] Request summary\n  " + "\n  ".join(lines))

    def _progress(self, message: str) -> None:
        logger.log(logging.DEBUG if self.settings.quiet else logging.INFO, message)

    def _handle_failure(
        self,
        error: GenerationFailure,
        stage: GenerationStage,
        start_time: float,
        model: str | None,
        attempts: int,
        inputs: dict[str, Any],
    ) -> None:
        """Add provider and stage to the failure, log it and record its metrics."""
        error.details.setdefault("provider", self.provider_name)
        error.details.setdefault("stage", stage.value)
        attempts = attempts or error.details.get("attempts", 0)
        logger.error(f"[GeminiProvider] Generation failed during {stage.value}: {error}")
        self._record_metrics(start_time, model, attempts, {**inputs, "model": model}, error_code=error.code)

    @staticmethod
    def _input_summary(
        prompt: str,
        model: str | None,
        aspect_ratio: str,
        image_size: str | None,
        reference_count: int,
        enable_search: bool,
    ) -> dict[str, Any]:
        return {
            "prompt": prompt,
            "model": model,
            "aspect_ratio": aspect_ratio,
            "image_size": image_size,
            "references": reference_count,
            "enable_search": enable_search,
        }

    def _record_metrics(
        self,
        start_time: float,
        model: str | None,
        attempts: int,
        inputs: dict[str, Any],
        error_code: ErrorCode | None = None,
        output: dict[str, Any] | None = None,
    ) -> GenerationMetrics:
        metrics = GenerationMetrics(
            provider=self.provider_name,
            duration_ms=int((time.time() - start_time) * 1000),
            model_used=model,
            retry_count=max(attempts - 1, 0),
            timestamp=datetime.now(),
            error_code=error_code,
            input=json.dumps(inputs),
            output=json.dumps(output) if output else None,
        )
        if self._metrics_service is not None:
            self._metrics_service.record(metrics)
        return metrics
