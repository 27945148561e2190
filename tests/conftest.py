"""Shared pytest fixtures for drawkit tests."""

import base64

import httpx
import pytest
import pytest_asyncio

from drawkit.models.config import HttpClientConfig
from drawkit.providers.gemini_provider import GeminiProvider
from drawkit.services.config_service import ConfigService
from drawkit.services.credential_service import InMemoryCredentialStore
from drawkit.services.http_client import HttpClient

TEST_API_KEY = "test-key-1234567890"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"fake-image-payload"


class RecordingSleep:
    """Replacement for asyncio.sleep that records delays instead of waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def make_image_body(
    data: bytes = PNG_BYTES,
    mime_type: str = "image/png",
    texts: tuple[str, ...] = (),
) -> dict:
    """generateContent response with optional leading text parts and one image part."""
    parts = [{"text": text} for text in texts]
    parts.append({"inlineData": {"mimeType": mime_type, "data": base64.b64encode(data).decode("ascii")}})
    return {"candidates": [{"content": {"role": "model", "parts": parts}, "finishReason": "STOP"}]}


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def image_body():
    """Factory for successful generateContent bodies."""
    return make_image_body


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def api_key():
    return TEST_API_KEY


@pytest.fixture
def credentials(api_key):
    """In-memory store holding a key for the gemini provider."""
    return InMemoryCredentialStore({"gemini": api_key})


@pytest.fixture
def config_service(tmp_path):
    """ConfigService backed by a file in the test's temporary directory."""
    return ConfigService(tmp_path / "config" / "config.json")


@pytest_asyncio.fixture
async def make_http_client(recording_sleep):
    """
    Factory for HttpClient instances served by an httpx.MockTransport handler.

    Keyword arguments override HttpClientConfig fields. Clients are closed at teardown.
    """
    clients = []

    def factory(handler, **config) -> HttpClient:
        client = HttpClient(
            HttpClientConfig(**config),
            transport=httpx.MockTransport(handler),
            sleep=recording_sleep,
        )
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def make_provider(make_http_client, credentials, config_service):
    """Factory for GeminiProvider instances wired to a mock transport."""

    def factory(handler, http_config: dict | None = None, **kwargs) -> GeminiProvider:
        kwargs.setdefault("credentials", credentials)
        kwargs.setdefault("config_source", config_service)
        return GeminiProvider(http_client=make_http_client(handler, **(http_config or {})), **kwargs)

    return factory
