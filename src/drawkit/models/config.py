"""Configuration models for drawkit."""

from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from drawkit.models.errors import ConfigInvalid

DEFAULT_API_VERSION = "v1beta"
ENDPOINT_TEMPLATE = "{base_url}/{api_version}/models/{model}:generateContent"


class HttpClientConfig(BaseModel):
    """Transport timeouts, retry bound and pool sizing."""

    request_timeout: float = Field(60.0, gt=0, description="Per-request timeout in seconds")
    resource_timeout: float = Field(
        600.0,
        gt=0,
        description="Upper bound for one attempt including the full response body, in seconds",
    )
    max_retries: int = Field(3, ge=0, description="Retries after the first attempt")
    retry_delay: float = Field(1.0, ge=0, description="Base delay; retry n waits retry_delay * n")
    max_connections: int = Field(10, ge=1)
    max_keepalive_connections: int = Field(5, ge=0)
    user_agent: str = Field("drawkit/0.1.0")


class RuntimeSettings(BaseModel):
    """Output verbosity for a provider instance."""

    verbose: bool = Field(False, description="Report the request summary at INFO level")
    quiet: bool = Field(False, description="Demote progress messages to DEBUG level")


class ProviderConfig(BaseModel):
    """Per-provider settings. None means "not set"."""

    model_config = ConfigDict(extra="ignore")

    base_url: Optional[str] = None
    model: Optional[str] = None
    custom_headers: Optional[dict[str, str]] = None

    def merged_over(self, defaults: "ProviderConfig | None") -> "ProviderConfig":
        """Return a copy where every unset field is taken from ``defaults``."""
        if defaults is None:
            return self.model_copy(deep=True)
        overrides = self.model_dump(exclude_none=True)
        return defaults.model_copy(update=overrides, deep=True)


class AppConfig(BaseModel):
    """Contents of the JSON configuration file."""

    model_config = ConfigDict(extra="ignore")

    providers: dict[str, ProviderConfig] = Field(default_factory=dict)
    default_provider: Optional[str] = "gemini"


class ProviderEndpoint(BaseModel):
    """Resolved generateContent endpoint for one call."""

    base_url: str
    model: str
    api_version: str = DEFAULT_API_VERSION

    @property
    def url(self) -> str:
        url = ENDPOINT_TEMPLATE.format(
            base_url=self.base_url.rstrip("/"),
            api_version=self.api_version,
            model=self.model,
        )
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise ConfigInvalid(f"Invalid endpoint URL: {url}", details={"base_url": self.base_url}, original_exception=e)
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise ConfigInvalid(f"Invalid endpoint URL: {url}", details={"base_url": self.base_url})
        return url
