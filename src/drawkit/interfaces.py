"""Protocol interfaces for drawkit's external collaborators."""

from typing import Protocol

from typing_extensions import runtime_checkable

from drawkit.models.config import ProviderConfig


@runtime_checkable
class CredentialSource(Protocol):
    """Secret store keyed by provider name."""

    def get(self, provider: str) -> str:
        """Return the stored secret. Raises CredentialNotFound when absent."""
        ...

    def set(self, provider: str, secret: str) -> None:
        ...

    def delete(self, provider: str) -> None:
        """Remove the secret. Deleting an absent entry is not an error."""
        ...

    def has(self, provider: str) -> bool:
        ...


@runtime_checkable
class ProviderConfigSource(Protocol):
    """Read side of the provider configuration store."""

    def get_provider_config(self, provider: str) -> ProviderConfig:
        """Return stored overrides merged over built-in defaults."""
        ...
