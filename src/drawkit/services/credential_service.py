"""Credential sources: OS keyring, environment variables and an in-memory store."""

import logging
import os

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from drawkit.models.errors import CredentialNotFound, CredentialStoreError

logger = logging.getLogger(__name__)

KEYRING_SERVICE = "drawkit"
ENV_VAR_TEMPLATE = "{provider}_API_KEY"


def mask_secret(secret: str) -> str:
    """Show only the first and last four characters of a secret."""
    if len(secret) <= 8:
        return "*" * len(secret)
    return f"{secret[:4]}****{secret[-4:]}"


class KeyringCredentialStore:
    """Secrets stored in the OS keyring, one entry per provider."""

    def __init__(self, service: str = KEYRING_SERVICE):
        self.service = service

    def get(self, provider: str) -> str:
        try:
            secret = keyring.get_password(self.service, provider)
        except KeyringError as e:
            raise CredentialStoreError(
                f"Keyring lookup failed: {e}",
                details={"provider": provider, "service": self.service},
                original_exception=e,
            ) from e
        if not secret:
            raise CredentialNotFound(provider)
        return secret

    def set(self, provider: str, secret: str) -> None:
        try:
            keyring.set_password(self.service, provider, secret)
        except KeyringError as e:
            raise CredentialStoreError(
                f"Keyring write failed: {e}",
                details={"provider": provider, "service": self.service},
                original_exception=e,
            ) from e
        logger.info(f"[Credentials] Stored API key for '{provider}' ({mask_secret(secret)})")

    def delete(self, provider: str) -> None:
        try:
            keyring.delete_password(self.service, provider)
        except PasswordDeleteError:
            logger.debug(f"[Credentials] No API key stored for '{provider}', nothing to delete")
        except KeyringError as e:
            raise CredentialStoreError(
                f"Keyring delete failed: {e}",
                details={"provider": provider, "service": self.service},
                original_exception=e,
            ) from e

    def has(self, provider: str) -> bool:
        try:
            self.get(provider)
        except CredentialNotFound:
            return False
        return True


class EnvironmentCredentialStore:
    """Secrets read from ``<PROVIDER>_API_KEY`` environment variables (e.g. GEMINI_API_KEY)."""

    def __init__(self, template: str = ENV_VAR_TEMPLATE):
        self.template = template

    def variable_name(self, provider: str) -> str:
        normalized = provider.upper().replace("-", "_").replace(".", "_")
        return self.template.format(provider=normalized)

    def get(self, provider: str) -> str:
        secret = os.getenv(self.variable_name(provider))
        if not secret:
            raise CredentialNotFound(provider)
        return secret

    def set(self, provider: str, secret: str) -> None:
        os.environ[self.variable_name(provider)] = secret

    def delete(self, provider: str) -> None:
        os.environ.pop(self.variable_name(provider), None)

    def has(self, provider: str) -> bool:
        return bool(os.getenv(self.variable_name(provider)))


class InMemoryCredentialStore:
    """Dict-backed store for tests and scripts."""

    def __init__(self, secrets: dict[str, str] | None = None):
        self._secrets: dict[str, str] = dict(secrets or {})

    def get(self, provider: str) -> str:
        try:
            return self._secrets[provider]
        except KeyError:
            raise CredentialNotFound(provider) from None

    def set(self, provider: str, secret: str) -> None:
        self._secrets[provider] = secret

    def delete(self, provider: str) -> None:
        self._secrets.pop(provider, None)

    def has(self, provider: str) -> bool:
        return provider in self._secrets
