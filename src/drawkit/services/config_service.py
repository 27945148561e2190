"""JSON configuration store for per-provider settings."""

import json
import logging
import os
from pathlib import Path
from typing import Mapping

from pydantic import ValidationError

from drawkit.models.config import AppConfig, ProviderConfig
from drawkit.models.errors import ConfigInvalid, FileReadError
from drawkit.utils.file_utils import write_file_bytes

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "DRAWKIT_CONFIG_FILE"
DEFAULT_PROVIDER = "gemini"

# Built-in defaults; stored values override these field by field.
DEFAULT_PROVIDER_CONFIGS: dict[str, ProviderConfig] = {
    "gemini": ProviderConfig(
        base_url="https://generativelanguage.googleapis.com",
        model="gemini-3-pro-image-preview",
    ),
}


def default_config_file(environ: Mapping[str, str] | None = None) -> Path:
    """``$DRAWKIT_CONFIG_FILE`` if set, otherwise ``~/.config/drawkit/config.json``."""
    env = os.environ if environ is None else environ
    custom = env.get(CONFIG_FILE_ENV)
    if custom:
        return Path(custom).expanduser()
    return Path.home() / ".config" / "drawkit" / "config.json"


class ConfigService:
    """Reads and writes the provider configuration file."""

    def __init__(self, config_file: str | os.PathLike[str] | None = None):
        """
        Initialize the store.

        Args:
            config_file: Path to the JSON file (defaults to default_config_file())
        """
        self.config_file = Path(config_file).expanduser() if config_file else default_config_file()

    def load(self) -> AppConfig:
        """
        Load the stored configuration, or an empty one if the file does not exist.

        Raises:
            ConfigInvalid: The file is not valid JSON or has the wrong shape
            FileReadError: The file exists but cannot be read
        """
        if not self.config_file.exists():
            return AppConfig()

        try:
            raw = self.config_file.read_bytes()
        except OSError as e:
            raise FileReadError(str(self.config_file), original_exception=e) from e

        try:
            return AppConfig.model_validate(json.loads(raw))
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            raise ConfigInvalid(
                f"Malformed configuration file: {e}",
                details={"path": str(self.config_file)},
                original_exception=e,
            ) from e

    def save(self, config: AppConfig) -> None:
        """Write ``config`` as pretty-printed JSON, creating parent directories."""
        payload = json.dumps(config.model_dump(exclude_none=True), indent=2, sort_keys=True)
        write_file_bytes(self.config_file, payload.encode("utf-8"))
        logger.debug(f"[ConfigService] Saved configuration to {self.config_file}")

    def get_provider_config(self, provider: str) -> ProviderConfig:
        """Stored overrides for ``provider`` merged over the built-in defaults."""
        stored = self.load().providers.get(provider)
        defaults = DEFAULT_PROVIDER_CONFIGS.get(provider)
        if stored is None:
            return defaults.model_copy(deep=True) if defaults else ProviderConfig()
        return stored.merged_over(defaults)

    def update_provider_config(
        self,
        provider: str,
        base_url: str | None = None,
        model: str | None = None,
        custom_headers: dict[str, str] | None = None,
    ) -> ProviderConfig:
        """Set the given fields for ``provider``, leaving the others untouched."""
        config = self.load()
        current = config.providers.get(provider, ProviderConfig())
        updates = {
            key: value
            for key, value in {"base_url": base_url, "model": model, "custom_headers": custom_headers}.items()
            if value is not None
        }
        config.providers[provider] = current.model_copy(update=updates)
        self.save(config)
        return self.get_provider_config(provider)

    def reset_provider_config(self, provider: str) -> None:
        """Drop stored overrides so the built-in defaults apply again."""
        config = self.load()
        if config.providers.pop(provider, None) is not None:
            self.save(config)

    def get_default_provider(self) -> str:
        return self.load().default_provider or DEFAULT_PROVIDER

    def set_default_provider(self, provider: str) -> None:
        config = self.load()
        config.default_provider = provider
        self.save(config)
