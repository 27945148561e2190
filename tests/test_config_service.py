"""Tests for the JSON configuration store."""

import json

import pytest

from drawkit.models.config import AppConfig, ProviderConfig
from drawkit.models.errors import ConfigInvalid, FileWriteError
from drawkit.services.config_service import CONFIG_FILE_ENV, ConfigService, default_config_file


def test_default_config_file_location(monkeypatch, tmp_path):
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert default_config_file() == tmp_path / ".config" / "drawkit" / "config.json"


def test_default_config_file_env_override(tmp_path):
    custom = tmp_path / "custom.json"

    assert default_config_file({CONFIG_FILE_ENV: str(custom)}) == custom


def test_constructor_uses_env_override(monkeypatch, tmp_path):
    custom = tmp_path / "elsewhere" / "drawkit.json"
    monkeypatch.setenv(CONFIG_FILE_ENV, str(custom))

    assert ConfigService().config_file == custom


def test_missing_file_yields_defaults(config_service):
    assert not config_service.config_file.exists()

    assert config_service.load() == AppConfig()
    provider_config = config_service.get_provider_config("gemini")
    assert provider_config.base_url == "https://generativelanguage.googleapis.com"
    assert provider_config.model == "gemini-3-pro-image-preview"
    assert provider_config.custom_headers is None


def test_unknown_provider_has_empty_config(config_service):
    assert config_service.get_provider_config("other") == ProviderConfig()


def test_stored_values_override_defaults_per_field(config_service):
    config_service.config_file.parent.mkdir(parents=True)
    config_service.config_file.write_text(json.dumps({"providers": {"gemini": {"model": "gemini-2.5-flash-image"}}}))

    provider_config = config_service.get_provider_config("gemini")

    assert provider_config.model == "gemini-2.5-flash-image"
    assert provider_config.base_url == "https://generativelanguage.googleapis.com"


def test_update_is_partial_and_persisted(config_service):
    config_service.update_provider_config("gemini", base_url="https://proxy.test")
    merged = config_service.update_provider_config("gemini", model="custom-model")

    assert merged.base_url == "https://proxy.test"
    assert merged.model == "custom-model"

    on_disk = json.loads(config_service.config_file.read_text())
    assert on_disk["providers"]["gemini"] == {"base_url": "https://proxy.test", "model": "custom-model"}
    assert on_disk["default_provider"] == "gemini"


def test_update_custom_headers(config_service):
    merged = config_service.update_provider_config("gemini", custom_headers={"X-Trace": "1"})

    assert merged.custom_headers == {"X-Trace": "1"}
    assert ConfigService(config_service.config_file).get_provider_config("gemini").custom_headers == {"X-Trace": "1"}


def test_reset_restores_defaults(config_service):
    config_service.update_provider_config("gemini", model="custom-model")

    config_service.reset_provider_config("gemini")

    assert config_service.get_provider_config("gemini").model == "gemini-3-pro-image-preview"
    assert "gemini" not in config_service.load().providers


def test_reset_without_overrides_does_not_write(config_service):
    config_service.reset_provider_config("gemini")

    assert not config_service.config_file.exists()


def test_default_provider_round_trip(config_service):
    assert config_service.get_default_provider() == "gemini"

    config_service.set_default_provider("proxy")

    assert config_service.get_default_provider() == "proxy"


def test_malformed_json_raises_config_invalid(config_service):
    config_service.config_file.parent.mkdir(parents=True)
    config_service.config_file.write_text("{not json")

    with pytest.raises(ConfigInvalid) as exc_info:
        config_service.get_provider_config("gemini")

    assert exc_info.value.details["path"] == str(config_service.config_file)


@pytest.mark.parametrize("raw", [b"\xff\xfe{}", b'{"providers": "\xc3\x28"}'])
def test_undecodable_file_raises_config_invalid(config_service, raw):
    config_service.config_file.parent.mkdir(parents=True)
    config_service.config_file.write_bytes(raw)

    with pytest.raises(ConfigInvalid) as exc_info:
        config_service.load()

    assert exc_info.value.details["path"] == str(config_service.config_file)


def test_wrong_shape_raises_config_invalid(config_service):
    config_service.config_file.parent.mkdir(parents=True)
    config_service.config_file.write_text(json.dumps({"providers": ["gemini"]}))

    with pytest.raises(ConfigInvalid):
        config_service.load()


def test_unknown_keys_are_ignored(config_service):
    config_service.config_file.parent.mkdir(parents=True)
    config_service.config_file.write_text(
        json.dumps({"providers": {"gemini": {"model": "m", "legacy": True}}, "theme": "dark"})
    )

    assert config_service.get_provider_config("gemini").model == "m"


def test_save_failure_raises_file_write_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    service = ConfigService(blocker / "config.json")

    with pytest.raises(FileWriteError):
        service.set_default_provider("gemini")
