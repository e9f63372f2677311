"""Tests for ConfigManager."""

import pytest

from refillbff.core.config import ConfigManager
from refillbff.core.keychain import TokenKeychain
from refillbff.exceptions import ConfigNotFoundError, ConfigValidationError
from refillbff.models import ServiceConfig


class TestConfigManager:
    def test_defaults_without_file(self, temp_config_dir, mock_keyring):
        manager = ConfigManager(config_dir=temp_config_dir, environ={})
        config = manager.load()
        assert config.port == 3000
        assert config.hubspot_token is None

    def test_save_and_load(self, temp_config_dir, mock_keyring):
        manager = ConfigManager(config_dir=temp_config_dir, environ={})
        manager.save(ServiceConfig(port=8080, allowed_origin="https://app.example"))
        loaded = manager.load()
        assert loaded.port == 8080
        assert loaded.allowed_origin == "https://app.example"

    def test_exists_property(self, temp_config_dir, mock_keyring):
        manager = ConfigManager(config_dir=temp_config_dir, environ={})
        assert manager.exists is False
        manager.save(ServiceConfig())
        assert manager.exists is True

    def test_secrets_never_written(self, temp_config_dir, mock_keyring):
        manager = ConfigManager(config_dir=temp_config_dir, environ={})
        manager.save(ServiceConfig(hubspot_token="pat-secret", stripe_secret_key="sk_secret"))
        contents = manager.config_path.read_text()
        assert "pat-secret" not in contents
        assert "sk_secret" not in contents

    def test_env_overrides_file(self, temp_config_dir, mock_keyring):
        ConfigManager(config_dir=temp_config_dir, environ={}).save(ServiceConfig(port=8080))
        manager = ConfigManager(config_dir=temp_config_dir, environ={"PORT": "9090"})
        assert manager.load().port == 9090

    def test_env_secrets(self, temp_config_dir, mock_keyring):
        manager = ConfigManager(
            config_dir=temp_config_dir,
            environ={"HUBSPOT_TOKEN": "pat-env", "STRIPE_SECRET_KEY": "sk_env"},
        )
        config = manager.load()
        assert config.hubspot_token.get_secret_value() == "pat-env"
        assert config.payments_enabled is True

    def test_keychain_secrets(self, temp_config_dir, mock_keyring):
        TokenKeychain.store(hubspot_token="pat-keychain")
        config = ConfigManager(config_dir=temp_config_dir, environ={}).load()
        assert config.hubspot_token.get_secret_value() == "pat-keychain"
        assert config.payments_enabled is False

    def test_env_secret_beats_keychain(self, temp_config_dir, mock_keyring):
        TokenKeychain.store(hubspot_token="pat-keychain")
        manager = ConfigManager(config_dir=temp_config_dir, environ={"HUBSPOT_TOKEN": "pat-env"})
        assert manager.load().hubspot_token.get_secret_value() == "pat-env"

    def test_invalid_toml(self, temp_config_dir, mock_keyring):
        manager = ConfigManager(config_dir=temp_config_dir, environ={})
        manager.config_path.write_text("port = [unclosed")
        with pytest.raises(ConfigValidationError):
            manager.load()

    def test_invalid_override(self, temp_config_dir, mock_keyring):
        manager = ConfigManager(config_dir=temp_config_dir, environ={"PORT": "not-a-port"})
        with pytest.raises(ConfigValidationError):
            manager.load()

    def test_delete(self, temp_config_dir, mock_keyring):
        manager = ConfigManager(config_dir=temp_config_dir, environ={})
        manager.save(ServiceConfig())
        assert manager.delete() is True
        assert manager.exists is False

    def test_delete_nonexistent(self, temp_config_dir):
        manager = ConfigManager(config_dir=temp_config_dir, environ={})
        assert manager.delete() is False


class TestRequireCrmToken:
    def test_present(self):
        config = ServiceConfig(hubspot_token="pat-1")
        assert ConfigManager.require_crm_token(config) == "pat-1"

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing(self, token):
        with pytest.raises(ConfigNotFoundError) as exc_info:
            ConfigManager.require_crm_token(ServiceConfig(hubspot_token=token))
        assert exc_info.value.message == "Missing HUBSPOT_TOKEN"
