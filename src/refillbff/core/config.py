"""Configuration management."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

import platformdirs
import tomli
import tomli_w
from pydantic import ValidationError

from refillbff.core.keychain import TokenKeychain
from refillbff.exceptions import ConfigNotFoundError, ConfigValidationError
from refillbff.models import ServiceConfig

# Environment variable → ServiceConfig field
ENV_OVERRIDES = {
    "HOST": "host",
    "PORT": "port",
    "ALLOWED_ORIGIN": "allowed_origin",
    "HUBSPOT_BASE_URL": "crm_base_url",
    "STRIPE_BASE_URL": "payments_base_url",
    "REQUEST_TIMEOUT": "request_timeout",
    "BILLING_PORTAL_RETURN_URL": "billing_portal_return_url",
}


class ConfigManager:
    """Loads settings from config.toml, the environment and the keychain."""

    CONFIG_FILENAME = "config.toml"

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize config manager.

        Args:
            config_dir: Override config directory (for testing)
            environ: Override environment mapping (for testing)
        """
        if config_dir:
            self._config_dir = Path(config_dir)
        else:
            self._config_dir = Path(platformdirs.user_config_dir("refillbff"))
        self._environ = os.environ if environ is None else environ

    @property
    def config_path(self) -> Path:
        """Path to config file."""
        return self._config_dir / self.CONFIG_FILENAME

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> ServiceConfig:
        """Build the effective configuration.

        Returns:
            Validated ServiceConfig with secrets attached

        Raises:
            ConfigValidationError: If the file or an override is invalid
        """
        data: dict = {}
        if self.exists:
            try:
                data = tomli.loads(self.config_path.read_text(encoding="utf-8"))
            except tomli.TOMLDecodeError as e:
                raise ConfigValidationError(self.CONFIG_FILENAME, str(e))

        for env_name, field in ENV_OVERRIDES.items():
            value = self._environ.get(env_name)
            if value:
                data[field] = value

        data["hubspot_token"] = self._secret(
            "HUBSPOT_TOKEN", TokenKeychain.KEY_HUBSPOT_TOKEN
        )
        data["stripe_secret_key"] = self._secret(
            "STRIPE_SECRET_KEY", TokenKeychain.KEY_STRIPE_SECRET
        )

        try:
            return ServiceConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigValidationError("config", str(e))

    def save(self, config: ServiceConfig) -> None:
        """Write non-secret settings to config.toml."""
        self._config_dir.mkdir(parents=True, exist_ok=True)
        config_dict = config.model_dump(mode="json", exclude_none=True)
        self.config_path.write_text(tomli_w.dumps(config_dict), encoding="utf-8")

    def delete(self) -> bool:
        """Delete configuration file.

        Returns:
            True if file was deleted, False if it didn't exist
        """
        if self.exists:
            self.config_path.unlink()
            return True
        return False

    def _secret(self, env_name: str, keychain_key: str) -> Optional[str]:
        return self._environ.get(env_name) or TokenKeychain.retrieve(keychain_key)

    @staticmethod
    def require_crm_token(config: ServiceConfig) -> str:
        """Return the HubSpot token or fail like the service did at startup.

        Raises:
            ConfigNotFoundError: If no token is configured
        """
        if not config.hubspot_token or not config.hubspot_token.get_secret_value():
            raise ConfigNotFoundError("HUBSPOT_TOKEN")
        return config.hubspot_token.get_secret_value()
