"""OS keychain integration for API secrets."""

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

logger = logging.getLogger(__name__)

SERVICE_NAME = "refillbff"


class TokenKeychain:
    """Secure storage for platform secrets using the OS keychain."""

    # Keychain keys
    KEY_HUBSPOT_TOKEN = "hubspot_token"
    KEY_STRIPE_SECRET = "stripe_secret_key"

    @classmethod
    def store(
        cls,
        hubspot_token: Optional[str] = None,
        stripe_secret_key: Optional[str] = None,
    ) -> None:
        """Store whichever secrets are given.

        Args:
            hubspot_token: HubSpot private app token
            stripe_secret_key: Stripe secret API key
        """
        if hubspot_token:
            keyring.set_password(SERVICE_NAME, cls.KEY_HUBSPOT_TOKEN, hubspot_token)
        if stripe_secret_key:
            keyring.set_password(SERVICE_NAME, cls.KEY_STRIPE_SECRET, stripe_secret_key)

    @classmethod
    def retrieve(cls, key: str) -> Optional[str]:
        """Retrieve a secret from the keychain.

        Returns:
            The secret, or None if absent or no keychain backend exists
        """
        try:
            return keyring.get_password(SERVICE_NAME, key)
        except KeyringError as e:
            # Headless servers usually have no keychain; env vars cover them
            logger.debug("Keychain unavailable for %s: %s", key, e)
            return None

    @classmethod
    def delete(cls) -> None:
        """Remove all secrets from keychain."""
        for key in (cls.KEY_HUBSPOT_TOKEN, cls.KEY_STRIPE_SECRET):
            try:
                keyring.delete_password(SERVICE_NAME, key)
            except PasswordDeleteError:
                pass  # Key doesn't exist

    @classmethod
    def exists(cls, key: str = KEY_HUBSPOT_TOKEN) -> bool:
        """Check if a secret exists in keychain."""
        return cls.retrieve(key) is not None
