"""Service configuration model."""

from typing import Optional

from pydantic import BaseModel, Field, SecretStr


class ServiceConfig(BaseModel):
    """Runtime settings for the BFF."""

    # Remote platforms
    crm_base_url: str = "https://api.hubapi.com"
    payments_base_url: str = "https://api.stripe.com"
    request_timeout: float = Field(default=15.0, gt=0, description="Seconds per remote call")

    # HTTP server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    allowed_origin: str = "*"

    # HubSpot-defined association type ids
    note_contact_association_type: int = 202
    task_contact_association_type: int = 204

    billing_portal_return_url: Optional[str] = None

    # Secrets come from env or keychain, never from the config file
    hubspot_token: Optional[SecretStr] = Field(default=None, exclude=True)
    stripe_secret_key: Optional[SecretStr] = Field(default=None, exclude=True)

    @property
    def payments_enabled(self) -> bool:
        """Check if a Stripe secret is available."""
        return bool(self.stripe_secret_key and self.stripe_secret_key.get_secret_value())

    @property
    def cors_origins(self) -> list[str]:
        """Origins for the CORS middleware."""
        if self.allowed_origin.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.allowed_origin.split(",") if o.strip()]
