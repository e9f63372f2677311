"""Stripe payment gateway."""

import logging
from typing import Optional

import httpx

from refillbff.exceptions import PaymentGatewayError
from refillbff.models import PaymentIntentResult, PortalSession, ServiceConfig, SetupIntentResult
from refillbff.providers.base import HttpProvider, PaymentGateway

logger = logging.getLogger(__name__)


class StripeGateway(HttpProvider, PaymentGateway):
    """Payment gateway backed by the Stripe REST API (form-encoded)."""

    name = "stripe"
    service_name = "Stripe"
    error_class = PaymentGatewayError

    def __init__(
        self,
        secret_key: str,
        base_url: str = "https://api.stripe.com",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            headers={"Authorization": f"Bearer {secret_key}"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "StripeGateway":
        """Build a gateway from service settings."""
        secret = config.stripe_secret_key.get_secret_value() if config.stripe_secret_key else ""
        return cls(
            secret_key=secret,
            base_url=config.payments_base_url,
            timeout=config.request_timeout,
        )

    async def find_or_create_customer(self, email: str, name: str = "") -> str:
        data = await self._request(
            "GET", "/v1/customers", params={"email": email, "limit": 1}
        )
        existing = (data or {}).get("data") or []
        if existing:
            return existing[0]["id"]

        form = {"email": email}
        if name:
            form["name"] = name
        customer = await self._request("POST", "/v1/customers", data=form)
        logger.info("Created Stripe customer %s", customer["id"])
        return customer["id"]

    async def create_payment_intent(
        self,
        customer_id: str,
        amount: int,
        currency: str,
    ) -> PaymentIntentResult:
        intent = await self._request(
            "POST",
            "/v1/payment_intents",
            data={
                "customer": customer_id,
                "amount": str(amount),
                "currency": currency,
                "automatic_payment_methods[enabled]": "true",
            },
        )
        return PaymentIntentResult(
            customer_id=customer_id,
            client_secret=intent["client_secret"],
            payment_intent_id=intent.get("id", ""),
        )

    async def create_setup_intent(self, customer_id: str) -> SetupIntentResult:
        intent = await self._request(
            "POST",
            "/v1/setup_intents",
            data={
                "customer": customer_id,
                "automatic_payment_methods[enabled]": "true",
            },
        )
        return SetupIntentResult(
            customer_id=customer_id,
            client_secret=intent["client_secret"],
        )

    async def create_billing_portal_session(
        self,
        customer_id: str,
        return_url: Optional[str] = None,
    ) -> PortalSession:
        form = {"customer": customer_id}
        if return_url:
            form["return_url"] = return_url
        session = await self._request("POST", "/v1/billing_portal/sessions", data=form)
        return PortalSession(customer_id=customer_id, url=session["url"])
