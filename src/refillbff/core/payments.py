"""Payment flows for the app's checkout sheet."""

import logging
from typing import Optional

from refillbff.exceptions import InvalidFieldError, MissingFieldError, PaymentsNotConfiguredError
from refillbff.models import PaymentIntentResult, PortalSession, ServiceConfig, SetupIntentResult
from refillbff.providers.base import PaymentGateway

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "usd"


class PaymentService:
    """Customer, intent and portal calls against the payment gateway."""

    def __init__(self, gateway: Optional[PaymentGateway], config: ServiceConfig) -> None:
        self.gateway = gateway
        self.config = config

    def _require_gateway(self) -> PaymentGateway:
        if self.gateway is None:
            raise PaymentsNotConfiguredError()
        return self.gateway

    async def _customer(self, email: str, name: str) -> str:
        email = (email or "").strip()
        if not email:
            raise MissingFieldError("email")
        return await self._require_gateway().find_or_create_customer(email, (name or "").strip())

    async def payment_intent(
        self,
        email: str,
        amount: int,
        currency: str = DEFAULT_CURRENCY,
        name: str = "",
    ) -> PaymentIntentResult:
        """Start a charge of ``amount`` minor units (cents for USD)."""
        if amount is None or amount <= 0:
            raise InvalidFieldError("amount", "Amount must be a positive integer in minor units.")
        currency = (currency or DEFAULT_CURRENCY).strip().lower()
        if len(currency) != 3 or not currency.isalpha():
            raise InvalidFieldError("currency", "Currency must be a 3-letter ISO code.")

        customer_id = await self._customer(email, name)
        result = await self._require_gateway().create_payment_intent(customer_id, amount, currency)
        logger.info("Payment intent for %s: %d %s", customer_id, amount, currency)
        return result

    async def setup_intent(self, email: str, name: str = "") -> SetupIntentResult:
        """Save a card for later refills."""
        customer_id = await self._customer(email, name)
        return await self._require_gateway().create_setup_intent(customer_id)

    async def billing_portal(
        self,
        email: str,
        name: str = "",
        return_url: Optional[str] = None,
    ) -> PortalSession:
        """Hosted billing portal link for a customer."""
        customer_id = await self._customer(email, name)
        return await self._require_gateway().create_billing_portal_session(
            customer_id, return_url or self.config.billing_portal_return_url
        )
