"""Abstract bases for the remote platforms the BFF talks to."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from refillbff.exceptions import RemoteServiceError
from refillbff.models import PaymentIntentResult, PortalSession, ServiceConfig, SetupIntentResult

logger = logging.getLogger(__name__)


class HttpProvider:
    """Shared httpx plumbing for remote platform clients.

    Subclasses set ``service_name`` and ``error_class``; every non-2xx
    response and transport failure is raised as ``error_class`` carrying
    the remote payload.
    """

    service_name: str = "remote"
    error_class: type[RemoteServiceError] = RemoteServiceError

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str],
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Platform API root
            headers: Default headers, including auth
            timeout: Per-request timeout in seconds
            transport: Override transport (for testing)
        """
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body (None if empty)."""
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("%s %s %s failed: %s", self.service_name, method, path, e)
            raise self.error_class(
                f"{self.service_name} request failed: {method} {path}",
                payload=str(e),
            ) from e

        if response.is_error:
            payload = self._error_payload(response)
            logger.error(
                "%s %s %s returned %s: %s",
                self.service_name,
                method,
                path,
                response.status_code,
                payload,
            )
            raise self.error_class(
                f"{self.service_name} request failed: {method} {path}",
                status_code=response.status_code,
                payload=payload,
            )

        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_payload(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text


class ObjectStore(ABC):
    """Remote object store (the CRM).

    Objects are plain dicts shaped ``{"id": str, "properties": {...}}``.
    """

    name: str

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "ObjectStore":
        """Build the client from service settings."""
        raise NotImplementedError

    @abstractmethod
    async def search(
        self,
        object_type: str,
        filters: dict[str, str],
        properties: list[str],
    ) -> Optional[dict[str, Any]]:
        """Find the first object whose properties equal ``filters``.

        Returns:
            The matching object, or None
        """
        ...

    @abstractmethod
    async def batch_read(
        self,
        object_type: str,
        ids: list[str],
        properties: list[str],
    ) -> list[dict[str, Any]]:
        """Read many objects by id. Unknown ids are left out."""
        ...

    @abstractmethod
    async def create(self, object_type: str, properties: dict[str, Any]) -> str:
        """Create an object and return its id."""
        ...

    @abstractmethod
    async def patch(
        self,
        object_type: str,
        object_id: str,
        properties: dict[str, Any],
    ) -> None:
        """Update some properties of an object."""
        ...

    @abstractmethod
    async def archive(self, object_type: str, object_id: str) -> None:
        """Archive (soft delete) an object."""
        ...

    @abstractmethod
    async def list_associations(
        self,
        object_type: str,
        object_id: str,
        to_type: str,
    ) -> list[str]:
        """List ids of ``to_type`` objects associated with an object."""
        ...

    @abstractmethod
    async def associate(
        self,
        object_type: str,
        object_id: str,
        to_type: str,
        to_id: str,
        association_type: int,
    ) -> None:
        """Link two objects with a platform-defined association type."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""


class PaymentGateway(ABC):
    """Remote payments platform."""

    name: str

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "PaymentGateway":
        """Build the client from service settings."""
        raise NotImplementedError

    @abstractmethod
    async def find_or_create_customer(self, email: str, name: str = "") -> str:
        """Return the customer id for an email, creating the customer if needed."""
        ...

    @abstractmethod
    async def create_payment_intent(
        self,
        customer_id: str,
        amount: int,
        currency: str,
    ) -> PaymentIntentResult:
        """Start a payment of ``amount`` minor units."""
        ...

    @abstractmethod
    async def create_setup_intent(self, customer_id: str) -> SetupIntentResult:
        """Start saving a payment method for later."""
        ...

    @abstractmethod
    async def create_billing_portal_session(
        self,
        customer_id: str,
        return_url: Optional[str] = None,
    ) -> PortalSession:
        """Create a hosted billing portal link."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
