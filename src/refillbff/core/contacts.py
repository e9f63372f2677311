"""Contact lookup and upsert."""

import logging
from typing import Any, Optional

from refillbff.exceptions import ContactNotFoundError, MissingFieldError
from refillbff.models import ContactInfo, ServiceConfig
from refillbff.providers.base import ObjectStore

logger = logging.getLogger(__name__)

CONTACT_PROPERTIES = ["email", "firstname", "lastname", "phone"]


class ContactService:
    """Customer identities in the CRM, keyed by email."""

    def __init__(self, store: ObjectStore, config: ServiceConfig) -> None:
        self.store = store
        self.config = config

    async def find(self, email: str) -> Optional[dict[str, Any]]:
        """Find a contact by exact email match."""
        email = (email or "").strip()
        if not email:
            raise MissingFieldError("email")
        return await self.store.search("contacts", {"email": email}, CONTACT_PROPERTIES)

    async def require(self, email: str) -> dict[str, Any]:
        """Find a contact or raise ContactNotFoundError."""
        contact = await self.find(email)
        if contact is None:
            raise ContactNotFoundError(email)
        return contact

    async def upsert(self, info: ContactInfo) -> tuple[str, bool]:
        """Create or update a contact.

        Returns:
            (contact_id, created)
        """
        properties = info.to_properties()
        existing = await self.find(info.email)
        if existing:
            contact_id = str(existing["id"])
            await self.store.patch("contacts", contact_id, properties)
            logger.info("Updated contact %s", contact_id)
            return contact_id, False

        contact_id = await self.store.create("contacts", properties)
        logger.info("Created contact %s", contact_id)
        return contact_id, True
