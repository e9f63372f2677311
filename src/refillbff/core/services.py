"""Service container shared by the API routes and the CLI."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from refillbff.codec.status import parse_timestamp
from refillbff.codec.vehicle import encode_vehicle, normalize_vehicle
from refillbff.core.contacts import ContactService
from refillbff.core.payments import PaymentService
from refillbff.core.push import InMemoryPushTokenStore, PushTokenStore
from refillbff.core.refills import (
    DEFAULT_TASK_BODY,
    REFILL_SUBJECT,
    RefillService,
    friendly_time,
)
from refillbff.core.vehicles import VehicleService
from refillbff.models import ContactInfo, ContactStatus, RefillTask, ServiceConfig
from refillbff.providers.base import ObjectStore, PaymentGateway

logger = logging.getLogger(__name__)

CAR_DETAILS_PREFIX = "Car details from iOS app:\n"


@dataclass
class Services:
    """All application services wired to one set of collaborators."""

    store: ObjectStore
    config: ServiceConfig
    contacts: ContactService
    vehicles: VehicleService
    refills: RefillService
    payments: PaymentService
    push_tokens: PushTokenStore
    gateway: Optional[PaymentGateway] = None

    @classmethod
    def build(
        cls,
        store: ObjectStore,
        config: ServiceConfig,
        gateway: Optional[PaymentGateway] = None,
        push_tokens: Optional[PushTokenStore] = None,
    ) -> "Services":
        """Wire services around a CRM store and optional payment gateway."""
        contacts = ContactService(store, config)
        return cls(
            store=store,
            config=config,
            contacts=contacts,
            vehicles=VehicleService(store, config, contacts),
            refills=RefillService(store, config, contacts),
            payments=PaymentService(gateway, config),
            push_tokens=push_tokens or InMemoryPushTokenStore(),
            gateway=gateway,
        )

    async def aclose(self) -> None:
        """Close remote clients."""
        await self.store.aclose()
        if self.gateway is not None:
            await self.gateway.aclose()

    async def contact_status(self, email: str) -> ContactStatus:
        """Whether a customer exists, with vehicle and open refill counts."""
        contact = await self.contacts.find(email)
        if contact is None:
            return ContactStatus(exists=False, email=email)

        contact_id = str(contact["id"])
        props = contact.get("properties") or {}
        vehicles = await self.vehicles.vehicles_for_contact(contact_id)
        tasks = await self.refills.tasks_for_contact(contact_id)
        return ContactStatus(
            exists=True,
            email=props.get("email") or email,
            contact_id=contact_id,
            first_name=props.get("firstname") or "",
            last_name=props.get("lastname") or "",
            phone=props.get("phone") or "",
            vehicle_count=len(vehicles),
            open_refill_count=sum(1 for t in tasks if t.is_open),
        )

    async def register_contact(
        self,
        info: ContactInfo,
        car_details: Optional[dict[str, Any]] = None,
        appointment: Optional[dict[str, Any]] = None,
    ) -> tuple[str, Optional[RefillTask]]:
        """Upsert a contact, then attach car details and an appointment.

        This is the app's original single-call signup: car details become a
        note, an appointment with a ``startISO`` becomes a refill task.

        Returns:
            (contact_id, task or None)
        """
        contact_id, _ = await self.contacts.upsert(info)

        if car_details:
            vehicle = normalize_vehicle(car_details)
            if vehicle is None:
                logger.warning("Ignoring car details for %s: too few fields", info.email)
            else:
                body = CAR_DETAILS_PREFIX + encode_vehicle(vehicle, indent=2)
                await self.vehicles.create_note(contact_id, body)

        task = None
        if appointment and appointment.get("startISO"):
            start = parse_timestamp(appointment["startISO"])
            when = friendly_time(start) if start else str(appointment["startISO"])
            location = (appointment.get("location") or "").strip() or DEFAULT_TASK_BODY
            subject = f"{REFILL_SUBJECT} - {info.display_name} – {when}"
            task = await self.refills.create_task(contact_id, subject, location, start)

        return contact_id, task
