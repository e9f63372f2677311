"""Vehicle records stored as CRM notes."""

import logging
import time
from datetime import datetime, timezone
from typing import Any

from refillbff.codec.status import parse_timestamp
from refillbff.codec.vehicle import ACCEPTANCE_THRESHOLD, decode_vehicles, encode_vehicle
from refillbff.core.contacts import ContactService
from refillbff.exceptions import InvalidFieldError, RemoteServiceError
from refillbff.models import ServiceConfig, SyncReport, VehicleRecord
from refillbff.providers.base import ObjectStore

logger = logging.getLogger(__name__)

NOTE_PROPERTIES = ["hs_note_body", "hs_timestamp"]

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def now_millis() -> int:
    """Current time as epoch milliseconds (HubSpot's hs_timestamp)."""
    return int(time.time() * 1000)


def _note_time(note: dict[str, Any]) -> datetime:
    stamp = parse_timestamp((note.get("properties") or {}).get("hs_timestamp"))
    if stamp is None:
        return _EPOCH
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


class VehicleService:
    """Reads and replaces the vehicles attached to a contact."""

    def __init__(
        self,
        store: ObjectStore,
        config: ServiceConfig,
        contacts: ContactService,
    ) -> None:
        self.store = store
        self.config = config
        self.contacts = contacts

    async def vehicle_notes(self, contact_id: str) -> list[tuple[str, list[VehicleRecord]]]:
        """Every note on a contact, oldest first, with its decoded vehicles.

        Notes that hold no vehicle come back with an empty list.
        """
        note_ids = await self.store.list_associations("contacts", contact_id, "notes")
        if not note_ids:
            return []
        notes = await self.store.batch_read("notes", note_ids, NOTE_PROPERTIES)
        notes.sort(key=_note_time)

        decoded = []
        for note in notes:
            body = (note.get("properties") or {}).get("hs_note_body")
            records = decode_vehicles(body)
            if not records:
                logger.debug("Note %s holds no vehicle", note.get("id"))
            decoded.append((str(note["id"]), records))
        return decoded

    async def vehicles_for_contact(self, contact_id: str) -> list[VehicleRecord]:
        """Decoded vehicles for a contact id."""
        return [v for _, records in await self.vehicle_notes(contact_id) for v in records]

    async def list_vehicles(self, email: str) -> list[VehicleRecord]:
        """Vehicles for a customer email.

        Raises:
            ContactNotFoundError: If no contact has this email
        """
        contact = await self.contacts.require(email)
        return await self.vehicles_for_contact(str(contact["id"]))

    async def create_note(self, contact_id: str, body: str) -> str:
        """Store a note body and attach it to a contact."""
        note_id = await self.store.create(
            "notes",
            {"hs_note_body": body, "hs_timestamp": now_millis()},
        )
        await self.store.associate(
            "notes",
            note_id,
            "contacts",
            contact_id,
            self.config.note_contact_association_type,
        )
        return note_id

    async def add_vehicle(self, contact_id: str, vehicle: VehicleRecord) -> str:
        """Attach one more vehicle note to a contact."""
        return await self.create_note(contact_id, encode_vehicle(vehicle))

    async def sync_vehicles(self, email: str, vehicles: list[VehicleRecord]) -> SyncReport:
        """Replace a customer's vehicle notes with ``vehicles``.

        Best effort, not transactional: notes that fail to archive are logged
        and reported, and creation goes ahead regardless. Notes that hold no
        vehicle are left alone.

        Raises:
            InvalidFieldError: If a vehicle could not be decoded once stored
            ContactNotFoundError: If no contact has this email
        """
        for i, vehicle in enumerate(vehicles):
            # The derived name counts: a lone make, model or year passes, a lone color or plate does not
            if vehicle.recognized_field_count < ACCEPTANCE_THRESHOLD:
                raise InvalidFieldError(
                    f"vehicles[{i}]",
                    "A vehicle needs at least two of name, make, model, year, color, licensePlate.",
                )

        contact = await self.contacts.require(email)
        contact_id = str(contact["id"])
        report = SyncReport(vehicles=list(vehicles))

        for note_id, records in await self.vehicle_notes(contact_id):
            if not records:
                continue
            try:
                await self.store.archive("notes", note_id)
            except RemoteServiceError as e:
                logger.warning("Could not archive note %s for %s: %s", note_id, email, e.payload)
                report.failed_deletes.append(note_id)
                continue
            report.deleted.append(note_id)

        for vehicle in vehicles:
            report.created.append(await self.add_vehicle(contact_id, vehicle))

        logger.info(
            "Synced vehicles for contact %s: %d deleted, %d created, %d failed deletes",
            contact_id,
            len(report.deleted),
            len(report.created),
            len(report.failed_deletes),
        )
        return report
