"""Refill bookings stored as CRM tasks."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Union

from refillbff.codec.status import (
    format_subject,
    looks_like_refill,
    parse_status,
    parse_timestamp,
    status_code,
    task_from_properties,
)
from refillbff.core.contacts import ContactService
from refillbff.core.vehicles import now_millis
from refillbff.exceptions import InvalidFieldError, MissingFieldError, TaskNotFoundError
from refillbff.models import RefillTask, ServiceConfig, TaskStatus, VehicleRecord
from refillbff.providers.base import ObjectStore

logger = logging.getLogger(__name__)

TASK_PROPERTIES = ["hs_task_subject", "hs_task_body", "hs_timestamp", "hs_task_status"]

REFILL_SUBJECT = "Refill request"
DEFAULT_TASK_BODY = "Refill appointment from iOS app"

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)

# Task subjects are English whatever the process locale is
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def to_millis(value: Any) -> Optional[int]:
    """Epoch millis for an ISO string or epoch-millis value, else None."""
    stamp = value if isinstance(value, datetime) else parse_timestamp(value)
    if stamp is None:
        return None
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return int(stamp.timestamp() * 1000)


def friendly_time(stamp: datetime) -> str:
    """Short human date, e.g. 'Mar 4, 2025, 9:30 AM'."""
    hour = stamp.hour % 12 or 12
    meridiem = "AM" if stamp.hour < 12 else "PM"
    return f"{_MONTHS[stamp.month - 1]} {stamp.day}, {stamp.year}, {hour}:{stamp.minute:02d} {meridiem}"


def vehicle_label(vehicle: Union[VehicleRecord, str, None]) -> str:
    """Text naming a vehicle in a task subject."""
    if isinstance(vehicle, VehicleRecord):
        return vehicle.display_name
    return (vehicle or "").strip()


def _task_time(task: RefillTask) -> datetime:
    stamp = task.timestamp
    if stamp is None:
        return _EPOCH
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


class RefillService:
    """Creates, lists and updates refill bookings."""

    def __init__(
        self,
        store: ObjectStore,
        config: ServiceConfig,
        contacts: ContactService,
    ) -> None:
        self.store = store
        self.config = config
        self.contacts = contacts

    async def create_task(
        self,
        contact_id: str,
        subject: str,
        body: str,
        due: Any = None,
    ) -> RefillTask:
        """Create an in-progress task and attach it to a contact."""
        properties = {
            "hs_task_subject": format_subject("0", subject),
            "hs_task_body": body,
            "hs_timestamp": to_millis(due) or now_millis(),
            "hs_task_status": "NOT_STARTED",
            "hs_task_priority": "MEDIUM",
        }
        task_id = await self.store.create("tasks", properties)
        await self.store.associate(
            "tasks",
            task_id,
            "contacts",
            contact_id,
            self.config.task_contact_association_type,
        )
        logger.info("Created refill task %s for contact %s", task_id, contact_id)
        return task_from_properties(task_id, properties)

    async def book(
        self,
        email: str,
        service_location: str,
        scheduled_at: Any = None,
        vehicle: Union[VehicleRecord, str, None] = None,
    ) -> RefillTask:
        """Book a refill for a customer.

        Raises:
            MissingFieldError: If no service location is given
            ContactNotFoundError: If no contact has this email
        """
        location = (service_location or "").strip()
        if not location:
            raise MissingFieldError("serviceLocation")

        contact = await self.contacts.require(email)
        label = vehicle_label(vehicle)
        subject = f"{REFILL_SUBJECT} - {label}" if label else REFILL_SUBJECT
        return await self.create_task(str(contact["id"]), subject, location, scheduled_at)

    async def tasks_for_contact(self, contact_id: str) -> list[RefillTask]:
        """Refill tasks on a contact, newest first.

        The task object type is shared with unrelated CRM tasks, so only
        subjects that look like refills are kept.
        """
        task_ids = await self.store.list_associations("contacts", contact_id, "tasks")
        if not task_ids:
            return []
        objects = await self.store.batch_read("tasks", task_ids, TASK_PROPERTIES)

        tasks = []
        for obj in objects:
            task = task_from_properties(obj["id"], obj.get("properties") or {})
            if looks_like_refill(task.subject, task.raw_subject):
                tasks.append(task)
        tasks.sort(key=_task_time, reverse=True)
        return tasks

    async def history(self, email: str) -> list[RefillTask]:
        """Refill history for a customer email.

        Raises:
            ContactNotFoundError: If no contact has this email
        """
        contact = await self.contacts.require(email)
        return await self.tasks_for_contact(str(contact["id"]))

    async def get_task(self, task_id: str) -> RefillTask:
        """Read one task.

        Raises:
            TaskNotFoundError: If the CRM has no such task
        """
        objects = await self.store.batch_read("tasks", [task_id], TASK_PROPERTIES)
        if not objects:
            raise TaskNotFoundError(task_id)
        obj = objects[0]
        return task_from_properties(obj["id"], obj.get("properties") or {})

    async def update(
        self,
        task_id: str,
        subject: Optional[str] = None,
        body: Optional[str] = None,
        cancel: bool = False,
        status: Optional[Union[str, TaskStatus]] = None,
    ) -> RefillTask:
        """Edit a booking, re-encoding its status prefix.

        Precedence for the new status: ``cancel``, then ``status``, then a
        prefix already on ``subject``, then the task's current status.
        """
        task_id = (task_id or "").strip()
        if not task_id:
            raise MissingFieldError("taskId")

        current = await self.get_task(task_id)
        parsed = parse_status(subject) if subject else None

        if cancel:
            code = "2"
        elif status is not None:
            try:
                code = status_code(status)
            except ValueError as e:
                raise InvalidFieldError("status", str(e))
        elif parsed is not None and parsed.clean_subject != subject:
            code = parsed.code
        else:
            code = current.status_code

        text = parsed.clean_subject if parsed is not None else current.subject
        properties: dict[str, Any] = {"hs_task_subject": format_subject(code, text)}
        if body is not None:
            properties["hs_task_body"] = body
        if code == "1":
            properties["hs_task_status"] = "COMPLETED"

        await self.store.patch("tasks", task_id, properties)
        logger.info("Updated refill task %s (status %s)", task_id, code)

        merged = {
            "hs_task_subject": properties["hs_task_subject"],
            "hs_task_body": properties.get("hs_task_body", current.body),
            "hs_timestamp": to_millis(current.timestamp),
        }
        return task_from_properties(task_id, merged)
