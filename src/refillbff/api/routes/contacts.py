"""Contact endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from refillbff.api.deps import get_services
from refillbff.api.schemas import (
    ContactUpsertResponse,
    RegisterContactRequest,
    RegisterContactResponse,
)
from refillbff.core.services import Services
from refillbff.models import ContactInfo, ContactStatus

router = APIRouter(prefix="/contacts", tags=["Contacts"])

# Path the first app builds call; kept for old installs
legacy_router = APIRouter(tags=["Contacts"])


@router.post("", response_model=ContactUpsertResponse)
async def upsert_contact(
    body: ContactInfo,
    response: Response,
    services: Services = Depends(get_services),
):
    """Create or update a contact by email."""
    contact_id, created = await services.contacts.upsert(body)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return ContactUpsertResponse(contact_id=contact_id, created=created)


@router.get("/status", response_model=ContactStatus)
async def contact_status(
    email: str = Query(...),
    services: Services = Depends(get_services),
):
    """Whether the customer exists, with vehicle and open refill counts."""
    return await services.contact_status(email)


@legacy_router.post(
    "/api/hubspot/contacts",
    response_model=RegisterContactResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_contact(
    body: RegisterContactRequest,
    services: Services = Depends(get_services),
):
    """Upsert a contact with optional car details and appointment."""
    info = ContactInfo(
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )
    appointment = body.appointment.model_dump(by_alias=True) if body.appointment else None
    contact_id, task = await services.register_contact(info, body.car_details, appointment)
    return RegisterContactResponse(contact_id=contact_id, task_id=task.id if task else None)
