"""Request and response bodies for the REST API."""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from refillbff.models import ContactInfo, RefillTask, VehicleRecord


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Vehicles
# ─────────────────────────────────────────────────────────────────────────────


class VehicleSyncRequest(ApiModel):
    email: str = Field(..., min_length=1)
    vehicles: list[VehicleRecord]


class VehicleListResponse(ApiModel):
    email: str
    vehicles: list[VehicleRecord]


# ─────────────────────────────────────────────────────────────────────────────
# Contacts
# ─────────────────────────────────────────────────────────────────────────────


class Appointment(ApiModel):
    start_iso: Optional[str] = Field(default=None, alias="startISO")
    location: Optional[str] = None


class RegisterContactRequest(ContactInfo):
    """The app's original signup payload."""

    car_details: Optional[dict[str, Any]] = None
    appointment: Optional[Appointment] = None


class ContactUpsertResponse(ApiModel):
    ok: bool = True
    contact_id: str
    created: bool


class RegisterContactResponse(ApiModel):
    ok: bool = True
    contact_id: str
    task_id: Optional[str] = None


# ─────────────────────────────────────────────────────────────────────────────
# Refills
# ─────────────────────────────────────────────────────────────────────────────


class BookRefillRequest(ApiModel):
    email: str = Field(..., min_length=1)
    service_location: str = Field(..., min_length=1)
    scheduled_at: Optional[Union[int, str]] = None
    vehicle: Optional[Union[VehicleRecord, str]] = None


class UpdateRefillRequest(ApiModel):
    task_id: str = Field(..., min_length=1)
    subject: Optional[str] = None
    body: Optional[str] = None
    cancel: bool = False
    status: Optional[str] = None


class RefillResponse(ApiModel):
    ok: bool = True
    task: RefillTask


class RefillHistoryResponse(ApiModel):
    email: str
    refills: list[RefillTask]


# ─────────────────────────────────────────────────────────────────────────────
# Payments
# ─────────────────────────────────────────────────────────────────────────────


class PaymentIntentRequest(ApiModel):
    email: str = Field(..., min_length=1)
    name: str = ""
    amount: int
    currency: str = "usd"


class CustomerRequest(ApiModel):
    email: str = Field(..., min_length=1)
    name: str = ""


class PortalRequest(CustomerRequest):
    return_url: Optional[str] = None


# ─────────────────────────────────────────────────────────────────────────────
# Push
# ─────────────────────────────────────────────────────────────────────────────


class PushRegisterRequest(ApiModel):
    email: str = Field(..., min_length=1)
    token: str = Field(..., min_length=1)


class PushTokensResponse(ApiModel):
    email: str
    tokens: list[str]
