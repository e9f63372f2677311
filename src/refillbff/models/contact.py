"""Contact data models."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic.alias_generators import to_camel


class ContactInfo(BaseModel):
    """Customer identity as sent by the app."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    email: EmailStr
    first_name: str = ""
    last_name: str = ""
    phone: str = ""

    @field_validator("first_name", "last_name", "phone", mode="before")
    @classmethod
    def blank_if_missing(cls, v: Any) -> str:
        """Missing names and phone are stored as empty strings."""
        return "" if v is None else str(v).strip()

    @property
    def display_name(self) -> str:
        """First name, last name, or the email as a last resort."""
        return (self.first_name or self.last_name or self.email).strip()

    def to_properties(self) -> dict[str, str]:
        """HubSpot contact properties."""
        return {
            "email": self.email,
            "firstname": self.first_name,
            "lastname": self.last_name,
            "phone": self.phone,
        }


class ContactStatus(BaseModel):
    """Whether a customer exists in the CRM, with summary counts."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    exists: bool
    email: str
    contact_id: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    vehicle_count: int = 0
    open_refill_count: int = 0
