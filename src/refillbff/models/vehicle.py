"""Vehicle record model."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

# Every key a stored note has ever used for the plate, canonical first.
PLATE_ALIASES = ("licensePlate", "plate", "lic", "license", "license_plate")

RECOGNIZED_FIELDS = ("name", "make", "model", "year", "color", "license_plate")


def text_value(value: Any) -> str:
    """Coerce a stored value to display text.

    None becomes an empty string, integral floats lose their ``.0`` and
    everything else is stringified and stripped.
    """
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


class VehicleRecord(BaseModel):
    """One vehicle associated with a customer."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", description="Display name, derived when empty")
    make: str = ""
    model: str = ""
    year: str = Field(default="", description="Kept as text, e.g. '0998' or '2019-2021'")
    color: str = ""
    license_plate: str = Field(
        default="",
        validation_alias=AliasChoices(*PLATE_ALIASES),
        serialization_alias="licensePlate",
    )

    @field_validator(*RECOGNIZED_FIELDS, mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Render every field as a string, never None."""
        return text_value(v)

    @model_validator(mode="after")
    def derive_name(self) -> "VehicleRecord":
        """Fill the display name from year, make and model."""
        if not self.name:
            self.name = " ".join(p for p in (self.year, self.make, self.model) if p)
        return self

    @property
    def recognized_field_count(self) -> int:
        """Number of recognized fields holding a value."""
        return sum(1 for f in RECOGNIZED_FIELDS if getattr(self, f))

    @property
    def display_name(self) -> str:
        """Friendly display name: name or plate."""
        return self.name or self.license_plate

    def to_payload(self) -> dict[str, str]:
        """Client-facing dict with canonical camelCase keys."""
        return self.model_dump(by_alias=True)


class SyncReport(BaseModel):
    """Outcome of replacing a customer's vehicle notes."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    deleted: list[str] = Field(default_factory=list)
    created: list[str] = Field(default_factory=list)
    failed_deletes: list[str] = Field(default_factory=list)
    vehicles: list[VehicleRecord] = Field(default_factory=list)
