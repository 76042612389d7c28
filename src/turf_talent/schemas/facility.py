"""Facility profile Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FacilityType(str, Enum):
    """Kind of facility."""

    GOLF_COURSE = "golf_course"
    SPORTS_FACILITY = "sports_facility"
    OTHER = "other"


class Address(BaseModel):
    """Postal address."""

    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""


class OperatingHours(BaseModel):
    """Opening and closing time for one day, as ``HH:MM`` strings."""

    open: str
    close: str


class FacilityProfileUpdate(BaseModel):
    """Schema for creating or updating the caller's facility profile."""

    name: str | None = None
    type: FacilityType | None = None
    email: str | None = None
    phone: str | None = None
    address: Address | None = None
    website: str | None = None
    description: str | None = None
    facilities: list[str] | None = None
    amenities: list[str] | None = None
    photos: list[str] | None = None
    operating_hours: dict[str, OperatingHours] | None = None


class FacilityProfile(BaseModel):
    """Complete facility profile schema."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    user_id: str
    name: str
    type: FacilityType = Field(validation_alias="facility_type")
    email: str | None = None
    phone: str | None = None
    address: Address = Field(default_factory=Address)
    website: str | None = None
    description: str | None = None
    facilities: list[str] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)
    photos: list[str] = Field(default_factory=list)
    operating_hours: dict[str, OperatingHours] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    @field_validator("facilities", "amenities", "photos", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return value or []

    @field_validator("address", "operating_hours", mode="before")
    @classmethod
    def none_as_default(cls, value):
        return value or {}
