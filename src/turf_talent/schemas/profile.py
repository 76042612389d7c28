"""Candidate profile Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from turf_talent.schemas.skill_claim import ProjectedSkill


class Availability(str, Enum):
    """How soon a candidate can start."""

    IMMEDIATE = "immediate"
    TWO_WEEKS = "two_weeks"
    MONTH_PLUS = "month_plus"


class Experience(BaseModel):
    """One work history entry."""

    title: str
    company: str
    start_date: str
    end_date: str | None = None
    current: bool = False
    description: str = ""


class Preferences(BaseModel):
    """Job search preferences."""

    job_types: list[str] = Field(default_factory=list)
    preferred_locations: list[str] = Field(default_factory=list)
    remote: bool = False


class SkillRef(BaseModel):
    """A skill listed on a profile form; status is never accepted from input."""

    id: int


class CandidateProfileUpdate(BaseModel):
    """Schema for creating or updating the caller's own profile."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    bio: str | None = None
    availability: Availability | None = None
    certifications: list[str] | None = None
    skills: list[SkillRef] | None = None
    experience: list[Experience] | None = None
    preferences: Preferences | None = None


class CandidateProfile(BaseModel):
    """Complete candidate profile schema including the skill projection."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    bio: str | None = None
    availability: Availability | None = None
    certifications: list[str] = Field(default_factory=list)
    skills: list[ProjectedSkill] = Field(default_factory=list)
    experience: list[Experience] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)
    created_at: datetime
    updated_at: datetime

    @field_validator("certifications", "skills", "experience", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return value or []

    @field_validator("preferences", mode="before")
    @classmethod
    def none_as_default(cls, value):
        return value or {}
