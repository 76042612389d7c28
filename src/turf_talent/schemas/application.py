"""Job application Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ApplicationStatus(str, Enum):
    """Job application status enumeration."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class JobApplicationCreate(BaseModel):
    """Schema for applying to a job."""

    job_id: int
    cover_letter: str | None = None
    attachments: list[str] = Field(default_factory=list)


class JobApplicationUpdate(BaseModel):
    """Schema for updating an application; who may set what is checked by the service."""

    status: ApplicationStatus | None = None
    notes: str | None = None
    cover_letter: str | None = None


class JobApplication(BaseModel):
    """Complete job application schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    job_id: int
    applicant_id: str
    facility_profile_id: str
    status: ApplicationStatus
    cover_letter: str | None = None
    attachments: list[str] = Field(default_factory=list)
    notes: str | None = None
    applied_at: datetime
    updated_at: datetime
