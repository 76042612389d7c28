"""Job listing Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class JobType(str, Enum):
    """Employment type enumeration."""

    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    TEMPORARY = "temporary"


class SalaryType(str, Enum):
    """Pay period enumeration."""

    HOURLY = "hourly"
    DAILY = "daily"
    FIXED = "fixed"


class Currency(str, Enum):
    """Supported salary currencies."""

    GBP = "GBP"
    USD = "USD"
    EUR = "EUR"


class JobStatus(str, Enum):
    """Job listing status enumeration."""

    OPEN = "open"
    CLOSED = "closed"
    FILLED = "filled"
    DRAFT = "draft"
    DELETED = "deleted"


class SalaryInfo(BaseModel):
    """Salary information schema."""

    amount: float = Field(ge=0)
    type: SalaryType = SalaryType.HOURLY
    currency: Currency = Currency.GBP


class JobListingCreate(BaseModel):
    """Schema for creating a job listing."""

    title: str
    description: str = ""
    location: str = ""
    type: JobType = JobType.FULL_TIME
    salary: SalaryInfo
    requirements: list[str] = Field(default_factory=list)
    required_skills: list[int] = Field(default_factory=list)
    status: JobStatus = JobStatus.DRAFT


class JobListingUpdate(BaseModel):
    """Schema for a partial job listing update."""

    title: str | None = None
    description: str | None = None
    location: str | None = None
    type: JobType | None = None
    salary: SalaryInfo | None = None
    requirements: list[str] | None = None
    required_skills: list[int] | None = None
    status: JobStatus | None = None


class JobListing(BaseModel):
    """Complete job listing schema."""

    id: int
    user_id: str
    facility_profile_id: str
    title: str
    description: str
    location: str
    type: JobType
    salary: SalaryInfo
    requirements: list[str]
    required_skills: list[int]
    status: JobStatus
    application_count: int
    created_at: datetime
    updated_at: datetime
