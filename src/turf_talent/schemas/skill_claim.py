"""Skill claim and verification Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SkillStatus(str, Enum):
    """Verification status of a skill claim."""

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        """Verified and rejected claims can no longer change status."""
        return self is not SkillStatus.PENDING

    @classmethod
    def coerce(cls, value: Any) -> "SkillStatus":
        """
        Read a stored status, treating a missing one as pending.

        Args:
            value: Raw status from storage (string, enum or None)

        Returns:
            SkillStatus member

        Raises:
            ValueError: If the value is present but not a known status

        Examples:
            >>> SkillStatus.coerce(None)
            <SkillStatus.PENDING: 'pending'>
            >>> SkillStatus.coerce("verified")
            <SkillStatus.VERIFIED: 'verified'>
        """
        if value is None or value == "":
            return cls.PENDING
        return cls(value)


class SkillEvidence(BaseModel):
    """Schema for one evidence file attached to a claim."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    file_url: str
    file_name: str
    file_type: str
    uploaded_at: datetime
    description: str | None = None
    download_url: str | None = None


class SkillClaim(BaseModel):
    """Complete skill claim schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    skill_id: int
    status: SkillStatus
    evidence: list[SkillEvidence] = Field(default_factory=list)
    verified_by: str | None = None
    verified_at: datetime | None = None
    rejected_at: datetime | None = None
    rejection_reason: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value: Any) -> SkillStatus:
        return SkillStatus.coerce(value)


class ClaimStatusUpdate(BaseModel):
    """Schema for an admin verification decision."""

    status: SkillStatus
    rejection_reason: str | None = None


class ProjectedSkill(BaseModel):
    """One entry of the skill projection embedded in a candidate profile."""

    id: int
    status: SkillStatus = SkillStatus.PENDING
    verified_by: str | None = None
    verified_at: datetime | None = None
    rejection_reason: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value: Any) -> SkillStatus:
        return SkillStatus.coerce(value)


class VerificationMetrics(BaseModel):
    """Aggregate verification statistics derived from all claims."""

    total_verified: int = 0
    total_rejected: int = 0
    total_pending: int = 0
    # Mean of verified_at - created_at, in seconds
    average_verification_time: float = 0.0
    verifications_by_skill: dict[int, int] = Field(default_factory=dict)
