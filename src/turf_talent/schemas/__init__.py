"""Pydantic schemas package."""

from turf_talent.schemas.application import (
    ApplicationStatus,
    JobApplication,
    JobApplicationCreate,
    JobApplicationUpdate,
)
from turf_talent.schemas.facility import (
    Address,
    FacilityProfile,
    FacilityProfileUpdate,
    FacilityType,
    OperatingHours,
)
from turf_talent.schemas.job import (
    Currency,
    JobListing,
    JobListingCreate,
    JobListingUpdate,
    JobStatus,
    JobType,
    SalaryInfo,
    SalaryType,
)
from turf_talent.schemas.profile import (
    Availability,
    CandidateProfile,
    CandidateProfileUpdate,
    Experience,
    Preferences,
    SkillRef,
)
from turf_talent.schemas.skill import Skill, SkillBase, SkillCreate, SkillUpdate
from turf_talent.schemas.skill_claim import (
    ClaimStatusUpdate,
    ProjectedSkill,
    SkillClaim,
    SkillEvidence,
    SkillStatus,
    VerificationMetrics,
)
from turf_talent.schemas.user import CurrentUser, UserRole

__all__ = [
    "Address",
    "ApplicationStatus",
    "Availability",
    "CandidateProfile",
    "CandidateProfileUpdate",
    "ClaimStatusUpdate",
    "Currency",
    "CurrentUser",
    "Experience",
    "FacilityProfile",
    "FacilityProfileUpdate",
    "FacilityType",
    "JobApplication",
    "JobApplicationCreate",
    "JobApplicationUpdate",
    "JobListing",
    "JobListingCreate",
    "JobListingUpdate",
    "JobStatus",
    "JobType",
    "OperatingHours",
    "Preferences",
    "ProjectedSkill",
    "SalaryInfo",
    "SalaryType",
    "Skill",
    "SkillBase",
    "SkillClaim",
    "SkillCreate",
    "SkillEvidence",
    "SkillRef",
    "SkillStatus",
    "SkillUpdate",
    "UserRole",
    "VerificationMetrics",
]
