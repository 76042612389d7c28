"""Database models package."""

from turf_talent.models.candidate_profile import CandidateProfile
from turf_talent.models.facility_profile import FacilityProfile
from turf_talent.models.job_application import JobApplication
from turf_talent.models.job_listing import JobListing
from turf_talent.models.skill import Skill
from turf_talent.models.skill_claim import SkillClaim, SkillEvidence

__all__ = [
    "CandidateProfile",
    "FacilityProfile",
    "JobApplication",
    "JobListing",
    "Skill",
    "SkillClaim",
    "SkillEvidence",
]
