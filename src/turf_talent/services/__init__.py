"""Services package."""

from turf_talent.services.candidate_profiles import CandidateProfileService
from turf_talent.services.evidence_store import EvidenceFile, EvidenceStore, LocalEvidenceStore
from turf_talent.services.facility_profiles import FacilityProfileService
from turf_talent.services.job_applications import JobApplicationService
from turf_talent.services.job_listings import JobListingService
from turf_talent.services.skill_catalog import SkillCatalogService
from turf_talent.services.skill_claims import SkillClaimService
from turf_talent.services.verification_metrics import VerificationMetricsService

__all__ = [
    "CandidateProfileService",
    "EvidenceFile",
    "EvidenceStore",
    "FacilityProfileService",
    "JobApplicationService",
    "JobListingService",
    "LocalEvidenceStore",
    "SkillCatalogService",
    "SkillClaimService",
    "VerificationMetricsService",
]
