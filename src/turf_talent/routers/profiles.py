"""Candidate and facility profiles API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from turf_talent.database import get_db
from turf_talent.dependencies import get_current_user
from turf_talent.schemas.facility import FacilityProfile, FacilityProfileUpdate
from turf_talent.schemas.profile import CandidateProfile, CandidateProfileUpdate
from turf_talent.schemas.user import CurrentUser
from turf_talent.services.candidate_profiles import CandidateProfileService
from turf_talent.services.facility_profiles import FacilityProfileService

router = APIRouter()


@router.get("/profiles", response_model=list[CandidateProfile])
def list_profiles(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[CandidateProfile]:
    """List candidate profiles (facilities and admins)."""
    profiles = CandidateProfileService(db).list_profiles(user)
    return [CandidateProfile.model_validate(p) for p in profiles]


@router.get("/profiles/me", response_model=CandidateProfile)
def get_my_profile(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> CandidateProfile:
    """Get the caller's own profile, including the skill projection."""
    return CandidateProfile.model_validate(CandidateProfileService(db).get_profile(user.user_id))


@router.put("/profiles/me", response_model=CandidateProfile)
def save_my_profile(
    data: CandidateProfileUpdate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> CandidateProfile:
    """
    Create or update the caller's profile.

    Skill statuses in the request are ignored; they only change through
    the claim review workflow.
    """
    profile = CandidateProfileService(db).upsert_profile(user, data)
    return CandidateProfile.model_validate(profile)


@router.get("/profiles/facility/me", response_model=FacilityProfile)
def get_my_facility_profile(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> FacilityProfile:
    """Get the calling facility's profile."""
    return FacilityProfile.model_validate(FacilityProfileService(db).get_profile(user.user_id))


@router.put("/profiles/facility/me", response_model=FacilityProfile)
def save_my_facility_profile(
    data: FacilityProfileUpdate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> FacilityProfile:
    """Create or update the calling facility's profile."""
    profile = FacilityProfileService(db).upsert_profile(user, data)
    return FacilityProfile.model_validate(profile)


@router.get("/profiles/facility/{user_id}", response_model=FacilityProfile)
def get_facility_profile(
    user_id: str,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> FacilityProfile:
    """Get any facility's public profile."""
    return FacilityProfile.model_validate(FacilityProfileService(db).get_profile(user_id))


@router.get("/profiles/{user_id}", response_model=CandidateProfile)
def get_profile(
    user_id: str,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> CandidateProfile:
    """
    Get a candidate's profile.

    Raises:
        HTTPException 404: If the candidate has no profile.
    """
    return CandidateProfile.model_validate(CandidateProfileService(db).get_profile(user_id))
