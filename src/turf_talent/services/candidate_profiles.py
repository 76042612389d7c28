"""Candidate profiles and the skill status projection embedded in them."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from turf_talent.database import atomic
from turf_talent.errors import AuthorizationError, NotFoundError, ValidationError
from turf_talent.models.candidate_profile import CandidateProfile
from turf_talent.models.skill_claim import SkillClaim
from turf_talent.schemas.profile import CandidateProfileUpdate
from turf_talent.schemas.skill_claim import SkillStatus
from turf_talent.schemas.user import CurrentUser, UserRole
from turf_talent.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


def projection_entry(
    skill_id: int,
    status: SkillStatus,
    verified_by: str | None = None,
    verified_at: datetime | None = None,
    rejection_reason: str | None = None,
) -> dict:
    """
    Build one JSON-serializable projection entry.

    Optional keys are only present when set, matching what profile readers
    expect from entries written at claim time.
    """
    entry: dict = {"id": skill_id, "status": status.value}
    if verified_by is not None:
        entry["verified_by"] = verified_by
    if verified_at is not None:
        entry["verified_at"] = verified_at.isoformat()
    if rejection_reason is not None:
        entry["rejection_reason"] = rejection_reason
    return entry


def claim_entry(claim: SkillClaim) -> dict:
    """Build the projection entry that mirrors a claim's current status."""
    status = SkillStatus.coerce(claim.status)
    rejected = status == SkillStatus.REJECTED
    return projection_entry(
        claim.skill_id,
        status,
        claim.verified_by,
        claim.rejected_at if rejected else claim.verified_at,
        claim.rejection_reason if rejected else None,
    )


class CandidateProfileService:
    """
    Service for candidate profiles and their skill projection.

    The projection (``CandidateProfile.skills``) is written only by the
    claim ledger through ``record_claim`` / ``record_status``; those methods
    never commit, so the ledger can place them in its own transaction.
    """

    def __init__(self, db: Session) -> None:
        """
        Initialize the profile service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    # ------------------------------------------------------------------
    # Projection writes (called inside the ledger's transaction)
    # ------------------------------------------------------------------

    def _get_or_create(self, user_id: str) -> CandidateProfile:
        profile = self.db.get(CandidateProfile, user_id)
        if profile is None:
            now = utc_now()
            profile = CandidateProfile(
                user_id=user_id,
                certifications=[],
                skills=[],
                experience=[],
                preferences={},
                created_at=now,
                updated_at=now,
            )
            self.db.add(profile)
        return profile

    def record_claim(self, user_id: str, skill_id: int) -> None:
        """Put a pending entry for ``skill_id`` into the owner's projection."""
        profile = self._get_or_create(user_id)
        skills = [s for s in (profile.skills or []) if s.get("id") != skill_id]
        skills.append(projection_entry(skill_id, SkillStatus.PENDING))
        profile.skills = skills
        profile.updated_at = utc_now()

    def record_status(
        self,
        user_id: str,
        skill_id: int,
        status: SkillStatus,
        verified_by: str | None,
        verified_at: datetime | None,
        rejection_reason: str | None = None,
    ) -> None:
        """Mirror a claim's new status into the owner's projection."""
        profile = self._get_or_create(user_id)
        entry = projection_entry(skill_id, status, verified_by, verified_at, rejection_reason)
        skills = [entry if s.get("id") == skill_id else s for s in (profile.skills or [])]
        if entry not in skills:
            skills.append(entry)
        profile.skills = skills
        profile.updated_at = utc_now()

    def sync_projection(self, user_id: str) -> CandidateProfile:
        """
        Rebuild a candidate's projection from their claims.

        Entries for skills without a claim are kept as they are.

        Returns:
            The updated profile
        """
        claims = self.db.query(SkillClaim).filter(SkillClaim.user_id == user_id).all()
        with atomic(self.db):
            profile = self._get_or_create(user_id)
            claimed = {claim.skill_id: claim for claim in claims}
            skills = [s for s in (profile.skills or []) if s.get("id") not in claimed]
            skills.extend(claim_entry(claim) for claim in claims)
            profile.skills = skills
            profile.updated_at = utc_now()
        self.db.refresh(profile)
        return profile

    # ------------------------------------------------------------------
    # Profile reads and edits
    # ------------------------------------------------------------------

    def get_profile(self, user_id: str) -> CandidateProfile:
        """
        Fetch a candidate profile.

        Raises:
            NotFoundError: If the candidate has no profile
        """
        profile = self.db.get(CandidateProfile, user_id)
        if profile is None:
            raise NotFoundError("Candidate profile", user_id)
        return profile

    def list_profiles(self, user: CurrentUser) -> list[CandidateProfile]:
        """
        List every candidate profile, most recently updated first.

        Raises:
            AuthorizationError: If the caller is a candidate
        """
        if user.role == UserRole.CANDIDATE:
            raise AuthorizationError("Only facilities and admins can browse candidates")
        return self.db.query(CandidateProfile).order_by(CandidateProfile.updated_at.desc()).all()

    def upsert_profile(self, user: CurrentUser, data: CandidateProfileUpdate) -> CandidateProfile:
        """
        Create or update the caller's own profile.

        Skill statuses are never taken from input. A listed skill keeps its
        projection entry, or mirrors its claim when the entry is missing.
        Skills backed by a claim stay on the profile even when omitted from
        the form. A skill only joins the profile through a claim, so listing
        one that has neither an entry nor a claim is an error.

        Raises:
            AuthorizationError: If the caller is not a candidate
            ValidationError: If a listed skill was never claimed
        """
        if user.role != UserRole.CANDIDATE:
            raise AuthorizationError("Only candidates have candidate profiles")

        changes = data.model_dump(exclude_unset=True, mode="json", exclude={"skills"})
        skills: list[dict] | None = None
        if data.skills is not None:
            current = self.db.get(CandidateProfile, user.user_id)
            existing = {s.get("id"): s for s in (current.skills or [])} if current else {}
            claims = {
                claim.skill_id: claim
                for claim in self.db.query(SkillClaim).filter(SkillClaim.user_id == user.user_id)
            }
            skills = []
            for skill_id in [ref.id for ref in data.skills] + list(claims):
                if any(s["id"] == skill_id for s in skills):
                    continue
                if skill_id in existing:
                    skills.append(existing[skill_id])
                elif skill_id in claims:
                    skills.append(claim_entry(claims[skill_id]))
                else:
                    raise ValidationError(
                        f"Skill {skill_id} must be claimed with evidence before it is listed",
                        field="skills",
                    )

        with atomic(self.db):
            profile = self._get_or_create(user.user_id)
            for field, value in changes.items():
                setattr(profile, field, value)
            if skills is not None:
                profile.skills = skills

            profile.updated_at = utc_now()

        self.db.refresh(profile)
        logger.info("Candidate profile %s saved", user.user_id)
        return profile
