"""Backfill skill claims from the skills listed on candidate profiles.

Profiles created before the claim ledger existed carry skill entries with no
matching claim. This script creates one claim per such entry (keeping the
entry's status, defaulting to pending) and normalizes the projection so every
entry has an explicit status. Running it again only fills gaps.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from turf_talent.database import SessionLocal, atomic
from turf_talent.models.candidate_profile import CandidateProfile
from turf_talent.models.skill_claim import SkillClaim
from turf_talent.schemas.skill_claim import SkillStatus
from turf_talent.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


def migrate_skill_claims(db: Session) -> int:
    """
    Create missing claims for projection entries.

    Args:
        db: SQLAlchemy database session

    Returns:
        Number of claims created
    """
    created = 0
    profiles = db.query(CandidateProfile).all()
    for profile in profiles:
        if not profile.skills:
            continue

        claimed = {
            skill_id
            for (skill_id,) in db.query(SkillClaim.skill_id)
            .filter(SkillClaim.user_id == profile.user_id)
            .all()
        }
        with atomic(db):
            skills: list[dict] = []
            for entry in profile.skills:
                status = SkillStatus.coerce(entry.get("status"))
                skills.append({**entry, "status": status.value})
                skill_id = entry.get("id")
                if skill_id is None or skill_id in claimed:
                    continue
                now = utc_now()
                db.add(
                    SkillClaim(
                        user_id=profile.user_id,
                        skill_id=skill_id,
                        status=status.value,
                        verified_by=entry.get("verified_by"),
                        rejection_reason=entry.get("rejection_reason"),
                        created_at=now,
                        updated_at=now,
                    )
                )
                claimed.add(skill_id)
                created += 1
            profile.skills = skills

    logger.info("Skill claims migration completed: %d claim(s) created", created)
    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    session = SessionLocal()
    try:
        migrate_skill_claims(session)
    finally:
        session.close()
