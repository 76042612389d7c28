"""CandidateProfile database model."""

from sqlalchemy import JSON, Column, DateTime, String, Text

from turf_talent.database import Base
from turf_talent.utils.timestamps import utc_now


class CandidateProfile(Base):
    """
    CandidateProfile model holding a turf specialist's profile.

    ``skills`` is a projection of the candidate's skill claims: a list of
    ``{"id", "status", "verified_by", "verified_at", "rejection_reason"}``
    dicts written by the claim ledger. JSON columns are replaced, never
    mutated in place, so the ORM notices the change.

    Attributes:
        user_id: Primary key, the candidate's identity
        first_name: Given name
        last_name: Family name
        email: Contact email
        phone: Contact phone number
        location: Town or region
        bio: Free-text biography
        availability: immediate, two_weeks or month_plus
        certifications: Free-text certification names
        skills: Projection of claim statuses
        experience: Work history entries
        preferences: Job type / location preferences
        created_at: Timestamp when record was created
        updated_at: Timestamp of the last change
    """

    __tablename__ = "candidate_profiles"

    user_id = Column(String, primary_key=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    location = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    availability = Column(String, nullable=True)
    certifications = Column(JSON, default=list, nullable=False)
    skills = Column(JSON, default=list, nullable=False)
    experience = Column(JSON, default=list, nullable=False)
    preferences = Column(JSON, default=dict, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, nullable=False)

    def __repr__(self) -> str:
        """String representation of CandidateProfile."""
        return f"<CandidateProfile(user_id='{self.user_id}', skills={len(self.skills or [])})>"
