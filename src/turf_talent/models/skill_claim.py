"""SkillClaim and SkillEvidence database models."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from turf_talent.database import Base
from turf_talent.utils.timestamps import utc_now


class SkillClaim(Base):
    """
    SkillClaim model: a candidate's claim to hold a catalog skill.

    ``skill_id`` is deliberately not a foreign key: catalog entries can be
    deleted while claims that reference them remain.

    Attributes:
        id: Primary key
        user_id: Owning candidate (immutable)
        skill_id: Claimed catalog skill
        status: pending, verified or rejected
        verified_by: Admin who reviewed the claim
        verified_at: Timestamp of verification
        rejected_at: Timestamp of rejection
        rejection_reason: Reason supplied with a rejection
        created_at: Timestamp when record was created
        updated_at: Timestamp of the last change
        evidence: Uploaded evidence, in upload order
    """

    __tablename__ = "skill_claims"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)
    skill_id = Column(Integer, nullable=False, index=True)
    status = Column(String, default="pending", nullable=True)
    verified_by = Column(String, nullable=True)
    verified_at = Column(DateTime, nullable=True)
    rejected_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, nullable=False)

    evidence = relationship(
        "SkillEvidence",
        back_populates="claim",
        order_by="SkillEvidence.position",
        cascade="all, delete-orphan",
    )

    # One claim per candidate and skill
    __table_args__ = (UniqueConstraint("user_id", "skill_id", name="_user_skill_claim_uc"),)

    def __repr__(self) -> str:
        """String representation of SkillClaim."""
        return (
            f"<SkillClaim(id={self.id}, user_id='{self.user_id}', "
            f"skill_id={self.skill_id}, status='{self.status}')>"
        )


class SkillEvidence(Base):
    """
    SkillEvidence model: one uploaded file attached to a claim.

    Attributes:
        id: Opaque evidence identifier
        claim_id: Owning claim
        position: Zero-based upload order within the claim
        file_url: Locator returned by the evidence store
        file_name: Original file name
        file_type: MIME type reported by the uploader
        description: Optional note supplied with the file
        uploaded_at: Timestamp of the upload
    """

    __tablename__ = "skill_evidence"

    id = Column(String, primary_key=True)
    claim_id = Column(Integer, ForeignKey("skill_claims.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    file_url = Column(String, nullable=False)
    file_name = Column(String, nullable=False)
    file_type = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    uploaded_at = Column(DateTime, default=utc_now, nullable=False)

    claim = relationship("SkillClaim", back_populates="evidence")

    def __repr__(self) -> str:
        """String representation of SkillEvidence."""
        return f"<SkillEvidence(id='{self.id}', claim_id={self.claim_id}, file_name='{self.file_name}')>"
