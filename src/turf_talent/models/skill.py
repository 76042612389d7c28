"""Skill database model."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text

from turf_talent.database import Base
from turf_talent.utils.timestamps import utc_now


class Skill(Base):
    """
    Skill model representing a claimable skill in the catalog.

    Attributes:
        id: Primary key
        name: Skill name (unique)
        category: Skill category (greenkeeping, machinery, irrigation, ...)
        description: Free-text description shown to candidates
        requires_evidence: Whether claims must carry at least one evidence file
        accepted_file_types: Extension patterns accepted as evidence (e.g. ".pdf")
        created_at: Timestamp when record was created
        updated_at: Timestamp of the last administrative edit
    """

    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True, index=True)
    category = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    requires_evidence = Column(Boolean, default=True, nullable=False)
    accepted_file_types = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    def __repr__(self) -> str:
        """String representation of Skill."""
        return f"<Skill(id={self.id}, name='{self.name}', category='{self.category}')>"
