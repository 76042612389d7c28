"""JobApplication database model."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint

from turf_talent.database import Base
from turf_talent.utils.timestamps import utc_now


class JobApplication(Base):
    """
    JobApplication model linking a candidate to a job listing.

    Attributes:
        id: Primary key
        job_id: Foreign key to job_listings table
        applicant_id: Candidate who applied
        facility_profile_id: Facility that owns the job (copied at apply time)
        status: pending, reviewed, accepted or rejected
        cover_letter: Optional cover letter
        attachments: Optional attachment locators
        notes: Facility-side notes
        applied_at: Timestamp when the application was made
        updated_at: Timestamp of the last change
    """

    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey("job_listings.id"), nullable=False, index=True)
    applicant_id = Column(String, nullable=False, index=True)
    facility_profile_id = Column(String, nullable=False, index=True)
    status = Column(String, default="pending", nullable=False)
    cover_letter = Column(Text, nullable=True)
    attachments = Column(JSON, default=list, nullable=False)
    notes = Column(Text, nullable=True)
    applied_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, nullable=False)

    # One application per candidate and job
    __table_args__ = (UniqueConstraint("job_id", "applicant_id", name="_job_applicant_uc"),)

    def __repr__(self) -> str:
        """String representation of JobApplication."""
        return (
            f"<JobApplication(id={self.id}, job_id={self.job_id}, "
            f"applicant_id='{self.applicant_id}', status='{self.status}')>"
        )
