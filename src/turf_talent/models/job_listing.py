"""JobListing database model."""

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text

from turf_talent.database import Base
from turf_talent.utils.timestamps import utc_now


class JobListing(Base):
    """
    JobListing model representing a facility's job posting.

    Attributes:
        id: Primary key
        user_id: Facility manager who owns the listing
        facility_profile_id: Facility the listing belongs to
        title: Job title
        description: Job description
        location: Where the work takes place
        job_type: full-time, part-time, contract or temporary
        salary_amount: Pay amount
        salary_type: hourly, daily or fixed
        salary_currency: GBP, USD or EUR
        requirements: Free-text requirements
        required_skills: Catalog skill ids the role asks for
        status: open, closed, filled, draft or deleted
        application_count: Number of applications received
        created_at: Timestamp when record was created
        updated_at: Timestamp of the last change
    """

    __tablename__ = "job_listings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)
    facility_profile_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    location = Column(String, nullable=False, default="")
    job_type = Column(String, nullable=False, default="full-time")
    salary_amount = Column(Float, nullable=False, default=0)
    salary_type = Column(String, nullable=False, default="hourly")
    salary_currency = Column(String, nullable=False, default="GBP")
    requirements = Column(JSON, default=list, nullable=False)
    required_skills = Column(JSON, default=list, nullable=False)
    status = Column(String, default="draft", nullable=False, index=True)
    application_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, nullable=False)

    def __repr__(self) -> str:
        """String representation of JobListing."""
        return f"<JobListing(id={self.id}, title='{self.title}', status='{self.status}')>"
