"""Job listing service for facility job postings."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from turf_talent.database import atomic
from turf_talent.errors import AuthorizationError, NotFoundError, ValidationError
from turf_talent.models.facility_profile import FacilityProfile
from turf_talent.models.job_listing import JobListing
from turf_talent.schemas.job import JobListingCreate, JobListingUpdate, JobStatus
from turf_talent.schemas.user import CurrentUser, UserRole
from turf_talent.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


class JobListingService:
    """
    Service for creating and browsing job listings.

    Facilities manage their own listings, drafts included; candidates only
    ever see open listings.
    """

    def __init__(self, db: Session) -> None:
        """
        Initialize the job listing service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def _get(self, job_id: int) -> JobListing:
        job = self.db.query(JobListing).filter(JobListing.id == job_id).first()
        if job is None:
            raise NotFoundError("Job", job_id)
        return job

    def _get_owned(self, user: CurrentUser, job_id: int) -> JobListing:
        job = self._get(job_id)
        if not user.is_admin and job.user_id != user.user_id:
            raise AuthorizationError("You can only manage your own job listings")
        return job

    def list_jobs(self, user: CurrentUser) -> list[JobListing]:
        """
        List the listings visible to the caller, newest first.

        Facilities see all of their own listings; admins see everything that
        is not deleted; candidates see open listings.
        """
        query = self.db.query(JobListing)
        if user.role == UserRole.FACILITY:
            query = query.filter(JobListing.user_id == user.user_id)
        elif user.is_admin:
            query = query.filter(JobListing.status != JobStatus.DELETED.value)
        else:
            query = query.filter(JobListing.status == JobStatus.OPEN.value)
        return query.order_by(JobListing.created_at.desc(), JobListing.id.desc()).all()

    def get_job(self, user: CurrentUser, job_id: int) -> JobListing:
        """
        Fetch a listing the caller may see.

        Raises:
            NotFoundError: If it does not exist, or is not open and not the caller's
        """
        job = self._get(job_id)
        if job.status != JobStatus.OPEN.value and not user.is_admin and job.user_id != user.user_id:
            raise NotFoundError("Job", job_id)
        return job

    def create_job(self, user: CurrentUser, data: JobListingCreate) -> JobListing:
        """
        Create a listing owned by the calling facility.

        The listing is attached to the facility's profile, which must exist.

        Raises:
            AuthorizationError: If the caller is not a facility
            NotFoundError: If the facility has not created its profile yet
            ValidationError: If the title is empty
        """
        if user.role != UserRole.FACILITY:
            raise AuthorizationError("Only facilities can post jobs")
        title = data.title.strip()
        if not title:
            raise ValidationError("Job title is required", field="title")
        profile = self.db.get(FacilityProfile, user.user_id)
        if profile is None:
            raise NotFoundError("Facility profile", user.user_id)

        now = utc_now()
        job = JobListing(
            user_id=user.user_id,
            facility_profile_id=profile.user_id,
            title=title,
            description=data.description,
            location=data.location,
            job_type=data.type.value,
            salary_amount=data.salary.amount,
            salary_type=data.salary.type.value,
            salary_currency=data.salary.currency.value,
            requirements=list(data.requirements),
            required_skills=list(data.required_skills),
            status=data.status.value,
            application_count=0,
            created_at=now,
            updated_at=now,
        )
        with atomic(self.db):
            self.db.add(job)
        self.db.refresh(job)
        logger.info("Job %s created by %s: %s", job.id, user.user_id, job.title)
        return job

    def update_job(self, user: CurrentUser, job_id: int, data: JobListingUpdate) -> JobListing:
        """
        Merge a partial update into a listing.

        Raises:
            NotFoundError: If the listing does not exist
            AuthorizationError: If the caller does not own it
            ValidationError: If the update blanks the title
        """
        job = self._get_owned(user, job_id)
        changes = data.model_dump(exclude_unset=True, mode="json")

        if "title" in changes:
            title = (changes["title"] or "").strip()
            if not title:
                raise ValidationError("Job title is required", field="title")
            changes["title"] = title
        if "type" in changes:
            changes["job_type"] = changes.pop("type")
        salary = changes.pop("salary", None)
        if salary is not None:
            changes["salary_amount"] = salary["amount"]
            changes["salary_type"] = salary["type"]
            changes["salary_currency"] = salary["currency"]

        with atomic(self.db):
            for field, value in changes.items():
                if value is not None:
                    setattr(job, field, value)
            job.updated_at = utc_now()
        self.db.refresh(job)
        logger.info("Job %s updated by %s", job_id, user.user_id)
        return job

    def delete_job(self, user: CurrentUser, job_id: int) -> None:
        """
        Delete a listing together with its applications.

        Raises:
            NotFoundError: If the listing does not exist
            AuthorizationError: If the caller does not own it
        """
        # Imported here: applications depend on listings, not the other way round
        from turf_talent.models.job_application import JobApplication

        job = self._get_owned(user, job_id)
        with atomic(self.db):
            self.db.query(JobApplication).filter(JobApplication.job_id == job_id).delete()
            self.db.delete(job)
        logger.info("Job %s deleted by %s", job_id, user.user_id)
