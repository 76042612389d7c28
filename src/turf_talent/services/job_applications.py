"""Job application service."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from turf_talent.database import atomic
from turf_talent.errors import (
    AuthorizationError,
    DuplicateApplicationError,
    NotFoundError,
    ValidationError,
)
from turf_talent.models.job_application import JobApplication
from turf_talent.models.job_listing import JobListing
from turf_talent.schemas.application import JobApplicationCreate, JobApplicationUpdate
from turf_talent.schemas.job import JobStatus
from turf_talent.schemas.user import CurrentUser, UserRole
from turf_talent.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


class JobApplicationService:
    """
    Service for candidate applications to job listings.

    Keeps ``JobListing.application_count`` in step with the applications
    table by changing both in one transaction.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _get(self, application_id: int) -> JobApplication:
        application = (
            self.db.query(JobApplication).filter(JobApplication.id == application_id).first()
        )
        if application is None:
            raise NotFoundError("Application", application_id)
        return application

    def list_applications(self, user: CurrentUser, job_id: int | None = None) -> list[JobApplication]:
        """
        List applications visible to the caller, newest first.

        Facilities see applications to their own jobs (optionally one job);
        candidates see their own; admins see all.

        Raises:
            AuthorizationError: If a facility asks for another facility's job
        """
        query = self.db.query(JobApplication)
        if user.role == UserRole.FACILITY:
            if job_id is not None:
                job = self.db.query(JobListing).filter(JobListing.id == job_id).first()
                if job is None:
                    raise NotFoundError("Job", job_id)
                if job.user_id != user.user_id:
                    raise AuthorizationError("You can only view applications to your own jobs")
            query = query.filter(JobApplication.facility_profile_id == user.user_id)
        elif not user.is_admin:
            query = query.filter(JobApplication.applicant_id == user.user_id)
        if job_id is not None:
            query = query.filter(JobApplication.job_id == job_id)
        return query.order_by(JobApplication.applied_at.desc(), JobApplication.id.desc()).all()

    def create_application(self, user: CurrentUser, data: JobApplicationCreate) -> JobApplication:
        """
        Apply to an open job as the calling candidate.

        Raises:
            AuthorizationError: If the caller is not a candidate
            NotFoundError: If the job does not exist
            ValidationError: If the job is not open
            DuplicateApplicationError: If the caller already applied
        """
        if user.role != UserRole.CANDIDATE:
            raise AuthorizationError("Only candidates can apply to jobs")

        job = self.db.query(JobListing).filter(JobListing.id == data.job_id).first()
        if job is None:
            raise NotFoundError("Job", data.job_id)
        if job.status != JobStatus.OPEN.value:
            raise ValidationError("This job is not accepting applications", field="job_id")

        existing = (
            self.db.query(JobApplication)
            .filter(JobApplication.job_id == job.id, JobApplication.applicant_id == user.user_id)
            .first()
        )
        if existing is not None:
            raise DuplicateApplicationError(job.id)

        now = utc_now()
        application = JobApplication(
            job_id=job.id,
            applicant_id=user.user_id,
            facility_profile_id=job.facility_profile_id,
            status="pending",
            cover_letter=data.cover_letter,
            attachments=list(data.attachments),
            applied_at=now,
            updated_at=now,
        )
        try:
            with atomic(self.db):
                self.db.add(application)
                self.db.query(JobListing).filter(JobListing.id == job.id).update(
                    {JobListing.application_count: JobListing.application_count + 1},
                    synchronize_session=False,
                )
        except IntegrityError as exc:
            raise DuplicateApplicationError(job.id) from exc

        self.db.refresh(application)
        logger.info("Application %s created by %s for job %s", application.id, user.user_id, job.id)
        return application

    def update_application(
        self, user: CurrentUser, application_id: int, data: JobApplicationUpdate
    ) -> JobApplication:
        """
        Update an application.

        The facility that owns the job may change status and notes; the
        applicant may change the cover letter.

        Raises:
            NotFoundError: If the application does not exist
            AuthorizationError: If the caller may not make the requested change
        """
        application = self._get(application_id)
        changes = data.model_dump(exclude_unset=True, mode="json")

        is_facility = user.is_admin or application.facility_profile_id == user.user_id
        is_applicant = application.applicant_id == user.user_id
        if not (is_facility or is_applicant):
            raise AuthorizationError("You cannot modify this application")
        if ({"status", "notes"} & changes.keys()) and not is_facility:
            raise AuthorizationError("Only the hiring facility can change status or notes")
        if "cover_letter" in changes and not is_applicant:
            raise AuthorizationError("Only the applicant can change the cover letter")

        with atomic(self.db):
            for field, value in changes.items():
                if field == "status" and value is None:
                    continue
                setattr(application, field, value)
            application.updated_at = utc_now()
        self.db.refresh(application)
        logger.info("Application %s updated by %s", application_id, user.user_id)
        return application

    def delete_application(self, user: CurrentUser, application_id: int) -> None:
        """
        Withdraw an application.

        Raises:
            NotFoundError: If the application does not exist
            AuthorizationError: If the caller is neither the applicant nor an admin
        """
        application = self._get(application_id)
        if not user.is_admin and application.applicant_id != user.user_id:
            raise AuthorizationError("You can only withdraw your own applications")

        with atomic(self.db):
            self.db.delete(application)
            self.db.query(JobListing).filter(
                JobListing.id == application.job_id, JobListing.application_count > 0
            ).update(
                {JobListing.application_count: JobListing.application_count - 1},
                synchronize_session=False,
            )
        logger.info("Application %s withdrawn by %s", application_id, user.user_id)
