"""Jobs API router - list, detail, create, update and delete endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from turf_talent.database import get_db
from turf_talent.dependencies import get_current_user
from turf_talent.models.job_listing import JobListing as JobListingRecord
from turf_talent.schemas.job import (
    JobListing,
    JobListingCreate,
    JobListingUpdate,
    JobStatus,
    JobType,
    SalaryInfo,
)
from turf_talent.schemas.user import CurrentUser
from turf_talent.services.job_listings import JobListingService

router = APIRouter()


def _to_schema(job: JobListingRecord) -> JobListing:
    """
    Build the API representation of a job listing.

    Args:
        job: JobListing ORM instance

    Returns:
        JobListing schema with salary fields nested
    """
    return JobListing(
        id=job.id,
        user_id=job.user_id,
        facility_profile_id=job.facility_profile_id,
        title=job.title,
        description=job.description or "",
        location=job.location or "",
        type=JobType(job.job_type),
        salary=SalaryInfo(
            amount=job.salary_amount or 0,
            type=job.salary_type,
            currency=job.salary_currency,
        ),
        requirements=job.requirements or [],
        required_skills=job.required_skills or [],
        status=JobStatus(job.status),
        application_count=job.application_count or 0,
        created_at=job.created_at,
        updated_at=job.updated_at,
    )


@router.get("/jobs", response_model=list[JobListing])
def list_jobs(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[JobListing]:
    """
    List job listings visible to the caller.

    Returns:
        Listings ordered by most recently created.
    """
    return [_to_schema(job) for job in JobListingService(db).list_jobs(user)]


@router.get("/jobs/{job_id}", response_model=JobListing)
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> JobListing:
    """
    Get one job listing.

    Raises:
        HTTPException 404: If the job is not found.
    """
    return _to_schema(JobListingService(db).get_job(user, job_id))


@router.post("/jobs", response_model=JobListing, status_code=201)
def create_job(
    data: JobListingCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> JobListing:
    """
    Post a new job listing (facilities only).

    Raises:
        HTTPException 403: If the caller is not a facility.
    """
    return _to_schema(JobListingService(db).create_job(user, data))


@router.patch("/jobs/{job_id}", response_model=JobListing)
def update_job(
    job_id: int,
    data: JobListingUpdate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> JobListing:
    """
    Update a job listing.

    Raises:
        HTTPException 403: If the caller does not own the listing.
        HTTPException 404: If the job is not found.
    """
    return _to_schema(JobListingService(db).update_job(user, job_id, data))


@router.delete("/jobs/{job_id}", status_code=204)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Response:
    """Delete a job listing and its applications."""
    JobListingService(db).delete_job(user, job_id)
    return Response(status_code=204)
