"""Job applications API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from turf_talent.database import get_db
from turf_talent.dependencies import get_current_user
from turf_talent.schemas.application import (
    JobApplication,
    JobApplicationCreate,
    JobApplicationUpdate,
)
from turf_talent.schemas.user import CurrentUser
from turf_talent.services.job_applications import JobApplicationService

router = APIRouter()


@router.get("/applications", response_model=list[JobApplication])
def list_applications(
    job_id: int | None = None,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[JobApplication]:
    """List applications visible to the caller, optionally for one job."""
    applications = JobApplicationService(db).list_applications(user, job_id)
    return [JobApplication.model_validate(a) for a in applications]


@router.post("/applications", response_model=JobApplication, status_code=201)
def create_application(
    data: JobApplicationCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> JobApplication:
    """
    Apply to an open job (candidates only).

    Raises:
        HTTPException 404: If the job is not found.
        HTTPException 409: If the caller already applied.
        HTTPException 422: If the job is not open.
    """
    return JobApplication.model_validate(JobApplicationService(db).create_application(user, data))


@router.patch("/applications/{application_id}", response_model=JobApplication)
def update_application(
    application_id: int,
    data: JobApplicationUpdate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> JobApplication:
    """Update an application's status, notes or cover letter."""
    application = JobApplicationService(db).update_application(user, application_id, data)
    return JobApplication.model_validate(application)


@router.delete("/applications/{application_id}", status_code=204)
def delete_application(
    application_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Response:
    """Withdraw an application."""
    JobApplicationService(db).delete_application(user, application_id)
    return Response(status_code=204)
