"""Tests for job applications: service and API."""

import pytest

from turf_talent.errors import (
    AuthorizationError,
    DuplicateApplicationError,
    NotFoundError,
    ValidationError,
)
from turf_talent.models.job_listing import JobListing
from turf_talent.schemas.application import JobApplicationCreate, JobApplicationUpdate
from turf_talent.services.job_applications import JobApplicationService


def make_job(db, owner: str = "fac-1", status: str = "open") -> JobListing:
    job = JobListing(
        user_id=owner,
        facility_profile_id=owner,
        title="Groundsperson",
        status=status,
        requirements=[],
        required_skills=[],
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


@pytest.fixture
def applications(db):
    return JobApplicationService(db)


@pytest.fixture
def open_job(db, facility):
    return make_job(db, facility.user_id)


class TestCreateApplication:
    """Tests for applying to jobs."""

    def test_apply(self, applications, db, candidate, open_job):
        application = applications.create_application(
            candidate, JobApplicationCreate(job_id=open_job.id, cover_letter="Keen greenkeeper")
        )

        assert application.status == "pending"
        assert application.applicant_id == candidate.user_id
        assert application.facility_profile_id == open_job.facility_profile_id
        db.refresh(open_job)
        assert open_job.application_count == 1

    def test_interleaved_applications_all_counted(
        self, applications, db, other_db, candidate, other_candidate, open_job
    ):
        """A session holding an older copy of the job still adds to the stored count."""
        second_writer = JobApplicationService(other_db)
        assert other_db.get(JobListing, open_job.id).application_count == 0

        applications.create_application(candidate, JobApplicationCreate(job_id=open_job.id))
        second_writer.create_application(other_candidate, JobApplicationCreate(job_id=open_job.id))

        db.refresh(open_job)
        assert open_job.application_count == 2

    def test_duplicate_application(self, applications, candidate, open_job):
        applications.create_application(candidate, JobApplicationCreate(job_id=open_job.id))
        with pytest.raises(DuplicateApplicationError):
            applications.create_application(candidate, JobApplicationCreate(job_id=open_job.id))

    def test_job_must_be_open(self, applications, db, candidate, facility):
        closed = make_job(db, facility.user_id, status="closed")
        with pytest.raises(ValidationError):
            applications.create_application(candidate, JobApplicationCreate(job_id=closed.id))

    def test_unknown_job(self, applications, candidate):
        with pytest.raises(NotFoundError):
            applications.create_application(candidate, JobApplicationCreate(job_id=99))

    def test_only_candidates_apply(self, applications, facility, open_job):
        with pytest.raises(AuthorizationError):
            applications.create_application(facility, JobApplicationCreate(job_id=open_job.id))


class TestListApplications:
    """Tests for application visibility."""

    def test_visibility(self, applications, db, candidate, other_candidate, facility, admin, open_job):
        applications.create_application(candidate, JobApplicationCreate(job_id=open_job.id))
        applications.create_application(other_candidate, JobApplicationCreate(job_id=open_job.id))

        assert len(applications.list_applications(candidate)) == 1
        assert len(applications.list_applications(facility)) == 2
        assert len(applications.list_applications(facility, open_job.id)) == 2
        assert len(applications.list_applications(admin)) == 2

    def test_facility_cannot_view_other_job(self, applications, db):
        from turf_talent.schemas.user import CurrentUser, UserRole

        job = make_job(db, "fac-2")
        with pytest.raises(AuthorizationError):
            applications.list_applications(CurrentUser(user_id="fac-1", role=UserRole.FACILITY), job.id)


class TestUpdateAndWithdraw:
    """Tests for changing and withdrawing applications."""

    @pytest.fixture
    def application(self, applications, candidate, open_job):
        return applications.create_application(candidate, JobApplicationCreate(job_id=open_job.id))

    def test_facility_reviews(self, applications, facility, application):
        updated = applications.update_application(
            facility, application.id, JobApplicationUpdate(status="reviewed", notes="Call back")
        )
        assert updated.status == "reviewed"
        assert updated.notes == "Call back"

    def test_applicant_cannot_change_status(self, applications, candidate, application):
        with pytest.raises(AuthorizationError):
            applications.update_application(
                candidate, application.id, JobApplicationUpdate(status="accepted")
            )

    def test_applicant_edits_cover_letter(self, applications, candidate, application):
        updated = applications.update_application(
            candidate, application.id, JobApplicationUpdate(cover_letter="Updated letter")
        )
        assert updated.cover_letter == "Updated letter"

    def test_facility_cannot_edit_cover_letter(self, applications, facility, application):
        with pytest.raises(AuthorizationError):
            applications.update_application(
                facility, application.id, JobApplicationUpdate(cover_letter="Edited")
            )

    def test_stranger_cannot_update(self, applications, other_candidate, application):
        with pytest.raises(AuthorizationError):
            applications.update_application(
                other_candidate, application.id, JobApplicationUpdate(cover_letter="x")
            )

    def test_withdraw_decrements_count(self, applications, db, candidate, open_job, application):
        applications.delete_application(candidate, application.id)

        db.refresh(open_job)
        assert open_job.application_count == 0
        assert applications.list_applications(candidate) == []

    def test_only_applicant_withdraws(self, applications, facility, application):
        with pytest.raises(AuthorizationError):
            applications.delete_application(facility, application.id)


class TestApplicationsEndpoints:
    """Tests for /api/applications."""

    def test_apply_and_list(self, client, headers, candidate, facility, open_job):
        response = client.post(
            "/api/applications", json={"job_id": open_job.id}, headers=headers(candidate)
        )
        assert response.status_code == 201
        assert response.json()["status"] == "pending"

        response = client.get(f"/api/applications?job_id={open_job.id}", headers=headers(facility))
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_duplicate_is_409(self, client, headers, candidate, open_job):
        client.post("/api/applications", json={"job_id": open_job.id}, headers=headers(candidate))
        response = client.post(
            "/api/applications", json={"job_id": open_job.id}, headers=headers(candidate)
        )
        assert response.status_code == 409
        assert response.json()["error"] == "DuplicateApplicationError"

    def test_withdraw(self, client, headers, candidate, open_job):
        application = client.post(
            "/api/applications", json={"job_id": open_job.id}, headers=headers(candidate)
        ).json()
        response = client.delete(f"/api/applications/{application['id']}", headers=headers(candidate))
        assert response.status_code == 204
