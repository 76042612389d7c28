"""Integration tests for the skills, skill claims, evidence and profile endpoints."""

from __future__ import annotations

import io

import pytest
from starlette.datastructures import UploadFile

from turf_talent.config import EvidenceConfig
from turf_talent.errors import ValidationError
from turf_talent.models.skill_claim import SkillClaim
from turf_talent.routers import skill_claims as skill_claims_router


def claim_files(*names: str) -> list[tuple[str, tuple[str, bytes, str]]]:
    """Multipart file parts for the claim endpoint."""
    return [("files", (name, b"%PDF-1.7 evidence", "application/pdf")) for name in names]


@pytest.fixture
def created_claim(client, headers, candidate, sample_skill):
    """A pending claim submitted through the API."""
    response = client.post(
        "/api/skill-claims",
        data={"skill_id": str(sample_skill.id), "descriptions": ["Certificate scan"]},
        files=claim_files("cert.pdf"),
        headers=headers(candidate),
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestAuthentication:
    """Tests for the identity headers."""

    def test_missing_user_is_401(self, client):
        response = client.get("/api/skills")
        assert response.status_code == 401

    def test_unknown_role_is_401(self, client):
        response = client.get("/api/skills", headers={"X-User-Id": "u1", "X-User-Role": "owner"})
        assert response.status_code == 401


class TestSkillsEndpoints:
    """Tests for /api/skills."""

    def test_list_skills(self, client, headers, candidate, sample_skill):
        response = client.get("/api/skills", headers=headers(candidate))
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["name"] == "Greenkeeping Level 2"
        assert data[0]["accepted_file_types"] == [".pdf", ".jpg", ".png"]

    def test_admin_adds_skill(self, client, headers, admin):
        response = client.post(
            "/api/skills",
            json={"name": "Bunker Renovation", "accepted_file_types": ["pdf"]},
            headers=headers(admin),
        )
        assert response.status_code == 201
        assert response.json()["accepted_file_types"] == [".pdf"]

    def test_empty_name_is_422(self, client, headers, admin):
        response = client.post("/api/skills", json={"name": " "}, headers=headers(admin))
        assert response.status_code == 422
        assert response.json()["field"] == "name"

    def test_candidate_cannot_add_skill(self, client, headers, candidate):
        response = client.post("/api/skills", json={"name": "X"}, headers=headers(candidate))
        assert response.status_code == 403

    def test_delete_skill(self, client, headers, admin, sample_skill):
        response = client.delete(f"/api/skills/{sample_skill.id}", headers=headers(admin))
        assert response.status_code == 204
        response = client.get(f"/api/skills/{sample_skill.id}", headers=headers(admin))
        assert response.status_code == 404


class TestCreateClaimEndpoint:
    """Tests for POST /api/skill-claims."""

    def test_create_claim(self, created_claim, candidate, sample_skill):
        assert created_claim["status"] == "pending"
        assert created_claim["user_id"] == candidate.user_id
        assert created_claim["skill_id"] == sample_skill.id
        evidence = created_claim["evidence"][0]
        assert evidence["file_name"] == "cert.pdf"
        assert evidence["description"] == "Certificate scan"
        assert evidence["download_url"] == f"/api/evidence/{evidence['file_url']}"

    def test_projection_visible_on_profile(self, client, headers, created_claim, candidate, sample_skill):
        response = client.get("/api/profiles/me", headers=headers(candidate))
        assert response.status_code == 200
        assert response.json()["skills"] == [
            {
                "id": sample_skill.id,
                "status": "pending",
                "verified_by": None,
                "verified_at": None,
                "rejection_reason": None,
            }
        ]

    def test_profile_lists_only_claimed_skills(self, client, headers, created_claim, candidate, sample_skill):
        response = client.put(
            "/api/profiles/me",
            json={"first_name": "Sam", "skills": [{"id": sample_skill.id}, {"id": 999}]},
            headers=headers(candidate),
        )
        assert response.status_code == 422
        assert response.json()["field"] == "skills"

        response = client.put(
            "/api/profiles/me",
            json={"first_name": "Sam", "skills": [{"id": sample_skill.id}]},
            headers=headers(candidate),
        )
        assert response.status_code == 200
        assert [s["id"] for s in response.json()["skills"]] == [sample_skill.id]

    def test_duplicate_claim_is_409(self, client, headers, created_claim, candidate, sample_skill):
        response = client.post(
            "/api/skill-claims",
            data={"skill_id": str(sample_skill.id)},
            files=claim_files("again.pdf"),
            headers=headers(candidate),
        )
        assert response.status_code == 409
        assert response.json()["error"] == "DuplicateClaimError"

    def test_missing_evidence_is_422(self, client, headers, candidate, sample_skill):
        response = client.post(
            "/api/skill-claims",
            data={"skill_id": str(sample_skill.id)},
            headers=headers(candidate),
        )
        assert response.status_code == 422

    def test_unknown_skill_is_404(self, client, headers, candidate):
        response = client.post(
            "/api/skill-claims",
            data={"skill_id": "999"},
            files=claim_files("cert.pdf"),
            headers=headers(candidate),
        )
        assert response.status_code == 404

    def test_facility_cannot_claim(self, client, headers, facility, sample_skill):
        response = client.post(
            "/api/skill-claims",
            data={"skill_id": str(sample_skill.id)},
            files=claim_files("cert.pdf"),
            headers=headers(facility),
        )
        assert response.status_code == 403

    def test_oversized_file_is_422(self, client, headers, db, candidate, sample_skill, monkeypatch):
        monkeypatch.setattr(skill_claims_router, "evidence_config", EvidenceConfig(max_file_size_bytes=4))
        response = client.post(
            "/api/skill-claims",
            data={"skill_id": str(sample_skill.id)},
            files=claim_files("cert.pdf"),
            headers=headers(candidate),
        )
        assert response.status_code == 422
        assert response.json()["field"] == "files"
        assert db.query(SkillClaim).count() == 0

    @pytest.mark.asyncio
    async def test_undeclared_size_is_read_only_past_limit(
        self, db, evidence_store, candidate, sample_skill, monkeypatch
    ):
        monkeypatch.setattr(skill_claims_router, "evidence_config", EvidenceConfig(max_file_size_bytes=4))
        stream = io.BytesIO(b"%PDF-1.7 evidence")
        upload = UploadFile(file=stream, filename="cert.pdf")
        assert upload.size is None

        with pytest.raises(ValidationError) as exc_info:
            await skill_claims_router.create_claim(
                skill_id=sample_skill.id,
                files=[upload],
                descriptions=None,
                db=db,
                user=candidate,
                store=evidence_store,
            )

        assert exc_info.value.field == "files"
        assert stream.tell() == 5
        assert db.query(SkillClaim).count() == 0


class TestReviewEndpoint:
    """Tests for PATCH /api/skill-claims/{id}/status."""

    def test_verify(self, client, headers, created_claim, admin, candidate):
        response = client.patch(
            f"/api/skill-claims/{created_claim['id']}/status",
            json={"status": "verified"},
            headers=headers(admin),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "verified"
        assert body["verified_by"] == admin.user_id

        profile = client.get("/api/profiles/me", headers=headers(candidate)).json()
        assert profile["skills"][0]["status"] == "verified"

    def test_reject_without_reason_is_422(self, client, headers, created_claim, admin):
        response = client.patch(
            f"/api/skill-claims/{created_claim['id']}/status",
            json={"status": "rejected", "rejection_reason": ""},
            headers=headers(admin),
        )
        assert response.status_code == 422
        assert response.json()["field"] == "rejection_reason"

    def test_second_decision_is_409(self, client, headers, created_claim, admin):
        url = f"/api/skill-claims/{created_claim['id']}/status"
        assert client.patch(url, json={"status": "verified"}, headers=headers(admin)).status_code == 200

        response = client.patch(
            url, json={"status": "rejected", "rejection_reason": "reason"}, headers=headers(admin)
        )
        assert response.status_code == 409
        assert response.json()["error"] == "InvalidTransitionError"

    def test_candidate_cannot_review(self, client, headers, created_claim, candidate):
        response = client.patch(
            f"/api/skill-claims/{created_claim['id']}/status",
            json={"status": "verified"},
            headers=headers(candidate),
        )
        assert response.status_code == 403

    def test_missing_claim_is_404(self, client, headers, admin):
        response = client.patch(
            "/api/skill-claims/999/status", json={"status": "verified"}, headers=headers(admin)
        )
        assert response.status_code == 404


class TestListAndMetricsEndpoints:
    """Tests for claim listing and metrics."""

    def test_list_scoped_to_caller(self, client, headers, created_claim, candidate, other_candidate, admin):
        assert len(client.get("/api/skill-claims", headers=headers(candidate)).json()) == 1
        assert client.get("/api/skill-claims", headers=headers(other_candidate)).json() == []
        assert len(client.get("/api/skill-claims", headers=headers(admin)).json()) == 1

    def test_list_status_filter(self, client, headers, created_claim, admin):
        response = client.get("/api/skill-claims?status=verified", headers=headers(admin))
        assert response.json() == []
        response = client.get("/api/skill-claims?status=pending", headers=headers(admin))
        assert [c["id"] for c in response.json()] == [created_claim["id"]]

    def test_get_claim_of_other_candidate_is_404(self, client, headers, created_claim, other_candidate):
        response = client.get(
            f"/api/skill-claims/{created_claim['id']}", headers=headers(other_candidate)
        )
        assert response.status_code == 404

    def test_metrics(self, client, headers, created_claim, admin):
        client.patch(
            f"/api/skill-claims/{created_claim['id']}/status",
            json={"status": "verified"},
            headers=headers(admin),
        )
        response = client.get("/api/skill-claims/metrics", headers=headers(admin))
        assert response.status_code == 200
        body = response.json()
        assert body["total_verified"] == 1
        assert body["total_pending"] == 0
        assert body["verifications_by_skill"] == {str(created_claim["skill_id"]): 1}

    def test_metrics_admin_only(self, client, headers, candidate):
        response = client.get("/api/skill-claims/metrics", headers=headers(candidate))
        assert response.status_code == 403


class TestEvidenceDownload:
    """Tests for GET /api/evidence/{locator}."""

    def test_owner_downloads_evidence(self, client, headers, created_claim, candidate):
        url = created_claim["evidence"][0]["download_url"]
        response = client.get(url, headers=headers(candidate))
        assert response.status_code == 200
        assert response.content == b"%PDF-1.7 evidence"
        assert response.headers["content-type"].startswith("application/pdf")

    def test_admin_downloads_evidence(self, client, headers, created_claim, admin):
        url = created_claim["evidence"][0]["download_url"]
        assert client.get(url, headers=headers(admin)).status_code == 200

    def test_other_candidate_cannot_download(self, client, headers, created_claim, other_candidate):
        url = created_claim["evidence"][0]["download_url"]
        assert client.get(url, headers=headers(other_candidate)).status_code == 404

    def test_unknown_locator(self, client, headers, admin):
        response = client.get("/api/evidence/skill-evidence/x/none.pdf", headers=headers(admin))
        assert response.status_code == 404


class TestClaimRecordsPersisted:
    """The API writes through to the database."""

    def test_claim_row_written(self, client, created_claim, db):
        claim = db.query(SkillClaim).one()
        assert claim.id == created_claim["id"]
        assert claim.status == "pending"
