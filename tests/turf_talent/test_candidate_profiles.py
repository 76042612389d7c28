"""Tests for candidate profiles and the skill projection."""

from datetime import datetime

import pytest

from turf_talent.errors import AuthorizationError, NotFoundError, ValidationError
from turf_talent.models.candidate_profile import CandidateProfile
from turf_talent.models.skill_claim import SkillClaim
from turf_talent.schemas.profile import CandidateProfile as CandidateProfileSchema
from turf_talent.schemas.profile import CandidateProfileUpdate, SkillRef
from turf_talent.schemas.skill_claim import SkillStatus
from turf_talent.services.candidate_profiles import CandidateProfileService, projection_entry


@pytest.fixture
def profiles(db):
    return CandidateProfileService(db)


class TestProjectionEntry:
    """Tests for building projection entries."""

    def test_minimal_entry(self):
        assert projection_entry(3, SkillStatus.PENDING) == {"id": 3, "status": "pending"}

    def test_full_entry(self):
        entry = projection_entry(
            3, SkillStatus.REJECTED, "admin-1", datetime(2024, 1, 2, 3, 4, 5), "blurry scan"
        )
        assert entry == {
            "id": 3,
            "status": "rejected",
            "verified_by": "admin-1",
            "verified_at": "2024-01-02T03:04:05",
            "rejection_reason": "blurry scan",
        }


class TestProjectionWrites:
    """Tests for the ledger-facing projection writers."""

    def test_record_claim_creates_stub_profile(self, profiles, db, candidate):
        profiles.record_claim(candidate.user_id, 5)
        db.commit()

        profile = db.get(CandidateProfile, candidate.user_id)
        assert profile.skills == [{"id": 5, "status": "pending"}]

    def test_record_claim_replaces_existing_entry(self, profiles, db, candidate):
        db.add(CandidateProfile(user_id=candidate.user_id, skills=[{"id": 5}]))
        db.commit()

        profiles.record_claim(candidate.user_id, 5)
        db.commit()

        assert db.get(CandidateProfile, candidate.user_id).skills == [{"id": 5, "status": "pending"}]

    def test_record_status_updates_only_matching_entry(self, profiles, db, candidate):
        db.add(
            CandidateProfile(
                user_id=candidate.user_id,
                skills=[{"id": 1, "status": "pending"}, {"id": 2, "status": "pending"}],
            )
        )
        db.commit()

        profiles.record_status(
            candidate.user_id, 2, SkillStatus.VERIFIED, "admin-1", datetime(2024, 1, 1)
        )
        db.commit()

        skills = db.get(CandidateProfile, candidate.user_id).skills
        assert skills[0] == {"id": 1, "status": "pending"}
        assert skills[1]["status"] == "verified"
        assert skills[1]["verified_by"] == "admin-1"

    def test_sync_projection_from_ledger(self, profiles, db, candidate):
        db.add(
            CandidateProfile(
                user_id=candidate.user_id,
                skills=[{"id": 1, "status": "pending"}, {"id": 9}],
            )
        )
        db.add(
            SkillClaim(
                user_id=candidate.user_id,
                skill_id=1,
                status="verified",
                verified_by="admin-1",
                verified_at=datetime(2024, 2, 1),
            )
        )
        db.commit()

        profile = profiles.sync_projection(candidate.user_id)

        by_id = {s["id"]: s for s in profile.skills}
        assert by_id[1]["status"] == "verified"
        assert by_id[1]["verified_by"] == "admin-1"
        assert by_id[9] == {"id": 9}


class TestProfileReads:
    """Tests for profile lookup and listing."""

    def test_get_profile_not_found(self, profiles):
        with pytest.raises(NotFoundError):
            profiles.get_profile("nobody")

    def test_entries_without_status_read_as_pending(self, profiles, db, candidate):
        db.add(CandidateProfile(user_id=candidate.user_id, skills=[{"id": 4}]))
        db.commit()

        schema = CandidateProfileSchema.model_validate(profiles.get_profile(candidate.user_id))
        assert schema.skills[0].status == SkillStatus.PENDING

    def test_list_profiles_for_facility(self, profiles, db, facility, admin):
        db.add_all([CandidateProfile(user_id="a"), CandidateProfile(user_id="b")])
        db.commit()
        assert {p.user_id for p in profiles.list_profiles(facility)} == {"a", "b"}
        assert len(profiles.list_profiles(admin)) == 2

    def test_candidates_cannot_browse(self, profiles, candidate):
        with pytest.raises(AuthorizationError):
            profiles.list_profiles(candidate)


class TestUpsertProfile:
    """Tests for candidate profile edits."""

    def test_create_profile(self, profiles, candidate):
        profile = profiles.upsert_profile(
            candidate,
            CandidateProfileUpdate(
                first_name="Sam",
                last_name="Green",
                availability="two_weeks",
            ),
        )
        assert profile.first_name == "Sam"
        assert profile.availability == "two_weeks"
        assert profile.skills == []

    def test_unclaimed_skill_cannot_be_listed(self, profiles, db, candidate):
        with pytest.raises(ValidationError) as exc_info:
            profiles.upsert_profile(
                candidate, CandidateProfileUpdate(first_name="Sam", skills=[SkillRef(id=7)])
            )

        assert exc_info.value.field == "skills"
        assert db.get(CandidateProfile, candidate.user_id) is None

    def test_update_preserves_existing_statuses(self, profiles, db, candidate):
        db.add(
            CandidateProfile(
                user_id=candidate.user_id,
                first_name="Sam",
                skills=[{"id": 1, "status": "verified", "verified_by": "admin-1"}],
            )
        )
        db.add(SkillClaim(user_id=candidate.user_id, skill_id=3, status="pending"))
        db.commit()

        profile = profiles.upsert_profile(
            candidate,
            CandidateProfileUpdate(bio="Head greenkeeper", skills=[SkillRef(id=1), SkillRef(id=3)]),
        )

        assert profile.first_name == "Sam"
        assert profile.bio == "Head greenkeeper"
        assert profile.skills == [
            {"id": 1, "status": "verified", "verified_by": "admin-1"},
            {"id": 3, "status": "pending"},
        ]

    def test_claimed_skills_cannot_be_dropped(self, profiles, db, candidate):
        db.add(
            CandidateProfile(
                user_id=candidate.user_id,
                skills=[{"id": 1, "status": "pending"}, {"id": 2, "status": "pending"}],
            )
        )
        db.add(SkillClaim(user_id=candidate.user_id, skill_id=1, status="pending"))
        db.commit()

        profile = profiles.upsert_profile(candidate, CandidateProfileUpdate(skills=[]))

        assert profile.skills == [{"id": 1, "status": "pending"}]

    def test_only_candidates(self, profiles, facility):
        with pytest.raises(AuthorizationError):
            profiles.upsert_profile(facility, CandidateProfileUpdate(first_name="Club"))

    def test_claim_missing_from_projection_is_mirrored(self, profiles, db, candidate):
        db.add(CandidateProfile(user_id=candidate.user_id, skills=[]))
        db.add(
            SkillClaim(
                user_id=candidate.user_id,
                skill_id=4,
                status="rejected",
                verified_by="admin-1",
                rejected_at=datetime(2024, 3, 1),
                rejection_reason="expired",
            )
        )
        db.commit()

        profile = profiles.upsert_profile(candidate, CandidateProfileUpdate(skills=[SkillRef(id=4)]))

        assert profile.skills == [
            {
                "id": 4,
                "status": "rejected",
                "verified_by": "admin-1",
                "verified_at": "2024-03-01T00:00:00",
                "rejection_reason": "expired",
            }
        ]
