"""Shared fixtures for the test suite."""

from __future__ import annotations

import os
import tempfile

# Keep the default data root out of the user's home directory. Must run
# before turf_talent.config is imported.
os.environ.setdefault("DATA_ROOT", tempfile.mkdtemp(prefix="turf_talent_test_"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import turf_talent.models  # noqa: F401 - registers tables on Base.metadata
from turf_talent.database import Base, get_db
from turf_talent.dependencies import get_evidence_store
from turf_talent.main import app
from turf_talent.models.facility_profile import FacilityProfile
from turf_talent.models.skill import Skill
from turf_talent.schemas.user import CurrentUser, UserRole
from turf_talent.services.evidence_store import LocalEvidenceStore

# ---------------------------------------------------------------------------
# In-memory SQLite test database (shared via StaticPool)
# ---------------------------------------------------------------------------
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Dependency override that uses the test in-memory database."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def auth_headers(user: CurrentUser) -> dict[str, str]:
    """Identity headers for a test user."""
    return {"X-User-Id": user.user_id, "X-User-Role": user.role.value}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def setup_db():
    """Create and tear down tables around each test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """SQLAlchemy session for services and for pre-populating test data."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def other_db():
    """A second session on the test database, for interleaving writers."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def evidence_store(tmp_path):
    """Evidence store rooted in a temporary directory."""
    return LocalEvidenceStore(root=str(tmp_path / "evidence"), base_url="/api/evidence")


@pytest.fixture
def client(evidence_store):
    """TestClient with the DB and evidence store dependencies overridden."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_evidence_store] = lambda: evidence_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def candidate():
    return CurrentUser(user_id="cand-1", role=UserRole.CANDIDATE)


@pytest.fixture
def other_candidate():
    return CurrentUser(user_id="cand-2", role=UserRole.CANDIDATE)


@pytest.fixture
def admin():
    return CurrentUser(user_id="admin-1", role=UserRole.ADMIN)


@pytest.fixture
def facility():
    return CurrentUser(user_id="fac-1", role=UserRole.FACILITY)


@pytest.fixture
def facility_profile(db, facility):
    """The profile of the test facility, which job postings attach to."""
    profile = FacilityProfile(user_id=facility.user_id, name="Links Golf Club", facility_type="golf_course")
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture
def sample_skill(db):
    """A catalog skill that requires PDF or image evidence."""
    skill = Skill(
        name="Greenkeeping Level 2",
        category="greenkeeping",
        requires_evidence=True,
        accepted_file_types=[".pdf", ".jpg", ".png"],
    )
    db.add(skill)
    db.commit()
    db.refresh(skill)
    return skill


@pytest.fixture
def optional_evidence_skill(db):
    """A catalog skill that can be claimed without evidence."""
    skill = Skill(
        name="Irrigation System Maintenance",
        category="irrigation",
        requires_evidence=False,
        accepted_file_types=[".pdf"],
    )
    db.add(skill)
    db.commit()
    db.refresh(skill)
    return skill


@pytest.fixture
def headers():
    """Build identity headers for a test user."""
    return auth_headers
