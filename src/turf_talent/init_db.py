"""Database initialization script."""

import logging

from turf_talent.database import Base, SessionLocal, engine
from turf_talent.models import (  # noqa: F401 - registers tables on Base.metadata
    CandidateProfile,
    FacilityProfile,
    JobApplication,
    JobListing,
    Skill,
    SkillClaim,
    SkillEvidence,
)
from turf_talent.services.skill_catalog import SkillCatalogService

logger = logging.getLogger(__name__)


def init_database(seed: bool = True) -> None:
    """
    Initialize the database by creating all tables.

    This function creates all tables defined in the models if they don't exist
    and, when ``seed`` is set, fills an empty skill catalog with the defaults.
    It's safe to run multiple times as it won't recreate existing tables.
    """
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created: %s", ", ".join(Base.metadata.tables.keys()))

    if seed:
        db = SessionLocal()
        try:
            created = SkillCatalogService(db).seed_default_skills()
        finally:
            db.close()
        if not created:
            logger.info("Skill catalog already populated")


def main() -> None:
    """Console entry point: log to stderr and initialize the database."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    init_database()


if __name__ == "__main__":
    main()
