"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from turf_talent.config import settings
from turf_talent.errors import TransactionError

logger = logging.getLogger(__name__)

# Database URL, derived from DATA_ROOT / settings.database_url.
# The model_validator in Settings always populates this field after init.
assert settings.database_url is not None, "database_url must be set in Settings"
DATABASE_URL: str = settings.database_url

if DATABASE_URL.startswith("sqlite:///"):
    Path(settings.data_root).mkdir(parents=True, exist_ok=True)

# Create SQLAlchemy engine
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
    echo=False,  # Set to True for SQL query logging during development
)

# Create SessionLocal class for database sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for declarative models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Run a block of writes as a single all-or-nothing transaction.

    Commits when the block exits cleanly and rolls back on any exception.
    Integrity violations are re-raised untouched so callers can map them to
    a business error; any other database failure becomes ``TransactionError``.

    Args:
        db: Session the block writes through

    Yields:
        The same session

    Raises:
        TransactionError: If the commit or a statement inside the block fails
    """
    try:
        yield db
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Transaction rolled back")
        raise TransactionError(f"Database transaction failed: {exc}") from exc
    except BaseException:
        db.rollback()
        raise
