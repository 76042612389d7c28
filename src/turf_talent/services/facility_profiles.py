"""Facility profile service."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from turf_talent.database import atomic
from turf_talent.errors import AuthorizationError, NotFoundError, ValidationError
from turf_talent.models.facility_profile import FacilityProfile
from turf_talent.schemas.facility import FacilityProfileUpdate
from turf_talent.schemas.user import CurrentUser, UserRole
from turf_talent.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


class FacilityProfileService:
    """
    Service for the profiles of golf courses and sports facilities.

    Each facility manager owns exactly one profile, keyed by their user id.
    """

    def __init__(self, db: Session) -> None:
        """
        Initialize the facility profile service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def find_profile(self, user_id: str) -> FacilityProfile | None:
        """Return a facility's profile, if it has one."""
        return self.db.get(FacilityProfile, user_id)

    def get_profile(self, user_id: str) -> FacilityProfile:
        """
        Fetch a facility profile.

        Raises:
            NotFoundError: If the facility has no profile
        """
        profile = self.find_profile(user_id)
        if profile is None:
            raise NotFoundError("Facility profile", user_id)
        return profile

    def upsert_profile(self, user: CurrentUser, data: FacilityProfileUpdate) -> FacilityProfile:
        """
        Create or update the caller's facility profile.

        Omitted fields keep their stored value. A new profile must be given
        a name.

        Args:
            user: Calling facility manager
            data: Fields to set

        Returns:
            The saved profile

        Raises:
            AuthorizationError: If the caller is not a facility
            ValidationError: If the name is missing or blank
        """
        if user.role != UserRole.FACILITY:
            raise AuthorizationError("Only facilities have facility profiles")

        changes = data.model_dump(exclude_unset=True, mode="json")
        if "type" in changes:
            changes["facility_type"] = changes.pop("type")
        if "name" in changes:
            changes["name"] = (changes["name"] or "").strip()

        profile = self.find_profile(user.user_id)
        name = changes.get("name", profile.name if profile is not None else "")
        if not name:
            raise ValidationError("Facility name is required", field="name")

        now = utc_now()
        with atomic(self.db):
            if profile is None:
                profile = FacilityProfile(
                    user_id=user.user_id,
                    name=name,
                    address={},
                    facilities=[],
                    amenities=[],
                    photos=[],
                    operating_hours={},
                    created_at=now,
                )
                self.db.add(profile)
            for field, value in changes.items():
                if value is not None:
                    setattr(profile, field, value)
            profile.updated_at = now

        self.db.refresh(profile)
        logger.info("Facility profile %s saved", user.user_id)
        return profile
