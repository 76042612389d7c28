"""Skill catalog service."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from turf_talent.database import atomic
from turf_talent.errors import AuthorizationError, NotFoundError, ValidationError
from turf_talent.models.skill import Skill
from turf_talent.schemas.skill import SkillCreate, SkillUpdate
from turf_talent.schemas.user import CurrentUser

logger = logging.getLogger(__name__)

# Seed data for a fresh database
DEFAULT_SKILLS: list[dict] = [
    {
        "name": "Greenkeeping Level 2",
        "category": "greenkeeping",
        "description": "Level 2 certificate in sports turf maintenance",
        "requires_evidence": True,
        "accepted_file_types": [".pdf", ".jpg", ".png"],
    },
    {
        "name": "PA1 & PA6 Pesticide Application",
        "category": "chemicals",
        "description": "Certified for safe handling and application of pesticides",
        "requires_evidence": True,
        "accepted_file_types": [".pdf", ".jpg", ".png"],
    },
    {
        "name": "Irrigation System Maintenance",
        "category": "irrigation",
        "description": "Installing, programming and repairing irrigation systems",
        "requires_evidence": False,
        "accepted_file_types": [".pdf", ".jpg", ".png"],
    },
    {
        "name": "Ride-on Mower Operation",
        "category": "machinery",
        "description": "Operation of cylinder and rotary ride-on mowers",
        "requires_evidence": True,
        "accepted_file_types": [".pdf", ".jpg", ".png"],
    },
]


def normalize_file_types(file_types: list[str]) -> list[str]:
    """
    Normalize accepted file type patterns.

    Lowercases extensions, adds a missing leading dot and drops blanks and
    duplicates while keeping the original order. MIME patterns such as
    ``image/*`` are kept as given.

    Examples:
        >>> normalize_file_types(["PDF", " .jpg", "", ".pdf", "image/*"])
        ['.pdf', '.jpg', 'image/*']
    """
    result: list[str] = []
    for raw in file_types:
        pattern = raw.strip().lower()
        if not pattern:
            continue
        if "/" not in pattern and not pattern.startswith("."):
            pattern = f".{pattern}"
        if pattern not in result:
            result.append(pattern)
    return result


class SkillCatalogService:
    """
    Service for managing the catalog of claimable skills.

    Handles:
    - Listing and fetching skill definitions
    - Adding, editing and deleting skills (admin only)
    - Seeding a fresh catalog
    """

    def __init__(self, db: Session) -> None:
        """
        Initialize the skill catalog.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    @staticmethod
    def _require_admin(user: CurrentUser) -> None:
        if not user.is_admin:
            raise AuthorizationError("Must be an admin to manage skills")

    def list_skills(self) -> list[Skill]:
        """Return every skill ordered by category and name."""
        return self.db.query(Skill).order_by(Skill.category, Skill.name).all()

    def get_skill(self, skill_id: int) -> Skill:
        """
        Fetch one skill.

        Raises:
            NotFoundError: If no skill has this id
        """
        skill = self.db.query(Skill).filter(Skill.id == skill_id).first()
        if skill is None:
            raise NotFoundError("Skill", skill_id)
        return skill

    def add_skill(self, user: CurrentUser, data: SkillCreate) -> Skill:
        """
        Add a skill to the catalog.

        Args:
            user: Calling admin
            data: Skill definition

        Returns:
            The created Skill record

        Raises:
            AuthorizationError: If the caller is not an admin
            ValidationError: If the name is empty or already taken
        """
        self._require_admin(user)
        name = data.name.strip()
        if not name:
            raise ValidationError("Skill name is required", field="name")

        skill = Skill(
            name=name,
            category=(data.category or "").strip() or None,
            description=data.description,
            requires_evidence=data.requires_evidence,
            accepted_file_types=normalize_file_types(data.accepted_file_types),
        )
        try:
            with atomic(self.db):
                self.db.add(skill)
        except IntegrityError as exc:
            raise ValidationError(f"A skill named '{name}' already exists", field="name") from exc

        self.db.refresh(skill)
        logger.info("Skill %s added by %s: %s", skill.id, user.user_id, skill.name)
        return skill

    def update_skill(self, user: CurrentUser, skill_id: int, data: SkillUpdate) -> Skill:
        """
        Apply an administrative edit to a skill.

        Raises:
            AuthorizationError: If the caller is not an admin
            NotFoundError: If the skill does not exist
            ValidationError: If the edit blanks or duplicates the name
        """
        self._require_admin(user)
        skill = self.get_skill(skill_id)
        changes = data.model_dump(exclude_unset=True)

        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                raise ValidationError("Skill name is required", field="name")
            changes["name"] = name
        if changes.get("accepted_file_types") is not None:
            changes["accepted_file_types"] = normalize_file_types(changes["accepted_file_types"])

        try:
            with atomic(self.db):
                for field, value in changes.items():
                    setattr(skill, field, value)
        except IntegrityError as exc:
            raise ValidationError(
                f"A skill named '{changes.get('name')}' already exists", field="name"
            ) from exc

        self.db.refresh(skill)
        logger.info("Skill %s updated by %s", skill_id, user.user_id)
        return skill

    def delete_skill(self, user: CurrentUser, skill_id: int) -> None:
        """
        Delete a skill from the catalog.

        Claims that reference the skill are left in place.

        Raises:
            AuthorizationError: If the caller is not an admin
            NotFoundError: If the skill does not exist
        """
        self._require_admin(user)
        skill = self.get_skill(skill_id)
        with atomic(self.db):
            self.db.delete(skill)
        logger.info("Skill %s deleted by %s", skill_id, user.user_id)

    def seed_default_skills(self) -> int:
        """
        Insert the default skills into an empty catalog.

        Returns:
            Number of skills created (0 when the catalog already had entries)
        """
        if self.db.query(Skill).count() > 0:
            return 0
        with atomic(self.db):
            for data in DEFAULT_SKILLS:
                self.db.add(Skill(**data))
        logger.info("Seeded %d default skills", len(DEFAULT_SKILLS))
        return len(DEFAULT_SKILLS)
