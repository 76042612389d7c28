"""User identity schemas."""

from enum import Enum

from pydantic import BaseModel


class UserRole(str, Enum):
    """Role claim supplied by the identity collaborator."""

    CANDIDATE = "candidate"
    FACILITY = "facility"
    ADMIN = "admin"


class CurrentUser(BaseModel):
    """The authenticated caller of an operation."""

    user_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
