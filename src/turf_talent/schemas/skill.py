"""Skill catalog Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SkillBase(BaseModel):
    """Base skill schema with common fields."""

    name: str
    category: str | None = None
    description: str | None = None
    requires_evidence: bool = True
    accepted_file_types: list[str] = Field(default_factory=list)


class SkillCreate(SkillBase):
    """Schema for adding a skill to the catalog."""

    pass


class SkillUpdate(BaseModel):
    """Schema for an administrative edit; omitted fields are left unchanged."""

    name: str | None = None
    category: str | None = None
    description: str | None = None
    requires_evidence: bool | None = None
    accepted_file_types: list[str] | None = None


class Skill(SkillBase):
    """Complete skill schema with database fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime
