"""Skill catalog API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from turf_talent.database import get_db
from turf_talent.dependencies import get_current_user
from turf_talent.schemas.skill import Skill, SkillCreate, SkillUpdate
from turf_talent.schemas.user import CurrentUser
from turf_talent.services.skill_catalog import SkillCatalogService

router = APIRouter()


@router.get("/skills", response_model=list[Skill])
def list_skills(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[Skill]:
    """List every skill in the catalog."""
    return [Skill.model_validate(s) for s in SkillCatalogService(db).list_skills()]


@router.get("/skills/{skill_id}", response_model=Skill)
def get_skill(
    skill_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Skill:
    """
    Get one skill definition.

    Raises:
        HTTPException 404: If the skill is not found.
    """
    return Skill.model_validate(SkillCatalogService(db).get_skill(skill_id))


@router.post("/skills", response_model=Skill, status_code=201)
def add_skill(
    data: SkillCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Skill:
    """
    Add a skill to the catalog (admin only).

    Raises:
        HTTPException 403: If the caller is not an admin.
        HTTPException 422: If the name is empty or already used.
    """
    return Skill.model_validate(SkillCatalogService(db).add_skill(user, data))


@router.patch("/skills/{skill_id}", response_model=Skill)
def update_skill(
    skill_id: int,
    data: SkillUpdate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Skill:
    """Edit a skill definition (admin only)."""
    return Skill.model_validate(SkillCatalogService(db).update_skill(user, skill_id, data))


@router.delete("/skills/{skill_id}", status_code=204)
def delete_skill(
    skill_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Response:
    """Delete a skill (admin only). Existing claims keep their skill id."""
    SkillCatalogService(db).delete_skill(user, skill_id)
    return Response(status_code=204)
