"""Evidence download API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from turf_talent.database import get_db
from turf_talent.dependencies import get_current_user, get_evidence_store
from turf_talent.schemas.user import CurrentUser
from turf_talent.services.evidence_store import EvidenceStore, LocalEvidenceStore
from turf_talent.services.skill_claims import SkillClaimService

router = APIRouter()


@router.get("/evidence/{locator:path}")
def download_evidence(
    locator: str,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    store: EvidenceStore = Depends(get_evidence_store),
) -> FileResponse:
    """
    Stream an evidence file to its owner or an admin.

    Raises:
        HTTPException 404: If the evidence is unknown, not visible, or missing on disk.
    """
    evidence = SkillClaimService(db, store).find_evidence(user, locator)
    if not isinstance(store, LocalEvidenceStore) or not store.exists(locator):
        raise HTTPException(status_code=404, detail="Evidence file not found")
    return FileResponse(
        store.local_path(locator),
        media_type=evidence.file_type,
        filename=evidence.file_name,
    )
