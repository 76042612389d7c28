"""Skill claims API router - claim, list, review and metrics endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from turf_talent.config import evidence_config
from turf_talent.database import get_db
from turf_talent.dependencies import get_current_user, get_evidence_store
from turf_talent.errors import AuthorizationError, ValidationError
from turf_talent.models.skill_claim import SkillClaim as SkillClaimRecord
from turf_talent.schemas.skill_claim import (
    ClaimStatusUpdate,
    SkillClaim,
    SkillStatus,
    VerificationMetrics,
)
from turf_talent.schemas.user import CurrentUser
from turf_talent.services.evidence_store import EvidenceFile, EvidenceStore
from turf_talent.services.skill_claims import SkillClaimService
from turf_talent.services.verification_metrics import VerificationMetricsService

router = APIRouter()


def _to_schema(claim: SkillClaimRecord, store: EvidenceStore) -> SkillClaim:
    """
    Build the API representation of a claim.

    Args:
        claim: SkillClaim ORM instance
        store: Evidence store used to resolve download URLs

    Returns:
        SkillClaim schema with download URLs filled in
    """
    result = SkillClaim.model_validate(claim)
    for evidence in result.evidence:
        evidence.download_url = store.resolve(evidence.file_url)
    return result


def _oversized(upload: UploadFile, limit: int) -> ValidationError:
    return ValidationError(f"'{upload.filename}' exceeds the {limit} byte upload limit", field="files")


@router.get("/skill-claims/metrics", response_model=VerificationMetrics)
def get_metrics(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> VerificationMetrics:
    """
    Verification statistics across every claim (admin only).

    Raises:
        HTTPException 403: If the caller is not an admin.
    """
    if not user.is_admin:
        raise AuthorizationError("Must be an admin to view verification metrics")
    return VerificationMetricsService(db).compute_metrics()


@router.get("/skill-claims", response_model=list[SkillClaim])
def list_claims(
    status: SkillStatus | None = None,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    store: EvidenceStore = Depends(get_evidence_store),
) -> list[SkillClaim]:
    """
    List the caller's claims, or every claim for admins.

    Returns:
        Claims ordered by most recently created.
    """
    service = SkillClaimService(db, store, evidence_config)
    return [_to_schema(claim, store) for claim in service.list_claims(user, status)]


@router.get("/skill-claims/{claim_id}", response_model=SkillClaim)
def get_claim(
    claim_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    store: EvidenceStore = Depends(get_evidence_store),
) -> SkillClaim:
    """
    Get one claim.

    Raises:
        HTTPException 404: If the claim is not found or belongs to someone else.
    """
    service = SkillClaimService(db, store, evidence_config)
    return _to_schema(service.get_claim(user, claim_id), store)


@router.post("/skill-claims", response_model=SkillClaim, status_code=201)
async def create_claim(
    skill_id: int = Form(...),
    files: list[UploadFile] | None = File(default=None),
    descriptions: list[str] | None = Form(default=None),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    store: EvidenceStore = Depends(get_evidence_store),
) -> SkillClaim:
    """
    Claim a skill, uploading supporting evidence.

    Pipeline:
        1. Check the skill exists and is not already claimed
        2. Validate evidence against the skill's accepted file types
        3. Upload every file to the evidence store
        4. Write the claim and the profile projection in one transaction

    Raises:
        HTTPException 404: If the skill is not found.
        HTTPException 409: If the caller already claimed this skill.
        HTTPException 422: If the evidence is missing or of the wrong type,
            or a file is over the upload size limit.
        HTTPException 502: If an upload fails (nothing is saved).
    """
    limit = evidence_config.max_file_size_bytes
    evidence: list[EvidenceFile] = []
    for upload in files or []:
        if upload.size is not None and upload.size > limit:
            raise _oversized(upload, limit)
        # Reads at most one byte past the limit when the size is not declared.
        data = await upload.read(limit + 1)
        if len(data) > limit:
            raise _oversized(upload, limit)
        evidence.append(
            EvidenceFile(
                file_name=upload.filename or "",
                content_type=upload.content_type or "application/octet-stream",
                data=data,
            )
        )

    service = SkillClaimService(db, store, evidence_config)
    claim = await service.create_claim(user, skill_id, evidence, descriptions)
    return _to_schema(claim, store)


@router.patch("/skill-claims/{claim_id}/status", response_model=SkillClaim)
def update_claim_status(
    claim_id: int,
    update: ClaimStatusUpdate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    store: EvidenceStore = Depends(get_evidence_store),
) -> SkillClaim:
    """
    Verify or reject a pending claim (admin only).

    Raises:
        HTTPException 403: If the caller is not an admin.
        HTTPException 404: If the claim is not found.
        HTTPException 409: If the claim was already verified or rejected.
        HTTPException 422: If a rejection has no reason.
    """
    service = SkillClaimService(db, store, evidence_config)
    claim = service.update_claim_status(user, claim_id, update.status, update.rejection_reason)
    return _to_schema(claim, store)
