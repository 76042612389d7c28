"""Skill claim ledger: claim creation, verification and listing."""

from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import PurePath

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from turf_talent.config import EvidenceConfig
from turf_talent.database import atomic
from turf_talent.errors import (
    AuthorizationError,
    DuplicateClaimError,
    EvidenceUploadError,
    InvalidTransitionError,
    NotFoundError,
    TransactionError,
    ValidationError,
)
from turf_talent.models.skill import Skill
from turf_talent.models.skill_claim import SkillClaim, SkillEvidence
from turf_talent.schemas.skill_claim import SkillStatus
from turf_talent.schemas.user import CurrentUser, UserRole
from turf_talent.services.candidate_profiles import CandidateProfileService
from turf_talent.services.evidence_store import (
    EvidenceFile,
    EvidenceStore,
    EvidenceStoreError,
    build_upload_path,
)
from turf_talent.services.skill_catalog import SkillCatalogService
from turf_talent.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


def matches_file_type(file: EvidenceFile, patterns: list[str]) -> bool:
    """
    Check an upload against accepted file type patterns.

    Patterns are extensions (``.pdf``), exact MIME types
    (``application/pdf``) or MIME wildcards (``image/*``).

    Examples:
        >>> f = EvidenceFile("cert.PDF", "application/pdf", b"")
        >>> matches_file_type(f, [".pdf"])
        True
        >>> matches_file_type(f, ["image/*"])
        False
    """
    suffix = PurePath(file.file_name).suffix.lower()
    content_type = (file.content_type or "").lower()
    for pattern in patterns:
        pattern = pattern.lower()
        if pattern.startswith("."):
            if suffix == pattern:
                return True
        elif pattern.endswith("/*"):
            if content_type.startswith(pattern[:-1]):
                return True
        elif content_type == pattern:
            return True
    return False


class SkillClaimService:
    """
    Authoritative ledger of skill claims.

    A claim is created pending by its candidate and moved once, by an admin,
    to verified or rejected. Every state change writes the claim and the
    owner's profile projection in one transaction.
    """

    def __init__(
        self,
        db: Session,
        store: EvidenceStore,
        config: EvidenceConfig | None = None,
    ) -> None:
        """
        Initialize the claim ledger.

        Args:
            db: SQLAlchemy database session
            store: Blob store evidence files are uploaded to
            config: Evidence configuration (uses defaults if not provided)
        """
        self.db = db
        self.store = store
        self.config = config or EvidenceConfig()
        self.profiles = CandidateProfileService(db)
        self.catalog = SkillCatalogService(db)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_claim(self, user_id: str, skill_id: int) -> SkillClaim | None:
        """Return the claim a candidate holds for a skill, if any."""
        return (
            self.db.query(SkillClaim)
            .filter(SkillClaim.user_id == user_id, SkillClaim.skill_id == skill_id)
            .first()
        )

    def list_claims(self, user: CurrentUser, status: SkillStatus | None = None) -> list[SkillClaim]:
        """
        List claims visible to the caller, newest first.

        Admins see every claim; everybody else sees their own.

        Args:
            user: Calling user
            status: Only return claims in this status

        Returns:
            List of SkillClaim records
        """
        query = self.db.query(SkillClaim)
        if not user.is_admin:
            query = query.filter(SkillClaim.user_id == user.user_id)
        if status == SkillStatus.PENDING:
            query = query.filter(
                or_(SkillClaim.status == status.value, SkillClaim.status.is_(None), SkillClaim.status == "")
            )
        elif status is not None:
            query = query.filter(SkillClaim.status == status.value)
        return query.order_by(SkillClaim.created_at.desc(), SkillClaim.id.desc()).all()

    def get_claim(self, user: CurrentUser, claim_id: int) -> SkillClaim:
        """
        Fetch a claim owned by the caller (or any claim, for admins).

        Raises:
            NotFoundError: If the claim does not exist or is not visible
        """
        claim = self.db.query(SkillClaim).filter(SkillClaim.id == claim_id).first()
        if claim is None or (not user.is_admin and claim.user_id != user.user_id):
            raise NotFoundError("Claim", claim_id)
        return claim

    def find_evidence(self, user: CurrentUser, locator: str) -> SkillEvidence:
        """
        Look up evidence by its storage locator for download.

        Raises:
            NotFoundError: If no evidence has this locator or the caller may not see it
        """
        evidence = self.db.query(SkillEvidence).filter(SkillEvidence.file_url == locator).first()
        if evidence is None or (not user.is_admin and evidence.claim.user_id != user.user_id):
            raise NotFoundError("Evidence", locator)
        return evidence

    # ------------------------------------------------------------------
    # Claim creation
    # ------------------------------------------------------------------

    def _validate_evidence(self, skill: Skill, files: list[EvidenceFile]) -> None:
        if skill.requires_evidence and not files:
            raise ValidationError("Please upload at least one evidence document", field="files")
        accepted = skill.accepted_file_types or self.config.default_accepted_file_types
        for file in files:
            if not file.file_name:
                raise ValidationError("Evidence files must have a name", field="files")
            if not matches_file_type(file, accepted):
                raise ValidationError(
                    f"'{file.file_name}' is not an accepted file type ({', '.join(accepted)})",
                    field="files",
                )

    async def _upload(self, user: CurrentUser, file: EvidenceFile) -> SkillEvidence:
        evidence_id = uuid.uuid4().hex
        path = build_upload_path(
            self.config.upload_prefix, user.user_id, file.file_name, token=evidence_id[:8]
        )
        try:
            locator = await self.store.put(path, file.data, file.content_type)
        except EvidenceStoreError as exc:
            raise EvidenceUploadError(file.file_name, str(exc)) from exc
        return SkillEvidence(
            id=evidence_id,
            file_url=locator,
            file_name=file.file_name,
            file_type=file.content_type,
            description=file.description,
            uploaded_at=utc_now(),
        )

    async def _discard(self, evidence: list[SkillEvidence]) -> None:
        for item in evidence:
            try:
                await self.store.delete(item.file_url)
            except EvidenceStoreError as exc:
                logger.warning("Could not remove orphaned evidence %s: %s", item.file_url, exc)

    async def _upload_all(self, user: CurrentUser, files: list[EvidenceFile]) -> list[SkillEvidence]:
        """
        Upload every file concurrently; all succeed or none are kept.

        Raises:
            EvidenceUploadError: For the first failed upload, after removing the others
        """
        results = await asyncio.gather(
            *(self._upload(user, file) for file in files), return_exceptions=True
        )
        uploaded = [r for r in results if isinstance(r, SkillEvidence)]
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            await self._discard(uploaded)
            logger.warning(
                "Evidence upload failed for %s (%d of %d files): %s",
                user.user_id,
                len(failures),
                len(files),
                failures[0],
            )
            if isinstance(failures[0], EvidenceUploadError):
                raise failures[0]
            raise EvidenceUploadError("evidence", str(failures[0])) from failures[0]
        for position, item in enumerate(uploaded):
            item.position = position
        return uploaded

    async def create_claim(
        self,
        user: CurrentUser,
        skill_id: int,
        files: list[EvidenceFile],
        descriptions: list[str | None] | None = None,
    ) -> SkillClaim:
        """
        Claim a skill for the calling candidate.

        Evidence is uploaded first; the claim and the pending projection
        entry are then written in a single transaction.

        Args:
            user: Calling candidate
            skill_id: Catalog skill being claimed
            files: Evidence files, in display order
            descriptions: Optional descriptions matched to ``files`` by position

        Returns:
            The created SkillClaim record

        Raises:
            AuthorizationError: If the caller is not a candidate
            NotFoundError: If the skill does not exist
            DuplicateClaimError: If the caller already claimed this skill
            ValidationError: If the evidence does not satisfy the skill
            EvidenceUploadError: If any evidence upload fails
            TransactionError: If the database write fails
        """
        if user.role != UserRole.CANDIDATE:
            raise AuthorizationError("Only candidates can claim skills")

        skill = self.catalog.get_skill(skill_id)
        if self.find_claim(user.user_id, skill_id) is not None:
            raise DuplicateClaimError(user.user_id, skill_id)
        self._validate_evidence(skill, files)

        descriptions = descriptions or []
        for index, file in enumerate(files):
            if file.description is None and index < len(descriptions):
                file.description = descriptions[index] or None

        evidence = await self._upload_all(user, files)

        now = utc_now()
        claim = SkillClaim(
            user_id=user.user_id,
            skill_id=skill_id,
            status=SkillStatus.PENDING.value,
            evidence=evidence,
            created_at=now,
            updated_at=now,
        )
        try:
            with atomic(self.db):
                self.db.add(claim)
                self.profiles.record_claim(user.user_id, skill_id)
        except IntegrityError as exc:
            await self._discard(evidence)
            raise DuplicateClaimError(user.user_id, skill_id) from exc
        except TransactionError:
            await self._discard(evidence)
            raise

        self.db.refresh(claim)
        logger.info(
            "Claim %s created by %s for skill %s with %d evidence file(s)",
            claim.id,
            user.user_id,
            skill_id,
            len(evidence),
        )
        return claim

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def update_claim_status(
        self,
        user: CurrentUser,
        claim_id: int,
        status: SkillStatus | str,
        rejection_reason: str | None = None,
    ) -> SkillClaim:
        """
        Verify or reject a pending claim.

        The write is a conditional UPDATE that only matches a pending claim,
        so of two reviewers racing on the same claim exactly one succeeds,
        whatever locking the database backend offers.

        Args:
            user: Calling admin
            claim_id: Claim to review
            status: ``verified`` or ``rejected``
            rejection_reason: Required when rejecting

        Returns:
            The updated SkillClaim record

        Raises:
            AuthorizationError: If the caller is not an admin
            ValidationError: If the status is not a decision or a rejection has no reason
            NotFoundError: If the claim does not exist
            InvalidTransitionError: If the claim was already verified or rejected
            TransactionError: If the database write fails
        """
        if not user.is_admin:
            raise AuthorizationError("Must be an admin to verify skills")

        try:
            new_status = SkillStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown status '{status}'", field="status") from exc
        if new_status == SkillStatus.PENDING:
            raise ValidationError("Claims can only be verified or rejected", field="status")

        reason = (rejection_reason or "").strip()
        if new_status == SkillStatus.REJECTED and not reason:
            raise ValidationError("A rejection reason is required", field="rejection_reason")

        now = utc_now()
        values = {
            SkillClaim.status: new_status.value,
            SkillClaim.updated_at: now,
            SkillClaim.verified_by: user.user_id,
        }
        if new_status == SkillStatus.VERIFIED:
            values[SkillClaim.verified_at] = now
        else:
            values[SkillClaim.rejected_at] = now
            values[SkillClaim.rejection_reason] = reason

        with atomic(self.db):
            matched = (
                self.db.query(SkillClaim)
                .filter(
                    SkillClaim.id == claim_id,
                    or_(
                        SkillClaim.status == SkillStatus.PENDING.value,
                        SkillClaim.status.is_(None),
                        SkillClaim.status == "",
                    ),
                )
                .update(values, synchronize_session=False)
            )
            claim = (
                self.db.query(SkillClaim)
                .filter(SkillClaim.id == claim_id)
                .populate_existing()
                .first()
            )
            if claim is None:
                raise NotFoundError("Claim", claim_id)
            if not matched:
                current = SkillStatus.coerce(claim.status)
                logger.warning(
                    "Rejected transition of claim %s from %s to %s by %s",
                    claim_id,
                    current.value,
                    new_status.value,
                    user.user_id,
                )
                raise InvalidTransitionError(claim_id, current.value, new_status.value)

            self.profiles.record_status(
                claim.user_id,
                claim.skill_id,
                new_status,
                verified_by=user.user_id,
                verified_at=now,
                rejection_reason=reason if new_status == SkillStatus.REJECTED else None,
            )

        self.db.refresh(claim)
        logger.info("Claim %s %s by %s", claim_id, new_status.value, user.user_id)
        return claim
