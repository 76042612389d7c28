"""Verification metrics aggregated from the claim ledger."""

from __future__ import annotations

from collections import Counter

from sqlalchemy.orm import Session

from turf_talent.models.skill_claim import SkillClaim
from turf_talent.schemas.skill_claim import SkillStatus, VerificationMetrics


def summarize_claims(claims: list[SkillClaim]) -> VerificationMetrics:
    """
    Compute verification metrics for a set of claims.

    Average verification time is the mean of ``verified_at - created_at``
    over verified claims that carry both timestamps; non-positive latencies
    are treated as bad data and skipped.

    Args:
        claims: Claims to summarize

    Returns:
        VerificationMetrics with counts, average latency in seconds and
        verified counts per skill id
    """
    counts: Counter[SkillStatus] = Counter()
    by_skill: Counter[int] = Counter()
    latencies: list[float] = []

    for claim in claims:
        status = SkillStatus.coerce(claim.status)
        counts[status] += 1
        if status != SkillStatus.VERIFIED:
            continue
        by_skill[claim.skill_id] += 1
        if claim.verified_at is None or claim.created_at is None:
            continue
        latency = (claim.verified_at - claim.created_at).total_seconds()
        if latency > 0:
            latencies.append(latency)

    return VerificationMetrics(
        total_verified=counts[SkillStatus.VERIFIED],
        total_rejected=counts[SkillStatus.REJECTED],
        total_pending=counts[SkillStatus.PENDING],
        average_verification_time=sum(latencies) / len(latencies) if latencies else 0.0,
        verifications_by_skill=dict(by_skill),
    )


class VerificationMetricsService:
    """Read-only analytics over every claim in the ledger."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def compute_metrics(self) -> VerificationMetrics:
        """Recompute metrics from a full read of the ledger."""
        return summarize_claims(self.db.query(SkillClaim).all())
