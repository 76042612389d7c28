"""FastAPI dependency functions for injection into endpoint handlers."""

from __future__ import annotations

from fastapi import Header, HTTPException, Request

from turf_talent.config import evidence_config
from turf_talent.schemas.user import CurrentUser, UserRole
from turf_talent.services.evidence_store import EvidenceStore, LocalEvidenceStore


def get_current_user(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> CurrentUser:
    """
    Identity supplied by the authentication layer in front of the API.

    Raises:
        HTTPException 401: If the id is missing or the role is unknown
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Authentication required")
    try:
        role = UserRole((x_user_role or "").strip().lower())
    except ValueError as exc:
        raise HTTPException(status_code=401, detail="Unknown user role") from exc
    return CurrentUser(user_id=x_user_id.strip(), role=role)


def get_evidence_store(request: Request) -> EvidenceStore:
    """Return the evidence store created during the app lifespan."""
    store = getattr(request.app.state, "evidence_store", None)
    if store is None:
        store = LocalEvidenceStore(config=evidence_config)
        request.app.state.evidence_store = store
    return store
