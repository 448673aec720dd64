"""Admin and moderation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import require_admin
from ..deps import get_db
from ..services.moderation import ModerationGateway

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/users", response_model=list[schemas.User])
def list_users(
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
) -> list[schemas.User]:
    """
    List all users, newest first (admin only).
    """
    users = ModerationGateway(db, actor_id=admin.id).list_users()
    return [schemas.User.model_validate(u) for u in users]


@router.get("/expert-requests", response_model=list[schemas.User])
def list_expert_requests(
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
) -> list[schemas.User]:
    """
    List users with a pending expert-badge request (admin only).
    """
    users = ModerationGateway(db, actor_id=admin.id).list_expert_requests()
    return [schemas.User.model_validate(u) for u in users]


@router.put("/users/{id}/verify", response_model=schemas.User)
def set_verified(
    id: str,
    payload: schemas.VerifyUserRequest,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
) -> schemas.User:
    """
    Set or clear the verified flag (admin only).
    """
    user = ModerationGateway(db, actor_id=admin.id).set_verified(id, payload.is_verified)
    return schemas.User.model_validate(user)


@router.put("/users/{id}/expert-request", response_model=schemas.User)
def decide_expert_request(
    id: str,
    payload: schemas.ExpertDecisionRequest,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
) -> schemas.User:
    """
    Approve or reject an expert-badge request (admin only).
    """
    user = ModerationGateway(db, actor_id=admin.id).set_expert_status(id, payload.approved)
    return schemas.User.model_validate(user)
