"""Like endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import get_current_user
from ..deps import get_db
from ..services.engagement import EngagementStore

router = APIRouter(prefix="/posts", tags=["Likes"])


@router.post("/{id}/like", response_model=schemas.LikeToggleResponse)
def toggle_like(
    id: UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> schemas.LikeToggleResponse:
    """
    Toggle the current user's like on a post.

    Not idempotent: calling twice likes and then unlikes.
    """
    is_liked = EngagementStore(db).toggle_like(id, current_user.id)
    return schemas.LikeToggleResponse(is_liked=is_liked)
