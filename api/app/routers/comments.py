"""Comment endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import get_current_user
from ..deps import get_db
from ..services.engagement import EngagementStore

router = APIRouter(prefix="/posts", tags=["Comments"])


@router.get("/{id}/comments", response_model=list[schemas.CommentView])
def list_comments(
    id: UUID,
    db: Session = Depends(get_db),
) -> list[schemas.CommentView]:
    """
    List comments for a post, newest first.
    """
    comments = EngagementStore(db).list_comments(id)
    return [schemas.CommentView.model_validate(c) for c in comments]


@router.post(
    "/{id}/comments",
    response_model=schemas.Comment,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    id: UUID,
    payload: schemas.CommentCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> schemas.Comment:
    """
    Create comment on a post.

    Blank content is rejected with 400.
    """
    comment = EngagementStore(db).add_comment(id, current_user.id, payload.content)
    return schemas.Comment.model_validate(comment)
