"""Post endpoints: feed, upload metadata, single post."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from .. import models, schemas, settings
from ..auth import get_current_user, get_current_user_optional
from ..deps import get_db
from ..services.content import ContentStore
from ..services.feed import FeedAssembler, FeedFilters

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get("", response_model=list[schemas.PostView])
def list_posts(
    genre: str | None = None,
    user_type: str | None = Query(None, alias="userType"),
    sort_by: str | None = Query(None, alias="sortBy"),
    limit: int = Query(settings.FEED_DEFAULT_LIMIT, ge=1, le=settings.FEED_MAX_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: models.User | None = Depends(get_current_user_optional),
) -> list[schemas.PostView]:
    """
    List posts for the feed.

    genre matches exactly; userType is "verified" or "expert"; sortBy is
    "recent" (default) or "popular". isLiked is only ever true for
    authenticated viewers.
    """
    return FeedAssembler(db).list_posts(
        limit=limit,
        offset=offset,
        filters=FeedFilters(genre=genre, user_type=user_type, sort_by=sort_by),
        viewer_id=current_user.id if current_user else None,
    )


@router.post(
    "",
    response_model=schemas.Post,
    status_code=status.HTTP_201_CREATED,
)
def create_post(
    payload: schemas.PostCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> schemas.Post:
    """
    Create a post (creators and experts only).

    fileUrl and coverImageUrl are references returned by the upload service.
    """
    post = ContentStore(db).create_post(
        user_id=current_user.id,
        title=payload.title,
        content_type=payload.content_type,
        file_url=payload.file_url,
        genre=payload.genre,
        description=payload.description,
        cover_image_url=payload.cover_image_url,
        duration=payload.duration,
    )
    return schemas.Post.model_validate(post)


@router.get("/{id}", response_model=schemas.PostView)
def get_post(
    id: UUID,
    db: Session = Depends(get_db),
    current_user: models.User | None = Depends(get_current_user_optional),
) -> schemas.PostView:
    """Get a single post with the same annotations as the feed."""
    return FeedAssembler(db).get_post(id, viewer_id=current_user.id if current_user else None)
