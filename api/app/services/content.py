"""Content store: audio and video posts."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from .. import models
from ..errors import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ContentStore:
    def __init__(self, db: Session):
        self.db = db

    def get_post(self, post_id: UUID) -> models.Post | None:
        return self.db.get(models.Post, post_id)

    def create_post(
        self,
        user_id: str,
        title: str,
        content_type: str,
        file_url: str,
        genre: str,
        description: str | None = None,
        cover_image_url: str | None = None,
        duration: int | None = None,
    ) -> models.Post:
        """
        Create a post owned by user_id.

        Only creators and experts may publish. The file references are opaque
        strings produced by the upload service.
        """
        user = self.db.get(models.User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        if user.user_type not in models.PUBLISHER_USER_TYPES:
            raise AuthorizationError("Only creators and experts can upload content")

        if content_type not in models.CONTENT_TYPES:
            raise ValidationError(f"Invalid content type '{content_type}'")
        if not title.strip():
            raise ValidationError("Title is required")
        if not genre.strip():
            raise ValidationError("Genre is required")
        if not file_url:
            raise ValidationError("File is required")
        if duration is not None and duration < 0:
            raise ValidationError("Duration cannot be negative")

        post = models.Post(
            user_id=user_id,
            title=title.strip(),
            description=description,
            content_type=content_type,
            file_url=file_url,
            cover_image_url=cover_image_url,
            genre=genre,
            duration=duration,
            like_count=0,
        )
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)

        logger.info(f"User {user_id} created {content_type} post {post.id}")
        return post
