"""
Engagement store: likes and comments on posts.

The like counter on posts is denormalized. Every change to it is a relative
UPDATE (like_count = like_count +/- 1) issued in the same transaction as the
like row insert/delete, so concurrent toggles by different users never lose
an update.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager

from .. import models, settings
from ..errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class EngagementStore:
    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    def toggle_like(self, post_id: UUID, user_id: str) -> bool:
        """
        Flip the like of user_id on post_id and return the new liked state.

        Not idempotent: two calls in a row like and then unlike.

        Raises:
            NotFoundError: the post does not exist
            ConflictError: a concurrent toggle by the same user inserted the row first
        """
        try:
            removed = self.db.execute(
                delete(models.Like)
                .where(models.Like.post_id == post_id, models.Like.user_id == user_id)
                .execution_options(synchronize_session=False)
            ).rowcount

            if removed:
                self._adjust_like_count(post_id, -1)
                liked = False
            else:
                # The increment doubles as the existence check for the post
                if not self._adjust_like_count(post_id, 1):
                    self.db.rollback()
                    raise NotFoundError("Post", post_id)
                self.db.add(models.Like(post_id=post_id, user_id=user_id))
                self.db.flush()
                liked = True

            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Concurrent like toggle on post {post_id} by user {user_id}")
            raise ConflictError("Like state changed concurrently, try again")

        logger.debug(f"User {user_id} {'liked' if liked else 'unliked'} post {post_id}")
        return liked

    def _adjust_like_count(self, post_id: UUID, delta: int) -> int:
        """Relative counter update; returns the number of posts touched (0 or 1)."""
        return self.db.execute(
            update(models.Post)
            .where(models.Post.id == post_id)
            .values(like_count=models.Post.like_count + delta)
            .execution_options(synchronize_session=False)
        ).rowcount

    def is_liked(self, post_id: UUID, user_id: str) -> bool:
        return self.db.query(
            self.db.query(models.Like)
            .filter(models.Like.post_id == post_id, models.Like.user_id == user_id)
            .exists()
        ).scalar()

    def liked_post_ids(self, post_ids: list[UUID], user_id: str | None) -> set[UUID]:
        """
        Get the subset of post_ids that user_id has liked.

        Args:
            post_ids: Posts to check
            user_id: The viewer; None yields an empty set

        Returns:
            Set of liked post IDs
        """
        if not post_ids or not user_id:
            return set()

        rows = (
            self.db.query(models.Like.post_id)
            .filter(
                models.Like.post_id.in_(post_ids),
                models.Like.user_id == user_id,
            )
            .all()
        )
        return {row[0] for row in rows}

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def add_comment(self, post_id: UUID, user_id: str, content: str) -> models.Comment:
        """
        Create a comment on a post.

        Content is stripped; blank content is rejected here rather than trusted
        to the client.
        """
        body = (content or "").strip()
        if not body:
            raise ValidationError("Comment content cannot be empty")
        if len(body) > settings.COMMENT_MAX_LENGTH:
            raise ValidationError(
                f"Comment exceeds {settings.COMMENT_MAX_LENGTH} characters"
            )

        if self.db.get(models.Post, post_id) is None:
            raise NotFoundError("Post", post_id)

        comment = models.Comment(post_id=post_id, user_id=user_id, content=body)
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)

        logger.info(f"User {user_id} commented on post {post_id}")
        return comment

    def list_comments(self, post_id: UUID) -> list[models.Comment]:
        """Comments of one post with their authors, newest first."""
        if self.db.get(models.Post, post_id) is None:
            raise NotFoundError("Post", post_id)

        return (
            self.db.query(models.Comment)
            .join(models.Comment.user)
            .options(contains_eager(models.Comment.user))
            .filter(models.Comment.post_id == post_id)
            .order_by(models.Comment.created_at.desc(), models.Comment.id.desc())
            .all()
        )
