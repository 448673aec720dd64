"""
Feed assembler: the filtered, sorted, paginated post listing.

Posts are fetched in one query (author joined in), then comment counts and
the viewer's like state are read with batch queries and returned on
PostView items, so a page costs three round trips regardless of its size.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, contains_eager

from .. import models, schemas
from ..errors import NotFoundError
from .engagement import EngagementStore

logger = logging.getLogger(__name__)

SORT_RECENT = "recent"
SORT_POPULAR = "popular"

USER_TYPE_VERIFIED = "verified"
USER_TYPE_EXPERT = "expert"


@dataclass
class FeedFilters:
    """Feed filters. Unknown user_type/sort_by values are ignored."""

    genre: str | None = None
    user_type: str | None = None
    sort_by: str | None = None


class FeedAssembler:
    def __init__(self, db: Session):
        self.db = db
        self.engagement = EngagementStore(db)

    def list_posts(
        self,
        limit: int = 20,
        offset: int = 0,
        filters: FeedFilters | None = None,
        viewer_id: str | None = None,
    ) -> list[schemas.PostView]:
        """
        List posts for the feed.

        Genre matches exactly (case-sensitive). user_type keeps posts by verified
        or by expert authors; genre and user_type combine with AND. sort_by
        "popular" orders by like count, anything else by creation time, newest
        first. Ties fall back to creation time and then id, both descending.

        Returns:
            PostView items carrying comment_count and this viewer's is_liked
        """
        filters = filters or FeedFilters()

        query = (
            self.db.query(models.Post)
            .join(models.Post.user)
            .options(contains_eager(models.Post.user))
        )

        if filters.genre:
            query = query.filter(models.Post.genre == filters.genre)

        if filters.user_type == USER_TYPE_VERIFIED:
            query = query.filter(models.User.is_verified == True)
        elif filters.user_type == USER_TYPE_EXPERT:
            query = query.filter(models.User.is_expert == True)

        if filters.sort_by == SORT_POPULAR:
            query = query.order_by(
                models.Post.like_count.desc(),
                models.Post.created_at.desc(),
                models.Post.id.desc(),
            )
        else:
            query = query.order_by(models.Post.created_at.desc(), models.Post.id.desc())

        posts = query.offset(offset).limit(limit).all()
        return self._annotate(posts, viewer_id)

    def get_post(self, post_id: UUID, viewer_id: str | None = None) -> schemas.PostView:
        post = (
            self.db.query(models.Post)
            .join(models.Post.user)
            .options(contains_eager(models.Post.user))
            .filter(models.Post.id == post_id)
            .first()
        )
        if post is None:
            raise NotFoundError("Post", post_id)
        return self._annotate([post], viewer_id)[0]

    def _annotate(
        self, posts: list[models.Post], viewer_id: str | None
    ) -> list[schemas.PostView]:
        """
        Build one PostView per post with its comment count and the viewer's like state.

        The ORM objects are shared through the session identity map, so the
        per-viewer values live only on the returned views.
        """
        if not posts:
            return []

        post_ids = [post.id for post in posts]

        comment_counts = (
            self.db.query(models.Comment.post_id, func.count(models.Comment.id))
            .filter(models.Comment.post_id.in_(post_ids))
            .group_by(models.Comment.post_id)
            .all()
        )
        comment_count_map = {post_id: count for post_id, count in comment_counts}

        liked = self.engagement.liked_post_ids(post_ids, viewer_id)

        return [
            schemas.PostView.model_validate(post).model_copy(
                update={
                    "comment_count": comment_count_map.get(post.id, 0),
                    "is_liked": post.id in liked,
                }
            )
            for post in posts
        ]
