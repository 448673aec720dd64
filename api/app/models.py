"""ORM models: users, posts, comments, likes and the moderation audit log."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from .db import Base


USER_TYPES = ("listener", "creator", "expert", "admin")
# Roles a user may pick for themselves on the profile page
SELF_SERVICE_USER_TYPES = ("listener", "creator")
# Roles allowed to publish posts
PUBLISHER_USER_TYPES = ("creator", "expert")

EXPERT_REQUEST_STATUSES = ("none", "pending", "approved", "rejected")

CONTENT_TYPES = ("audio", "video")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# CORE ENTITIES
# ============================================================================


class User(Base):
    """User account, keyed by the identity provider's subject."""

    __tablename__ = "users"

    id = Column(String(255), primary_key=True)
    email = Column(String(255), nullable=True, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    profile_image_url = Column(String(1000), nullable=True)
    bio = Column(Text, nullable=True)

    # Role & badges
    user_type = Column(String(20), nullable=False, default="listener", index=True)
    is_verified = Column(Boolean, nullable=False, default=False, index=True)
    is_expert = Column(Boolean, nullable=False, default=False, index=True)
    expert_request_status = Column(
        String(20), nullable=False, default="none", index=True
    )  # none, pending, approved, rejected
    expert_documents = Column(Text, nullable=True)  # Opaque reference to supporting docs

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    # Relationships
    posts = relationship("Post", back_populates="user")
    comments = relationship("Comment", back_populates="user")

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        if parts:
            return " ".join(parts)
        if self.email:
            return self.email.split("@")[0]
        return self.id


class Post(Base):
    """Audio or video post with file references."""

    __tablename__ = "posts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)

    # Content
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    content_type = Column(String(10), nullable=False)  # audio, video
    file_url = Column(String(1000), nullable=False)
    cover_image_url = Column(String(1000), nullable=True)
    genre = Column(String(50), nullable=False, index=True)
    duration = Column(Integer, nullable=True)  # Seconds

    # Denormalized; only ever changed with relative UPDATEs (see EngagementStore)
    like_count = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="post", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_posts_created_id", created_at.desc(), id.desc()),
        Index("ix_posts_likes_created", like_count.desc(), created_at.desc()),
        CheckConstraint("content_type IN ('audio', 'video')", name="ck_posts_content_type"),
        CheckConstraint("like_count >= 0", name="ck_posts_like_count_non_negative"),
    )


# ============================================================================
# ENGAGEMENT
# ============================================================================


class Comment(Base):
    """Comment on a post."""

    __tablename__ = "comments"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    post_id = Column(Uuid(as_uuid=True), ForeignKey("posts.id"), nullable=False, index=True)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    # Relationships
    post = relationship("Post", back_populates="comments")
    user = relationship("User", back_populates="comments")

    __table_args__ = (Index("ix_comments_post_created", post_id, created_at.desc()),)


class Like(Base):
    """A user's like on a post; at most one per (post, user)."""

    __tablename__ = "likes"

    post_id = Column(Uuid(as_uuid=True), ForeignKey("posts.id"), primary_key=True)
    user_id = Column(String(255), ForeignKey("users.id"), primary_key=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    post = relationship("Post", back_populates="likes")


# ============================================================================
# MODERATION
# ============================================================================


class AuditLog(Base):
    """Audit log for admin actions."""

    __tablename__ = "audit_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    actor_id = Column(String(255), ForeignKey("users.id"), nullable=True, index=True)

    action = Column(String(100), nullable=False, index=True)
    target_type = Column(String(20), nullable=True)
    target_id = Column(String(255), nullable=True, index=True)
    note = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    __table_args__ = (
        Index("ix_audit_logs_actor_created", actor_id, created_at.desc()),
    )
