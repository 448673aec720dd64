"""Request and response schemas; attributes are snake_case, JSON keys camelCase."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from . import settings


UserType = Literal["listener", "creator", "expert", "admin"]
ExpertRequestStatus = Literal["none", "pending", "approved", "rejected"]
ContentType = Literal["audio", "video"]


class ApiModel(BaseModel):
    """Base schema: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================================
# HEALTH
# ============================================================================


class HealthResponse(ApiModel):
    """Health check response."""

    status: Literal["ok"] = "ok"
    uptime_s: float | None = None


# ============================================================================
# USER SCHEMAS
# ============================================================================


class UserPublic(ApiModel):
    """Author information embedded in posts and comments."""

    id: str
    first_name: str | None = None
    last_name: str | None = None
    display_name: str
    profile_image_url: str | None = None
    user_type: UserType
    is_verified: bool
    is_expert: bool


class User(UserPublic):
    """Full user record (the user themselves or an admin)."""

    email: str | None = None
    bio: str | None = None
    expert_request_status: ExpertRequestStatus
    expert_documents: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class ProfileUpdate(ApiModel):
    """Profile edit request."""

    bio: str | None = Field(None, max_length=1000)
    user_type: Literal["listener", "creator"] | None = None
    profile_image_url: str | None = Field(None, max_length=1000)
    request_expert: bool = False
    expert_documents: str | None = Field(None, max_length=5000)


class VerifyUserRequest(ApiModel):
    is_verified: bool


class ExpertDecisionRequest(ApiModel):
    approved: bool


# ============================================================================
# AUTH SCHEMAS
# ============================================================================


class LoginRequest(ApiModel):
    """Identity-provider token exchange."""

    id_token: str = Field(..., min_length=1)


class LoginResponse(ApiModel):
    access_token: str
    token_type: str = "bearer"
    user: User


# ============================================================================
# POST SCHEMAS
# ============================================================================


class Post(ApiModel):
    """Stored post."""

    id: UUID
    user_id: str
    title: str
    description: str | None = None
    content_type: ContentType
    file_url: str
    cover_image_url: str | None = None
    genre: str
    duration: int | None = None
    like_count: int
    created_at: datetime
    updated_at: datetime | None = None


class PostView(Post):
    """Post as shown in the feed: author, comment count and viewer like state."""

    user: UserPublic
    comment_count: int = 0
    is_liked: bool = False


class PostCreate(ApiModel):
    """Create post request. File references come from the upload service."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    content_type: ContentType
    file_url: str = Field(..., min_length=1, max_length=1000)
    cover_image_url: str | None = Field(None, max_length=1000)
    genre: str = Field(..., min_length=1, max_length=50)
    duration: int | None = Field(None, ge=0)


# ============================================================================
# ENGAGEMENT SCHEMAS
# ============================================================================


class Comment(ApiModel):
    """Comment on a post."""

    id: UUID
    post_id: UUID
    user_id: str
    content: str
    created_at: datetime


class CommentView(Comment):
    """Comment with its author."""

    user: UserPublic


class CommentCreate(ApiModel):
    """Create comment request."""

    content: str = Field(..., max_length=settings.COMMENT_MAX_LENGTH)


class LikeToggleResponse(ApiModel):
    is_liked: bool
