"""Profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import get_current_user
from ..deps import get_db
from ..services.users import UserDirectory

router = APIRouter(prefix="/profile", tags=["Profiles"])


@router.put("", response_model=schemas.User)
def update_profile(
    payload: schemas.ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> schemas.User:
    """
    Edit the current user's profile.

    Setting requestExpert submits the expert-badge request (with expertDocuments)
    for admin review. The edit is all or nothing.
    """
    user = UserDirectory(db).update_profile(
        current_user.id,
        bio=payload.bio,
        user_type=payload.user_type,
        profile_image_url=payload.profile_image_url,
        request_expert=payload.request_expert,
        expert_documents=payload.expert_documents,
    )
    return schemas.User.model_validate(user)
