"""Authentication endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import create_access_token, get_current_user, verify_identity_token
from ..deps import get_db
from ..services.users import UserDirectory

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=schemas.LoginResponse)
def login(
    payload: schemas.LoginRequest,
    db: Session = Depends(get_db),
) -> schemas.LoginResponse:
    """
    Exchange an identity-provider token for a FanFlow access token.

    The account is created on first login and refreshed on later ones.
    """
    claims = verify_identity_token(payload.id_token)
    user = UserDirectory(db).upsert_user(claims)
    logger.info(f"User {user.id} logged in")

    return schemas.LoginResponse(
        access_token=create_access_token(user.id),
        user=schemas.User.model_validate(user),
    )


@router.get("/user", response_model=schemas.User)
def get_me(current_user: models.User = Depends(get_current_user)) -> schemas.User:
    """Current user."""
    return schemas.User.model_validate(current_user)
