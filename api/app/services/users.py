"""User directory: account records, roles and badge requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from .. import models
from ..errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class IdentityClaims:
    """Claims handed over by the identity provider after it authenticated someone."""

    sub: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None


class UserDirectory:
    """Reads and writes user records."""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> models.User | None:
        return self.db.get(models.User, user_id)

    def require_user(self, user_id: str) -> models.User:
        user = self.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def upsert_user(self, claims: IdentityClaims) -> models.User:
        """
        Create the user on first login, otherwise refresh the provider fields.

        The provider's profile image is only taken when the user has not set one,
        so a picture uploaded from the profile page survives later logins.
        """
        if not claims.sub:
            raise ValidationError("Identity subject is required")

        user = self.get_user(claims.sub)
        if user is None:
            user = models.User(
                id=claims.sub,
                email=claims.email,
                first_name=claims.first_name,
                last_name=claims.last_name,
                profile_image_url=claims.profile_image_url,
                user_type="listener",
                is_verified=False,
                is_expert=False,
                expert_request_status="none",
            )
            self.db.add(user)
            logger.info(f"Created user {claims.sub}")
        else:
            user.email = claims.email
            user.first_name = claims.first_name
            user.last_name = claims.last_name
            if not user.profile_image_url and claims.profile_image_url:
                user.profile_image_url = claims.profile_image_url

        self.db.commit()
        self.db.refresh(user)
        return user

    def update_profile(
        self,
        user_id: str,
        bio: str | None = None,
        user_type: str | None = None,
        profile_image_url: str | None = None,
        request_expert: bool = False,
        expert_documents: str | None = None,
    ) -> models.User:
        """
        Apply a self-service profile edit. Only fields that are not None change.

        With request_expert the expert-badge request is submitted in the same
        commit; every check runs before anything is modified, so a rejected
        edit leaves the record untouched.
        """
        user = self.require_user(user_id)

        if user_type is not None and user_type not in models.SELF_SERVICE_USER_TYPES:
            raise ValidationError(
                f"User type must be one of: {', '.join(models.SELF_SERVICE_USER_TYPES)}"
            )
        if request_expert:
            self._check_expert_request(user)

        # Experts and admins keep their role; it is granted, not chosen
        if user_type is not None and user.user_type in models.SELF_SERVICE_USER_TYPES:
            user.user_type = user_type
        if bio is not None:
            user.bio = bio
        if profile_image_url is not None:
            user.profile_image_url = profile_image_url
        if request_expert:
            self._mark_expert_pending(user, expert_documents)

        self.db.commit()
        self.db.refresh(user)
        return user

    def request_expert(self, user_id: str, documents: str | None) -> models.User:
        """
        Submit (or re-submit) an expert-badge request.

        Moves the request to "pending" from "none" or "rejected"; a pending request
        just gets its documents replaced. Approved badges cannot be re-requested.
        """
        user = self.require_user(user_id)
        self._check_expert_request(user)
        self._mark_expert_pending(user, documents)
        self.db.commit()
        self.db.refresh(user)
        return user

    def _check_expert_request(self, user: models.User) -> None:
        if user.expert_request_status == "approved":
            raise ConflictError("Expert badge already approved")

    def _mark_expert_pending(self, user: models.User, documents: str | None) -> None:
        user.expert_request_status = "pending"
        user.expert_documents = documents
        logger.info(f"User {user.id} requested the expert badge")
