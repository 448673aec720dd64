"""
Moderation gateway: admin changes to verification and expert badges.

Callers are trusted; the admin check happens in the HTTP layer
(see auth.require_admin).
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from .. import models
from ..errors import NotFoundError
from ..utils.audit import log_moderation_action

logger = logging.getLogger(__name__)


class ModerationGateway:
    def __init__(self, db: Session, actor_id: str | None = None):
        self.db = db
        self.actor_id = actor_id

    def _require_user(self, user_id: str) -> models.User:
        user = self.db.get(models.User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def set_verified(self, user_id: str, is_verified: bool) -> models.User:
        user = self._require_user(user_id)
        user.is_verified = is_verified

        log_moderation_action(
            db=self.db,
            actor_id=self.actor_id,
            action="set_verified",
            target_type="user",
            target_id=user_id,
            note=f"is_verified={is_verified}",
        )
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"Admin {self.actor_id} set is_verified={is_verified} on user {user_id}")
        return user

    def set_expert_status(self, user_id: str, approved: bool) -> models.User:
        """
        Decide an expert-badge request.

        Approval sets the expert flag and status "approved"; rejection clears the
        flag and sets "rejected". Nothing here moves a request back to "pending".
        """
        user = self._require_user(user_id)
        user.is_expert = approved
        user.expert_request_status = "approved" if approved else "rejected"

        log_moderation_action(
            db=self.db,
            actor_id=self.actor_id,
            action="approve_expert" if approved else "reject_expert",
            target_type="user",
            target_id=user_id,
        )
        self.db.commit()
        self.db.refresh(user)

        logger.info(
            f"Admin {self.actor_id} {'approved' if approved else 'rejected'} expert badge for user {user_id}"
        )
        return user

    def list_users(self) -> list[models.User]:
        return (
            self.db.query(models.User)
            .order_by(models.User.created_at.desc(), models.User.id)
            .all()
        )

    def list_expert_requests(self) -> list[models.User]:
        """Users whose expert request awaits a decision, newest accounts first."""
        return (
            self.db.query(models.User)
            .filter(models.User.expert_request_status == "pending")
            .order_by(models.User.created_at.desc(), models.User.id)
            .all()
        )
