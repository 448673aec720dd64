"""Audit logging utility for moderation actions."""

from __future__ import annotations

from sqlalchemy.orm import Session

from .. import models


def log_moderation_action(
    db: Session,
    actor_id: str | None,
    action: str,
    target_type: str | None = None,
    target_id: str | None = None,
    note: str | None = None,
) -> models.AuditLog:
    """
    Add a moderation action to the audit log.

    The entry joins the caller's transaction; the caller commits.

    Args:
        db: Database session
        actor_id: ID of the admin performing the action (None for system actions)
        action: Action name (e.g., "set_verified", "approve_expert")
        target_type: Type of target (e.g., "user")
        target_id: ID of the target entity
        note: Additional context about the action

    Returns:
        The pending AuditLog entry
    """
    audit_entry = models.AuditLog(
        actor_id=actor_id,
        action=action,
        target_type=target_type,
        target_id=str(target_id) if target_id is not None else None,
        note=note,
    )
    db.add(audit_entry)
    return audit_entry
