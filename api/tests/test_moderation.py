"""Test the moderation gateway and its audit trail."""

import pytest
from sqlalchemy.orm import Session

from app import models
from app.errors import NotFoundError
from app.services.moderation import ModerationGateway
from app.services.users import UserDirectory


@pytest.fixture
def admin(make_user) -> models.User:
    return make_user("admin", user_type="admin")


def audit_rows(db: Session, target_id: str) -> list[models.AuditLog]:
    return (
        db.query(models.AuditLog)
        .filter(models.AuditLog.target_id == target_id)
        .order_by(models.AuditLog.created_at)
        .all()
    )


def test_approve_pending_request(db: Session, admin, make_user):
    applicant = make_user("applicant", user_type="creator")
    UserDirectory(db).request_expert(applicant.id, "diploma.pdf")

    user = ModerationGateway(db, actor_id=admin.id).set_expert_status(applicant.id, True)

    assert user.is_expert is True
    assert user.expert_request_status == "approved"

    rows = audit_rows(db, applicant.id)
    assert [row.action for row in rows] == ["approve_expert"]
    assert rows[0].actor_id == admin.id
    assert rows[0].target_type == "user"


def test_reject_request(db: Session, admin, make_user):
    applicant = make_user("applicant", expert_request_status="pending")

    user = ModerationGateway(db, actor_id=admin.id).set_expert_status(applicant.id, False)

    assert user.is_expert is False
    assert user.expert_request_status == "rejected"
    assert [row.action for row in audit_rows(db, applicant.id)] == ["reject_expert"]


def test_rejected_user_can_request_again(db: Session, admin, make_user):
    applicant = make_user("applicant", expert_request_status="pending")
    ModerationGateway(db, actor_id=admin.id).set_expert_status(applicant.id, False)

    user = UserDirectory(db).request_expert(applicant.id, "better-diploma.pdf")

    assert user.expert_request_status == "pending"
    assert user.expert_documents == "better-diploma.pdf"


def test_revoking_an_expert_badge(db: Session, admin, make_user):
    expert = make_user("expert", is_expert=True, expert_request_status="approved")

    user = ModerationGateway(db, actor_id=admin.id).set_expert_status(expert.id, False)

    assert user.is_expert is False
    assert user.expert_request_status == "rejected"


def test_set_verified(db: Session, admin, make_user):
    gateway = ModerationGateway(db, actor_id=admin.id)
    target = make_user("target")

    assert gateway.set_verified(target.id, True).is_verified is True
    assert gateway.set_verified(target.id, False).is_verified is False

    rows = audit_rows(db, target.id)
    assert [row.action for row in rows] == ["set_verified", "set_verified"]
    assert {row.note for row in rows} == {"is_verified=True", "is_verified=False"}


def test_unknown_user(db: Session, admin):
    gateway = ModerationGateway(db, actor_id=admin.id)

    with pytest.raises(NotFoundError):
        gateway.set_verified("ghost", True)
    with pytest.raises(NotFoundError):
        gateway.set_expert_status("ghost", True)

    assert db.query(models.AuditLog).count() == 0


def test_list_expert_requests_only_pending(db: Session, admin, make_user):
    make_user("waiting", expert_request_status="pending")
    make_user("done", expert_request_status="approved", is_expert=True)
    make_user("declined", expert_request_status="rejected")
    make_user("quiet")

    pending = ModerationGateway(db, actor_id=admin.id).list_expert_requests()

    assert [user.id for user in pending] == ["waiting"]


def test_list_users(db: Session, admin, make_user):
    make_user("alice")
    make_user("bob")

    users = ModerationGateway(db).list_users()

    assert {user.id for user in users} == {"admin", "alice", "bob"}
