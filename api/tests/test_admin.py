"""Test admin moderation endpoints."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models import AuditLog, User


@pytest.fixture
def admin(make_user) -> User:
    return make_user("admin", user_type="admin")


@pytest.fixture
def applicant(make_user) -> User:
    return make_user(
        "applicant",
        user_type="creator",
        expert_request_status="pending",
        expert_documents="conservatory-diploma.pdf",
    )


@pytest.mark.parametrize(
    "method, path, body",
    [
        ("get", "/admin/users", None),
        ("get", "/admin/expert-requests", None),
        ("put", "/admin/users/applicant/verify", {"isVerified": True}),
        ("put", "/admin/users/applicant/expert-request", {"approved": True}),
    ],
)
def test_admin_routes_reject_non_admins(
    client: TestClient, applicant: User, auth_headers, method, path, body
):
    kwargs = {"json": body} if body is not None else {}

    anonymous = client.request(method.upper(), path, **kwargs)
    assert anonymous.status_code == 401

    forbidden = client.request(method.upper(), path, headers=auth_headers(applicant.id), **kwargs)
    assert forbidden.status_code == 403
    assert forbidden.json()["detail"] == "Admin access required"


def test_list_users(client: TestClient, admin: User, applicant: User, auth_headers):
    response = client.get("/admin/users", headers=auth_headers(admin.id))

    assert response.status_code == 200
    ids = {u["id"] for u in response.json()}
    assert ids == {"admin", "applicant"}
    record = next(u for u in response.json() if u["id"] == "applicant")
    assert record["email"] == "applicant@example.com"
    assert record["expertRequestStatus"] == "pending"


def test_list_expert_requests(
    client: TestClient, admin: User, applicant: User, make_user, auth_headers
):
    make_user("bystander")

    response = client.get("/admin/expert-requests", headers=auth_headers(admin.id))

    assert response.status_code == 200
    data = response.json()
    assert [u["id"] for u in data] == ["applicant"]
    assert data[0]["expertDocuments"] == "conservatory-diploma.pdf"


def test_verify_user(client: TestClient, admin: User, applicant: User, auth_headers, db: Session):
    response = client.put(
        f"/admin/users/{applicant.id}/verify",
        json={"isVerified": True},
        headers=auth_headers(admin.id),
    )

    assert response.status_code == 200
    assert response.json()["isVerified"] is True

    db.expire_all()
    assert db.get(User, applicant.id).is_verified is True
    log = db.query(AuditLog).filter(AuditLog.target_id == applicant.id).one()
    assert log.action == "set_verified"
    assert log.actor_id == admin.id


def test_verified_user_shows_in_verified_feed(
    client: TestClient, admin: User, applicant: User, make_post, auth_headers
):
    make_post(applicant, title="Etude")
    assert client.get("/posts", params={"userType": "verified"}).json() == []

    client.put(
        f"/admin/users/{applicant.id}/verify",
        json={"isVerified": True},
        headers=auth_headers(admin.id),
    )

    feed = client.get("/posts", params={"userType": "verified"}).json()
    assert [p["title"] for p in feed] == ["Etude"]


def test_approve_expert_request(client: TestClient, admin: User, applicant: User, auth_headers):
    response = client.put(
        f"/admin/users/{applicant.id}/expert-request",
        json={"approved": True},
        headers=auth_headers(admin.id),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["isExpert"] is True
    assert data["expertRequestStatus"] == "approved"

    pending = client.get("/admin/expert-requests", headers=auth_headers(admin.id)).json()
    assert pending == []


def test_reject_expert_request(client: TestClient, admin: User, applicant: User, auth_headers):
    response = client.put(
        f"/admin/users/{applicant.id}/expert-request",
        json={"approved": False},
        headers=auth_headers(admin.id),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["isExpert"] is False
    assert data["expertRequestStatus"] == "rejected"


def test_moderate_unknown_user(client: TestClient, admin: User, auth_headers):
    headers = auth_headers(admin.id)

    verify = client.put("/admin/users/ghost/verify", json={"isVerified": True}, headers=headers)
    decide = client.put("/admin/users/ghost/expert-request", json={"approved": True}, headers=headers)

    assert verify.status_code == 404
    assert decide.status_code == 404
    assert verify.json()["detail"] == "User not found"


def test_verify_requires_body(client: TestClient, admin: User, applicant: User, auth_headers):
    response = client.put(
        f"/admin/users/{applicant.id}/verify", json={}, headers=auth_headers(admin.id)
    )

    assert response.status_code == 422
