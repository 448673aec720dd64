from __future__ import annotations

import os

# Must be set before the app modules read the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-0123456789-abcdefghij"
os.environ["IDENTITY_TOKEN_SECRET"] = "test-identity-secret-0123456789-abcdefgh"

from datetime import datetime, timedelta, timezone
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app import models
from app.auth import create_access_token
from app.db import Database
from app.main import create_app

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def database() -> Generator[Database, None, None]:
    """Fresh in-memory database with the full schema."""
    database = Database("sqlite://")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture()
def db(database: Database) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    session = database.session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture()
def client(database: Database) -> Generator[TestClient, None, None]:
    with TestClient(create_app(database)) as test_client:
        yield test_client


@pytest.fixture()
def make_user(db: Session) -> Callable[..., models.User]:
    """Create and commit a user."""

    def _make_user(user_id: str, user_type: str = "listener", **fields) -> models.User:
        user = models.User(
            id=user_id,
            email=f"{user_id}@example.com",
            first_name=user_id.capitalize(),
            last_name="Tester",
            user_type=user_type,
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_post(db: Session) -> Callable[..., models.Post]:
    """Create and commit a post; minutes_ago spaces creation times deterministically."""

    def _make_post(
        user: models.User,
        title: str = "Track",
        genre: str = "jazz",
        content_type: str = "audio",
        minutes_ago: int = 0,
        like_count: int = 0,
    ) -> models.Post:
        post = models.Post(
            user_id=user.id,
            title=title,
            content_type=content_type,
            file_url=f"/uploads/{title.lower().replace(' ', '-')}.mp3",
            genre=genre,
            like_count=like_count,
            created_at=BASE_TIME - timedelta(minutes=minutes_ago),
        )
        db.add(post)
        db.commit()
        db.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def auth_headers() -> Callable[[str], dict[str, str]]:
    def _auth_headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _auth_headers
