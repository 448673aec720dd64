"""Test likes and comments at the store level."""

import uuid
from datetime import timedelta

import pytest
from sqlalchemy import func
from sqlalchemy.orm import Session

from app import models
from app.errors import NotFoundError, ValidationError
from app.services.engagement import EngagementStore

from conftest import BASE_TIME


def like_rows(db: Session, post: models.Post) -> int:
    return db.query(func.count()).select_from(models.Like).filter(
        models.Like.post_id == post.id
    ).scalar()


def stored_like_count(db: Session, post: models.Post) -> int:
    db.expire_all()
    return db.get(models.Post, post.id).like_count


@pytest.fixture
def creator(make_user) -> models.User:
    return make_user("creator", user_type="creator")


@pytest.fixture
def post(creator, make_post) -> models.Post:
    return make_post(creator, title="Blue Train")


def test_like_unlike_scenario_keeps_counter_in_sync(db: Session, make_user, post):
    """U1 likes, U2 likes, U1 unlikes: counter follows 1, 2, 1."""
    store = EngagementStore(db)
    u1 = make_user("u1")
    u2 = make_user("u2")

    assert stored_like_count(db, post) == 0

    assert store.toggle_like(post.id, u1.id) is True
    assert stored_like_count(db, post) == 1

    assert store.toggle_like(post.id, u2.id) is True
    assert stored_like_count(db, post) == 2

    assert store.toggle_like(post.id, u1.id) is False
    assert stored_like_count(db, post) == 1

    assert store.is_liked(post.id, u1.id) is False
    assert store.is_liked(post.id, u2.id) is True
    assert like_rows(db, post) == stored_like_count(db, post)


def test_toggle_twice_restores_state(db: Session, make_user, post):
    store = EngagementStore(db)
    fan = make_user("fan")

    before_liked = store.is_liked(post.id, fan.id)
    before_count = stored_like_count(db, post)

    store.toggle_like(post.id, fan.id)
    store.toggle_like(post.id, fan.id)

    assert store.is_liked(post.id, fan.id) == before_liked
    assert stored_like_count(db, post) == before_count
    assert like_rows(db, post) == before_count


def test_toggle_like_unknown_post(db: Session, make_user):
    store = EngagementStore(db)
    fan = make_user("fan")

    with pytest.raises(NotFoundError):
        store.toggle_like(uuid.uuid4(), fan.id)

    assert db.query(models.Like).count() == 0


def test_liked_post_ids(db: Session, make_user, creator, make_post):
    store = EngagementStore(db)
    fan = make_user("fan")
    first = make_post(creator, title="First")
    second = make_post(creator, title="Second")
    store.toggle_like(first.id, fan.id)

    assert store.liked_post_ids([first.id, second.id], fan.id) == {first.id}
    assert store.liked_post_ids([first.id, second.id], None) == set()
    assert store.liked_post_ids([], fan.id) == set()


def test_add_comment(db: Session, make_user, post):
    store = EngagementStore(db)
    fan = make_user("fan")

    comment = store.add_comment(post.id, fan.id, "  Great solo!  ")

    assert comment.id is not None
    assert comment.post_id == post.id
    assert comment.user_id == fan.id
    assert comment.content == "Great solo!"


@pytest.mark.parametrize("content", ["", "   ", "\n\t"])
def test_add_comment_rejects_blank_content(db: Session, make_user, post, content):
    store = EngagementStore(db)
    fan = make_user("fan")

    with pytest.raises(ValidationError):
        store.add_comment(post.id, fan.id, content)

    assert db.query(models.Comment).count() == 0


def test_add_comment_unknown_post(db: Session, make_user):
    store = EngagementStore(db)
    fan = make_user("fan")

    with pytest.raises(NotFoundError):
        store.add_comment(uuid.uuid4(), fan.id, "Hello?")


def test_list_comments_newest_first_and_scoped_to_post(
    db: Session, make_user, creator, make_post, post
):
    fan = make_user("fan")
    other_post = make_post(creator, title="Other")

    for minutes, content in [(30, "oldest"), (10, "newest"), (20, "middle")]:
        db.add(
            models.Comment(
                post_id=post.id,
                user_id=fan.id,
                content=content,
                created_at=BASE_TIME - timedelta(minutes=minutes),
            )
        )
    db.add(models.Comment(post_id=other_post.id, user_id=fan.id, content="elsewhere"))
    db.commit()

    comments = EngagementStore(db).list_comments(post.id)

    assert [c.content for c in comments] == ["newest", "middle", "oldest"]
    assert all(c.post_id == post.id for c in comments)
    created = [c.created_at for c in comments]
    assert created == sorted(created, reverse=True)
    assert comments[0].user.id == fan.id


def test_list_comments_unknown_post(db: Session):
    with pytest.raises(NotFoundError):
        EngagementStore(db).list_comments(uuid.uuid4())
