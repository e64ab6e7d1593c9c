"""
Tests for posts, likes and the feed.

Covers:
- Post creation (plain and recipe posts)
- Ownership rules on delete (401 / 403 / 404 / 200)
- Cascading delete of comments, likes and recipe
- Feed composition and like state
"""

import uuid

from test_fixtures import (
    API,
    auth_headers,
    client,
    db_session,
    make_post,
    make_recipe,
    make_user,
)
from domain.models import Comment, Like, Post, Recipe, User


# =============================================================================
# CREATE
# =============================================================================


def test_create_recipe_post(db_session):
    user = make_user(db_session)
    payload = {
        "caption": "Weeknight dinner",
        "tags": ["#Dinner", " quick "],
        "is_recipe": True,
        "recipe": {
            "title": "Lemon Chicken",
            "ingredients": ["2 chicken breasts", "1 lemon", ""],
            "instructions": ["Season", "Roast"],
            "cook_time": 35,
            "servings": 2,
        },
    }

    r = client.post(f"{API}/posts", json=payload, headers=auth_headers(user))

    assert r.status_code == 201
    body = r.json()
    assert body["is_recipe"] is True
    assert body["tags"] == ["dinner", "quick"]
    assert body["recipe"]["title"] == "Lemon Chicken"
    assert body["recipe"]["ingredients"] == ["2 chicken breasts", "1 lemon"]
    assert body["user"]["username"] == user.username

    db_session.expire_all()
    assert db_session.get(User, user.id).posts_count == 1


def test_recipe_post_without_recipe_is_rejected(db_session):
    user = make_user(db_session)
    r = client.post(f"{API}/posts", json={"is_recipe": True}, headers=auth_headers(user))
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_create_post_requires_auth():
    r = client.post(f"{API}/posts", json={"caption": "hello"})
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "NO_TOKEN"


# =============================================================================
# DELETE
# =============================================================================


def test_delete_post_without_token_is_401(db_session):
    author = make_user(db_session)
    post = make_post(db_session, author)
    r = client.delete(f"{API}/posts/{post.id}")
    assert r.status_code == 401


def test_delete_missing_post_is_404(db_session):
    user = make_user(db_session)
    r = client.delete(f"{API}/posts/{uuid.uuid4()}", headers=auth_headers(user))
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


def test_delete_someone_elses_post_is_403(db_session):
    author = make_user(db_session)
    intruder = make_user(db_session, "casual")
    post = make_post(db_session, author)

    r = client.delete(f"{API}/posts/{post.id}", headers=auth_headers(intruder))

    assert r.status_code == 403
    assert r.json()["error"]["code"] == "NOT_OWNER"
    db_session.expire_all()
    assert db_session.get(Post, post.id) is not None


def test_owner_deletes_post_with_comments_likes_and_recipe(db_session):
    author = make_user(db_session)
    fan = make_user(db_session, "casual")
    recipe = make_recipe(db_session, author)
    post_id, recipe_id = recipe.post_id, recipe.id

    client.post(f"{API}/posts/{post_id}/like", headers=auth_headers(fan))
    client.post(
        f"{API}/posts/{post_id}/comments", json={"content": "Looks great"}, headers=auth_headers(fan)
    )

    r = client.delete(f"{API}/posts/{post_id}", headers=auth_headers(author))

    assert r.status_code == 200
    assert r.json() == {"status": "ok", "deleted": str(post_id)}
    db_session.expire_all()
    assert db_session.get(Post, post_id) is None
    assert db_session.get(Recipe, recipe_id) is None
    assert db_session.query(Comment).filter_by(post_id=post_id).count() == 0
    assert db_session.query(Like).filter_by(post_id=post_id).count() == 0
    assert db_session.get(User, author.id).posts_count == 0


# =============================================================================
# FEED AND LIKES
# =============================================================================


def test_feed_contains_own_and_followed_posts_only(db_session):
    me = make_user(db_session)
    friend = make_user(db_session, "chef")
    stranger = make_user(db_session, "casual")
    make_post(db_session, me, caption="mine")
    make_post(db_session, friend, caption="friend")
    make_post(db_session, stranger, caption="stranger")

    assert client.post(f"{API}/follows/{friend.id}", headers=auth_headers(me)).status_code == 201

    r = client.get(f"{API}/posts/feed", headers=auth_headers(me))
    assert r.status_code == 200
    captions = {p["caption"] for p in r.json()}
    assert captions == {"mine", "friend"}


def test_like_twice_conflicts_and_unlike_decrements(db_session):
    author = make_user(db_session)
    fan = make_user(db_session, "casual")
    post = make_post(db_session, author)
    headers = auth_headers(fan)

    assert client.post(f"{API}/posts/{post.id}/like", headers=headers).status_code == 201
    again = client.post(f"{API}/posts/{post.id}/like", headers=headers)
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "ALREADY_LIKED"

    assert client.get(f"{API}/posts/{post.id}/like", headers=headers).json() == {"liked": True}
    detail = client.get(f"{API}/posts/{post.id}", headers=headers).json()
    assert detail["likes_count"] == 1
    assert detail["is_liked"] is True

    assert client.delete(f"{API}/posts/{post.id}/like", headers=headers).status_code == 200
    assert client.delete(f"{API}/posts/{post.id}/like", headers=headers).status_code == 404
    assert client.get(f"{API}/posts/{post.id}").json()["likes_count"] == 0


def test_like_notifies_author_but_not_self(db_session):
    author = make_user(db_session)
    fan = make_user(db_session, "casual")
    post = make_post(db_session, author)

    client.post(f"{API}/posts/{post.id}/like", headers=auth_headers(author))
    client.post(f"{API}/posts/{post.id}/like", headers=auth_headers(fan))

    r = client.get(f"{API}/notifications", headers=auth_headers(author))
    assert r.status_code == 200
    notes = r.json()
    assert len(notes) == 1
    assert notes[0]["type"] == "like"
    assert notes[0]["actor_id"] == str(fan.id)
