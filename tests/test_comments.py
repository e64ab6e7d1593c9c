"""
Tests for comments and the nested thread view.
"""

import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace

from test_fixtures import API, auth_headers, client, db_session, make_post, make_user
from domain.models import Post
from services.comment_service import build_comment_tree


def _comment(created_at, parent_id=None, post_id=None):
    """Attribute bag shaped like a Comment row"""
    return SimpleNamespace(
        id=uuid.uuid4(),
        post_id=post_id or uuid.uuid4(),
        user_id=uuid.uuid4(),
        parent_id=parent_id,
        content="comment",
        likes_count=0,
        created_at=created_at,
        user=None,
    )


def test_tree_nests_replies_oldest_first_at_every_level():
    t0 = datetime(2025, 3, 1, 12, 0)
    post_id = uuid.uuid4()
    root_late = _comment(t0 + timedelta(minutes=10), post_id=post_id)
    root_early = _comment(t0, post_id=post_id)
    reply_late = _comment(t0 + timedelta(minutes=5), root_early.id, post_id)
    reply_early = _comment(t0 + timedelta(minutes=1), root_early.id, post_id)
    nested = _comment(t0 + timedelta(minutes=6), reply_early.id, post_id)

    tree = build_comment_tree([root_late, reply_late, nested, root_early, reply_early])

    assert [n.id for n in tree] == [root_early.id, root_late.id]
    assert [n.id for n in tree[0].replies] == [reply_early.id, reply_late.id]
    assert [n.id for n in tree[0].replies[0].replies] == [nested.id]
    assert tree[1].replies == []


def test_reply_with_unknown_parent_becomes_root():
    orphan = _comment(datetime(2025, 3, 1), parent_id=uuid.uuid4())
    tree = build_comment_tree([orphan])
    assert [n.id for n in tree] == [orphan.id]


def test_thread_endpoint_and_cascading_delete(db_session):
    author = make_user(db_session)
    fan = make_user(db_session, "casual")
    post = make_post(db_session, author)
    url = f"{API}/posts/{post.id}/comments"

    root = client.post(url, json={"content": "First!"}, headers=auth_headers(fan)).json()
    reply = client.post(
        url, json={"content": "Thanks", "parent_id": root["id"]}, headers=auth_headers(author)
    ).json()
    client.post(url, json={"content": "Welcome", "parent_id": reply["id"]}, headers=auth_headers(fan))

    thread = client.get(f"{url}/thread").json()
    assert len(thread) == 1
    assert thread[0]["replies"][0]["id"] == reply["id"]
    assert thread[0]["replies"][0]["replies"][0]["content"] == "Welcome"
    assert len(client.get(url).json()) == 3

    forbidden = client.delete(f"{API}/comments/{root['id']}", headers=auth_headers(author))
    assert forbidden.status_code == 403

    r = client.delete(f"{API}/comments/{root['id']}", headers=auth_headers(fan))
    assert r.status_code == 200
    assert r.json()["removed"] == 3
    assert client.get(url).json() == []
    db_session.expire_all()
    assert db_session.get(Post, post.id).comments_count == 0


def test_deleting_a_reply_counts_its_whole_subtree(db_session):
    author = make_user(db_session)
    fan = make_user(db_session, "casual")
    post = make_post(db_session, author)
    url = f"{API}/posts/{post.id}/comments"

    root = client.post(url, json={"content": "Crumb shot?"}, headers=auth_headers(fan)).json()
    reply = client.post(
        url, json={"content": "Coming up", "parent_id": root["id"]}, headers=auth_headers(author)
    ).json()
    nested = client.post(
        url, json={"content": "Can't wait", "parent_id": reply["id"]}, headers=auth_headers(fan)
    ).json()
    client.post(url, json={"content": "Me too", "parent_id": nested["id"]}, headers=auth_headers(fan))
    client.post(url, json={"content": "Open crumb!", "parent_id": root["id"]}, headers=auth_headers(fan))

    r = client.delete(f"{API}/comments/{reply['id']}", headers=auth_headers(author))

    assert r.json()["removed"] == 3
    remaining = client.get(url).json()
    assert sorted(c["content"] for c in remaining) == ["Crumb shot?", "Open crumb!"]
    db_session.expire_all()
    assert db_session.get(Post, post.id).comments_count == len(remaining)


def test_reply_to_comment_on_another_post_is_rejected(db_session):
    user = make_user(db_session)
    first = make_post(db_session, user)
    second = make_post(db_session, user, caption="other")
    parent = client.post(
        f"{API}/posts/{first.id}/comments", json={"content": "hi"}, headers=auth_headers(user)
    ).json()

    r = client.post(
        f"{API}/posts/{second.id}/comments",
        json={"content": "wrong thread", "parent_id": parent["id"]},
        headers=auth_headers(user),
    )
    assert r.status_code == 400


def test_comment_like_is_idempotent(db_session):
    user = make_user(db_session)
    post = make_post(db_session, user)
    comment = client.post(
        f"{API}/posts/{post.id}/comments", json={"content": "yum"}, headers=auth_headers(user)
    ).json()
    like_url = f"{API}/comments/{comment['id']}/like"

    assert client.post(like_url, headers=auth_headers(user)).json()["likes_count"] == 1
    assert client.post(like_url, headers=auth_headers(user)).json()["likes_count"] == 1
    assert client.delete(like_url, headers=auth_headers(user)).json()["likes_count"] == 0
