"""
Tests for subscription tier changes, cancellation and expiry.
"""

from datetime import timedelta

from test_fixtures import API, auth_headers, client, db_session, make_user
from domain.enums import SubscriptionTier
from domain.models import SubscriptionHistory, utcnow
from services.subscription_service import SubscriptionService


def test_new_user_is_on_free(db_session):
    user = make_user(db_session)
    r = client.get(f"{API}/subscriptions/me", headers=auth_headers(user))
    assert r.status_code == 200
    body = r.json()
    assert body["tier"] == "free"
    assert body["product_limit"] == 5
    assert body["product_count"] == 0


def test_upgrade_writes_history_and_sets_period(db_session):
    user = make_user(db_session, "seller")
    headers = auth_headers(user)

    r = client.post(f"{API}/subscriptions/upgrade", json={"tier": "professional"}, headers=headers)

    assert r.status_code == 200
    body = r.json()
    assert body["action"] == "upgraded"
    assert body["previous_tier"] == "free"
    assert body["tier"] == "professional"

    history = client.get(f"{API}/subscriptions/history", headers=headers).json()
    assert len(history) == 1
    assert history[0]["tier"] == "professional"
    assert history[0]["status"] == "active"

    db_session.expire_all()
    db_session.refresh(user)
    assert user.subscription_tier == "professional"
    period = user.subscription_ends_at - utcnow()
    assert timedelta(days=29) < period <= timedelta(days=30)


def test_same_active_tier_is_unchanged(db_session):
    user = make_user(db_session, "seller")
    headers = auth_headers(user)
    client.post(f"{API}/subscriptions/upgrade", json={"tier": "starter"}, headers=headers)

    r = client.post(f"{API}/subscriptions/upgrade", json={"tier": "starter"}, headers=headers)

    assert r.json()["action"] == "unchanged"
    assert db_session.query(SubscriptionHistory).filter_by(user_id=user.id).count() == 1


def test_upgrading_to_free_is_rejected(db_session):
    user = make_user(db_session)
    r = client.post(f"{API}/subscriptions/upgrade", json={"tier": "free"}, headers=auth_headers(user))
    assert r.status_code == 400


def test_unknown_tier_is_a_validation_error(db_session):
    user = make_user(db_session)
    r = client.post(f"{API}/subscriptions/upgrade", json={"tier": "gold"}, headers=auth_headers(user))
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_downgrade_must_rank_lower(db_session):
    user = make_user(db_session, "seller")
    headers = auth_headers(user)
    client.post(f"{API}/subscriptions/upgrade", json={"tier": "professional"}, headers=headers)

    up = client.post(f"{API}/subscriptions/downgrade", json={"tier": "enterprise"}, headers=headers)
    assert up.status_code == 400
    assert up.json()["error"]["code"] == "NOT_A_DOWNGRADE"

    down = client.post(f"{API}/subscriptions/downgrade", json={"tier": "starter"}, headers=headers)
    assert down.status_code == 200
    assert down.json()["action"] == "downgraded"


def test_cancel_keeps_access_until_period_end(db_session):
    user = make_user(db_session, "seller")
    headers = auth_headers(user)
    client.post(f"{API}/subscriptions/upgrade", json={"tier": "starter"}, headers=headers)

    r = client.post(f"{API}/subscriptions/cancel", headers=headers)

    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"
    me = client.get(f"{API}/subscriptions/me", headers=headers).json()
    assert me["tier"] == "starter"
    assert me["status"] == "cancelled"


def test_expired_plan_falls_back_to_free(db_session):
    user = make_user(
        db_session,
        "seller",
        subscription_tier="enterprise",
        subscription_ends_at=utcnow() - timedelta(days=1),
    )
    assert SubscriptionService.effective_tier(user) is SubscriptionTier.FREE
    assert client.get(f"{API}/subscriptions/me", headers=auth_headers(user)).json()["tier"] == "free"


def test_subscription_routes_require_auth():
    assert client.get(f"{API}/subscriptions/me").status_code == 401
    assert client.post(f"{API}/subscriptions/cancel").status_code == 401
