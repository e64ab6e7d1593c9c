"""
Tests for signup, login, the auth cookie and token handling.
"""

from datetime import timedelta

from test_fixtures import API, client, db_session, make_user, unique_email
from app.security import create_access_token, hash_password, verify_password
from domain.models import User, utcnow


def _signup(username="new_cook", email=None, password="s3cret-pass"):
    return client.post(
        f"{API}/auth/signup",
        json={"username": username, "email": email or unique_email(), "password": password},
    )


def test_password_hashing_round_trip():
    hashed = hash_password("hunter22")
    assert hashed != "hunter22"
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)
    assert not verify_password("hunter22", "")


def test_signup_returns_token_and_sets_cookie(db_session):
    r = _signup()

    assert r.status_code == 201
    body = r.json()
    assert body["token"]
    assert body["user"]["username"] == "new_cook"
    assert body["user"]["display_name"] == "new_cook"
    assert body["user"]["subscription_tier"] == "free"
    assert "password_hash" not in body["user"]
    assert r.cookies.get("auth_token") == body["token"]

    # The cookie alone authenticates
    me = client.get(f"{API}/auth/me")
    assert me.status_code == 200
    assert me.json()["id"] == body["user"]["id"]


def test_duplicate_username_and_email_conflict(db_session):
    email = unique_email()
    assert _signup("dup_user", email).status_code == 201

    same_name = _signup("dup_user")
    assert same_name.status_code == 409
    assert same_name.json()["error"]["code"] == "USERNAME_TAKEN"

    same_email = _signup("other_user", email)
    assert same_email.json()["error"]["code"] == "EMAIL_TAKEN"


def test_signup_validation(db_session):
    short_password = _signup(password="short")
    assert short_password.status_code == 400
    assert short_password.json()["error"]["code"] == "VALIDATION_ERROR"

    bad_email = client.post(
        f"{API}/auth/signup", json={"username": "cook", "email": "not-an-email", "password": "s3cret-pass"}
    )
    assert bad_email.status_code == 400


def test_login_with_right_and_wrong_password(db_session):
    email = unique_email("login")
    make_user(db_session, email=email, password_hash=hash_password("correct-horse"))

    ok = client.post(f"{API}/auth/login", json={"email": email, "password": "correct-horse"})
    assert ok.status_code == 200
    assert ok.json()["user"]["email"] == email

    bad = client.post(f"{API}/auth/login", json={"email": email, "password": "wrong-horse"})
    assert bad.status_code == 401
    assert bad.json()["error"]["code"] == "INVALID_CREDENTIALS"

    unknown = client.post(f"{API}/auth/login", json={"email": unique_email(), "password": "x"})
    assert unknown.status_code == 401


def test_logout_clears_cookie(db_session):
    _signup()
    assert client.get(f"{API}/auth/me").status_code == 200

    client.post(f"{API}/auth/logout")

    assert client.get(f"{API}/auth/me").status_code == 401


def test_bad_and_expired_tokens(db_session):
    user = make_user(db_session)

    garbage = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert garbage.status_code == 401
    assert garbage.json()["error"]["code"] == "BAD_TOKEN"

    expired = create_access_token({"sub": str(user.id)}, expires_delta=timedelta(minutes=-5))
    r = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert r.json()["error"]["code"] == "BAD_TOKEN"

    missing = client.get(f"{API}/auth/me")
    assert missing.json()["error"]["code"] == "NO_TOKEN"


def test_expired_trial_is_switched_off_on_next_request(db_session):
    user = make_user(
        db_session, nutrition_premium=True, nutrition_trial_ends_at=utcnow() - timedelta(hours=1)
    )
    token = create_access_token({"sub": str(user.id)})

    r = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert r.json()["nutrition_premium"] is False
    db_session.expire_all()
    assert db_session.get(User, user.id).nutrition_premium is False
