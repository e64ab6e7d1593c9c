"""
Error envelope and edge case tests.

This test suite covers how failures reach the client:
- Validation errors (bad bodies, bad query params, bad path ids)
- Service errors mapped to their HTTP status and code
- Unknown routes
- Unexpected exceptions turned into a generic 500
- Health checks
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from test_fixtures import API, auth_headers, client, db_session, make_user
from app.exceptions import (
    ChefSireError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceValidationError,
    UnauthorizedError,
    UpstreamServiceError,
)
from main import app
from services.user_service import UserService


def assert_envelope(response, status_code, code):
    assert response.status_code == status_code
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == code
    assert body["error"]["message"]
    assert body["timestamp"]
    return body


# =============================================================================
# EXCEPTION CLASSES
# =============================================================================


@pytest.mark.parametrize(
    "error_cls,status_code,code",
    [
        (ServiceValidationError, 400, "SERVICE_VALIDATION_ERROR"),
        (UnauthorizedError, 401, "UNAUTHORIZED"),
        (ForbiddenError, 403, "FORBIDDEN"),
        (NotFoundError, 404, "NOT_FOUND"),
        (ConflictError, 409, "CONFLICT"),
        (UpstreamServiceError, 502, "UPSTREAM_ERROR"),
    ],
)
def test_error_classes_carry_status_and_default_code(error_cls, status_code, code):
    error = error_cls()
    assert isinstance(error, ChefSireError)
    assert error.http_status == status_code
    assert error.to_dict()["code"] == code


def test_error_to_dict_includes_details_only_when_present():
    assert "details" not in NotFoundError("Post missing").to_dict()
    error = ForbiddenError("Limit reached", details={"limit": 5}, code="TIER_LIMIT_REACHED")
    assert error.to_dict() == {
        "code": "TIER_LIMIT_REACHED",
        "message": "Limit reached",
        "details": {"limit": 5},
    }


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


def test_invalid_body_is_a_400_validation_error(db_session):
    user = make_user(db_session)
    r = client.post(f"{API}/posts", json={"caption": 42, "tags": "nope"}, headers=auth_headers(user))

    body = assert_envelope(r, 400, "VALIDATION_ERROR")
    assert isinstance(body["error"]["details"], list)


def test_malformed_path_id_is_a_validation_error():
    assert_envelope(client.get(f"{API}/posts/not-a-uuid"), 400, "VALIDATION_ERROR")


def test_missing_query_param_is_a_validation_error():
    assert_envelope(client.get(f"{API}/users/search"), 400, "VALIDATION_ERROR")


# =============================================================================
# SERVICE AND ROUTING ERRORS
# =============================================================================


def test_service_not_found_uses_envelope():
    assert_envelope(client.get(f"{API}/users/{uuid.uuid4()}"), 404, "NOT_FOUND")


def test_unknown_route_uses_envelope():
    assert_envelope(client.get(f"{API}/definitely-not-here"), 404, "HTTP_404")


def test_missing_token_is_401():
    assert_envelope(client.get(f"{API}/auth/me"), 401, "NO_TOKEN")


def test_unexpected_exception_becomes_500(monkeypatch):
    def explode(db, q):
        raise RuntimeError("database on fire")

    monkeypatch.setattr(UserService, "search", staticmethod(explode))
    unsafe_client = TestClient(app, raise_server_exceptions=False)

    r = unsafe_client.get(f"{API}/users/search", params={"q": "sarah"})

    body = assert_envelope(r, 500, "INTERNAL_SERVER_ERROR")
    assert "database on fire" not in body["error"]["message"]


# =============================================================================
# HEALTH
# =============================================================================


def test_health_check():
    r = client.get(f"{API}/health-check")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "ChefSire"}


def test_database_health_check():
    r = client.get(f"{API}/health-check/db")
    assert r.status_code == 200
    assert r.json() == {"database": "ok"}
