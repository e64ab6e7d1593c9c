"""
API dependencies for dependency injection
"""

from typing import Optional
from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import UnauthorizedError
from domain.models import User, get_db_session
from services.auth_service import AuthService

# auto_error=False so a missing header falls through to the cookie
bearer_scheme = HTTPBearer(auto_error=False)


def _token_from(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.auth_cookie_name)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db_session),
) -> User:
    """
    Resolve the caller from a Bearer token or the auth cookie.

    Raises:
        UnauthorizedError: NO_TOKEN or BAD_TOKEN
    """
    return AuthService.resolve_token(db, _token_from(request, credentials))


def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db_session),
) -> Optional[User]:
    """Like get_current_user, but anonymous or bad tokens yield None"""
    token = _token_from(request, credentials)
    if not token:
        return None
    try:
        return AuthService.resolve_token(db, token)
    except UnauthorizedError:
        return None


def is_age_verified(request: Request) -> bool:
    """Age gate: ``X-Age-Verified: 1`` header or the age cookie set by /drinks/age-verify"""
    return (
        request.headers.get("X-Age-Verified") == "1"
        or request.cookies.get(settings.age_cookie_name) == "1"
    )


class Pagination:
    def __init__(
        self,
        offset: int = Query(0, ge=0, description="Number of items to skip"),
        limit: int = Query(10, ge=1, le=100, description="Maximum number of items"),
    ):
        self.offset = offset
        self.limit = limit
