"""Signup, login and session routes"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging

from app.config import settings
from api.dependencies import get_current_user
from domain.mappers import UserMapper
from domain.models import User, get_db_session
from domain.schemas.user_schemas import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UserMeResponse,
)
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("chefsire.api.auth")


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        max_age=settings.jwt_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production(),
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, response: Response, db: Session = Depends(get_db_session)):
    """Create an account and sign it in"""
    user, token = AuthService.signup(
        db, payload.username, payload.email, payload.password, payload.display_name
    )
    _set_auth_cookie(response, token)
    return AuthResponse(user=UserMapper.to_me(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db_session)):
    user, token = AuthService.login(db, payload.email, payload.password)
    _set_auth_cookie(response, token)
    return AuthResponse(user=UserMapper.to_me(user), token=token)


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.auth_cookie_name)
    return {"status": "ok"}


@router.get("/me", response_model=UserMeResponse)
def me(user: User = Depends(get_current_user)):
    return UserMapper.to_me(user)
