"""User profile routes"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_current_user
from domain.mappers import UserMapper
from domain.models import User, get_db_session
from domain.schemas.user_schemas import UserMeResponse, UserPublicResponse, UserUpdateRequest
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger("chefsire.api.users")


@router.patch("/me", response_model=UserMeResponse)
def update_me(
    update: UserUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Update the caller's profile"""
    return UserMapper.to_me(UserService.update_profile(db, user, update))


@router.get("/search", response_model=List[UserPublicResponse])
def search_users(
    q: str = Query(..., min_length=1, description="Matches username or display name"),
    db: Session = Depends(get_db_session),
):
    return [UserMapper.to_public(u) for u in UserService.search(db, q.strip())]


@router.get("/suggested", response_model=List[UserPublicResponse])
def suggested_users(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    """Popular users the caller does not follow yet"""
    return [UserMapper.to_public(u) for u in UserService.suggested(db, user.id)]


@router.get("/by-username/{username}", response_model=UserPublicResponse)
def get_by_username(username: str, db: Session = Depends(get_db_session)):
    return UserMapper.to_public(UserService.get_by_username(db, username))


@router.get("/{user_id}", response_model=UserPublicResponse)
def get_user(user_id: UUID, db: Session = Depends(get_db_session)):
    return UserMapper.to_public(UserService.get_user(db, user_id))
