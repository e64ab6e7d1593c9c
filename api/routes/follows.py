"""Follow graph and follow request routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import Pagination, get_current_user
from domain.mappers import UserMapper
from domain.models import User, get_db_session
from domain.schemas.user_schemas import (
    FollowRequestResponse,
    FollowStatusResponse,
    UserPublicResponse,
)
from services.follow_service import FollowService

router = APIRouter(prefix="/follows", tags=["Follows"])
logger = logging.getLogger("chefsire.api.follows")


@router.get("/requests", response_model=List[FollowRequestResponse])
def pending_requests(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    """Pending follow requests addressed to the caller"""
    return FollowService.pending_requests(db, user.id)


@router.post("/requests/{request_id}/accept", response_model=FollowRequestResponse)
def accept_request(
    request_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return FollowService.respond_to_request(db, user, request_id, accept=True)


@router.post("/requests/{request_id}/reject", response_model=FollowRequestResponse)
def reject_request(
    request_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return FollowService.respond_to_request(db, user, request_id, accept=False)


@router.post("/{user_id}", status_code=status.HTTP_201_CREATED)
def follow(user_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    """Follow a user; private accounts get a follow request instead"""
    return FollowService.follow(db, user, user_id)


@router.delete("/{user_id}")
def unfollow(user_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    FollowService.unfollow(db, user, user_id)
    return {"status": "unfollowed"}


@router.get("/{user_id}/status", response_model=FollowStatusResponse)
def follow_status(
    user_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return FollowService.status(db, user.id, user_id)


@router.get("/{user_id}/followers", response_model=List[UserPublicResponse])
def followers(user_id: UUID, page: Pagination = Depends(), db: Session = Depends(get_db_session)):
    return [UserMapper.to_public(u) for u in FollowService.followers(db, user_id, page.offset, page.limit)]


@router.get("/{user_id}/following", response_model=List[UserPublicResponse])
def following(user_id: UUID, page: Pagination = Depends(), db: Session = Depends(get_db_session)):
    return [UserMapper.to_public(u) for u in FollowService.following(db, user_id, page.offset, page.limit)]
