"""Post like routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import Optional

from api.dependencies import get_current_user, get_optional_user
from domain.models import User, get_db_session
from services.like_service import LikeService

router = APIRouter(prefix="/posts/{post_id}/like", tags=["Likes"])
logger = logging.getLogger("chefsire.api.likes")


@router.post("", status_code=status.HTTP_201_CREATED)
def like_post(post_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    LikeService.like_post(db, user, post_id)
    return {"liked": True}


@router.delete("")
def unlike_post(post_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    LikeService.unlike_post(db, user, post_id)
    return {"liked": False}


@router.get("")
def like_status(
    post_id: UUID,
    viewer: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db_session),
):
    """Whether the caller likes the post; always false when anonymous"""
    return {"liked": bool(viewer) and LikeService.is_liked(db, viewer.id, post_id)}
