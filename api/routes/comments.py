"""Comment routes, including the nested thread view"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_current_user
from domain.models import User, get_db_session
from domain.schemas.post_schemas import CommentCreate, CommentResponse, CommentThreadResponse
from services.comment_service import CommentService

router = APIRouter(tags=["Comments"])
logger = logging.getLogger("chefsire.api.comments")


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    post_id: UUID,
    payload: CommentCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Comment on a post, or reply to a comment on the same post"""
    comment = CommentService.add_comment(db, user, post_id, payload.content, payload.parent_id)
    return CommentResponse.model_validate(comment)


@router.get("/posts/{post_id}/comments", response_model=List[CommentResponse])
def list_comments(post_id: UUID, db: Session = Depends(get_db_session)):
    return CommentService.list_comments(db, post_id)


@router.get("/posts/{post_id}/comments/thread", response_model=List[CommentThreadResponse])
def comment_thread(post_id: UUID, db: Session = Depends(get_db_session)):
    """Comments nested by parent, oldest first at every level"""
    return CommentService.get_thread(db, post_id)


@router.delete("/comments/{comment_id}")
def delete_comment(
    comment_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    removed = CommentService.delete_comment(db, user, comment_id)
    return {"status": "ok", "removed": removed}


@router.post("/comments/{comment_id}/like", response_model=CommentResponse)
def like_comment(
    comment_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return CommentResponse.model_validate(CommentService.like_comment(db, user, comment_id))


@router.delete("/comments/{comment_id}/like", response_model=CommentResponse)
def unlike_comment(
    comment_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return CommentResponse.model_validate(CommentService.unlike_comment(db, user, comment_id))
