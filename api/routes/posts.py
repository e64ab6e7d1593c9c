"""Post routes: create, feed, explore and delete"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import Pagination, get_current_user, get_optional_user
from domain.mappers import PostMapper
from domain.models import User, get_db_session
from domain.schemas.post_schemas import PostCreate, PostResponse
from services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["Posts"])
logger = logging.getLogger("chefsire.api.posts")


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Create a post; recipe posts carry their recipe inline"""
    return PostMapper.to_response(PostService.create_post(db, user, payload))


@router.get("/feed", response_model=List[PostResponse])
def get_feed(
    page: Pagination = Depends(),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Posts from the caller and everyone they follow, newest first"""
    posts = PostService.get_feed(db, user.id, page.offset, page.limit)
    return PostMapper.to_responses(posts, PostService.liked_ids(db, user.id, posts))


@router.get("/explore", response_model=List[PostResponse])
def explore(
    page: Pagination = Depends(),
    viewer: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db_session),
):
    posts = PostService.get_explore(db, page.offset, page.limit)
    liked = PostService.liked_ids(db, viewer.id if viewer else None, posts)
    return PostMapper.to_responses(posts, liked)


@router.get("/user/{user_id}", response_model=List[PostResponse])
def user_posts(
    user_id: UUID,
    page: Pagination = Depends(),
    viewer: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db_session),
):
    posts = PostService.get_user_posts(db, user_id, page.offset, page.limit)
    liked = PostService.liked_ids(db, viewer.id if viewer else None, posts)
    return PostMapper.to_responses(posts, liked)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: UUID,
    viewer: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db_session),
):
    post = PostService.get_post(db, post_id)
    liked = PostService.liked_ids(db, viewer.id if viewer else None, [post])
    return PostMapper.to_response(post, post.id in liked)


@router.delete("/{post_id}")
def delete_post(
    post_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Delete one of the caller's posts with its comments, likes and recipe"""
    PostService.delete_post(db, post_id, user.id)
    return {"status": "ok", "deleted": str(post_id)}
