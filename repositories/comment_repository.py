"""
Comment Repository - Data access layer for comments and comment likes
"""

from typing import Optional, List, Iterable
from uuid import UUID
from sqlalchemy.orm import Session, joinedload

from repositories.base import BaseRepository
from domain.models import Comment, CommentLike


class CommentRepository(BaseRepository[Comment]):
    """Repository for comment data access"""

    def __init__(self, db: Session):
        super().__init__(db, Comment)

    def for_post(self, post_id: UUID) -> List[Comment]:
        """All comments on a post with their authors, oldest first"""
        return (
            self.db.query(Comment)
            .options(joinedload(Comment.user))
            .filter(Comment.post_id == post_id)
            .order_by(Comment.created_at, Comment.id)
            .all()
        )

    def replies_to(self, parent_ids: Iterable[UUID]) -> List[Comment]:
        ids = list(parent_ids)
        if not ids:
            return []
        return self.db.query(Comment).filter(Comment.parent_id.in_(ids)).all()

    def delete_ids(self, comment_ids: Iterable[UUID]) -> int:
        ids = list(comment_ids)
        if not ids:
            return 0
        return (
            self.db.query(Comment)
            .filter(Comment.id.in_(ids))
            .delete(synchronize_session=False)
        )

    def delete_for_post(self, post_id: UUID) -> int:
        return (
            self.db.query(Comment)
            .filter(Comment.post_id == post_id)
            .delete(synchronize_session=False)
        )

    def get_like(self, user_id: UUID, comment_id: UUID) -> Optional[CommentLike]:
        return (
            self.db.query(CommentLike)
            .filter(CommentLike.user_id == user_id, CommentLike.comment_id == comment_id)
            .first()
        )
