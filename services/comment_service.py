from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging
import uuid

from domain.enums import NotificationType
from domain.models import Comment, CommentLike, User
from domain.schemas.post_schemas import CommentResponse, CommentThreadResponse
from repositories import CommentRepository, PostRepository
from services.notification_service import NotificationService
from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError

logger = logging.getLogger("chefsire.comments")


def build_comment_tree(comments: List[Comment]) -> List[CommentThreadResponse]:
    """
    Nest comments under their parents.

    Roots and every list of replies are ordered oldest first. A reply whose
    parent is not in ``comments`` is promoted to a root so it is never lost.
    """
    nodes: Dict[uuid.UUID, CommentThreadResponse] = {
        c.id: CommentThreadResponse.model_validate(c) for c in comments
    }
    roots: List[CommentThreadResponse] = []
    for c in comments:
        node = nodes[c.id]
        parent = nodes.get(c.parent_id) if c.parent_id is not None else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.replies.append(node)

    def sort_level(level: List[CommentThreadResponse]) -> None:
        level.sort(key=lambda n: (n.created_at, str(n.id)))
        for n in level:
            sort_level(n.replies)

    sort_level(roots)
    return roots


class CommentService:
    @staticmethod
    def add_comment(
        db: Session, user: User, post_id: uuid.UUID, content: str, parent_id: Optional[uuid.UUID] = None
    ) -> Comment:
        """
        Add a comment or reply and bump the post's comment count.

        Raises:
            NotFoundError: If the post or the parent comment does not exist
            ServiceValidationError: If the parent belongs to another post
        """
        post = PostRepository(db).get_by_id(post_id)
        if not post:
            raise NotFoundError(f"Post {post_id} not found")

        repo = CommentRepository(db)
        if parent_id is not None:
            parent = repo.get_by_id(parent_id)
            if not parent:
                raise NotFoundError(f"Parent comment {parent_id} not found")
            if parent.post_id != post_id:
                raise ServiceValidationError("Parent comment belongs to a different post")

        try:
            comment = repo.add(
                Comment(post_id=post_id, user_id=user.id, parent_id=parent_id, content=content)
            )
            post.comments_count = (post.comments_count or 0) + 1
            NotificationService.notify(
                db,
                user_id=post.user_id,
                actor_id=user.id,
                type=NotificationType.COMMENT,
                title="New comment",
                message=f"{user.display_name} commented: {content[:80]}",
                data={"post_id": str(post_id), "comment_id": str(comment.id)},
            )
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error adding comment to post %s", post_id)
            raise
        db.refresh(comment)
        return comment

    @staticmethod
    def list_comments(db: Session, post_id: uuid.UUID) -> List[CommentResponse]:
        if not PostRepository(db).exists(post_id):
            raise NotFoundError(f"Post {post_id} not found")
        return [CommentResponse.model_validate(c) for c in CommentRepository(db).for_post(post_id)]

    @staticmethod
    def get_thread(db: Session, post_id: uuid.UUID) -> List[CommentThreadResponse]:
        if not PostRepository(db).exists(post_id):
            raise NotFoundError(f"Post {post_id} not found")
        return build_comment_tree(CommentRepository(db).for_post(post_id))

    @staticmethod
    def delete_comment(db: Session, user: User, comment_id: uuid.UUID) -> int:
        """
        Delete a comment and all of its replies.

        Returns:
            Number of comments removed

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller did not write the comment
        """
        repo = CommentRepository(db)
        comment = repo.get_by_id(comment_id)
        if not comment:
            raise NotFoundError(f"Comment {comment_id} not found")
        if comment.user_id != user.id:
            raise ForbiddenError("You can only delete your own comments", code="NOT_OWNER")

        # Deepest replies go first so every row is counted by its own DELETE
        levels = [[comment.id]]
        while levels[-1]:
            levels.append([c.id for c in repo.replies_to(levels[-1])])

        post = PostRepository(db).get_by_id(comment.post_id)
        try:
            removed = sum(repo.delete_ids(level) for level in reversed(levels))
            if post:
                post.comments_count = max(0, (post.comments_count or 0) - removed)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error deleting comment %s", comment_id)
            raise
        db.expire_all()
        return removed

    @staticmethod
    def like_comment(db: Session, user: User, comment_id: uuid.UUID) -> Comment:
        """Idempotent: liking twice leaves a single like"""
        repo = CommentRepository(db)
        comment = repo.get_by_id(comment_id)
        if not comment:
            raise NotFoundError(f"Comment {comment_id} not found")
        if repo.get_like(user.id, comment_id):
            return comment
        try:
            db.add(CommentLike(user_id=user.id, comment_id=comment_id))
            comment.likes_count = (comment.likes_count or 0) + 1
            db.commit()
        except IntegrityError:
            db.rollback()
        db.refresh(comment)
        return comment

    @staticmethod
    def unlike_comment(db: Session, user: User, comment_id: uuid.UUID) -> Comment:
        repo = CommentRepository(db)
        comment = repo.get_by_id(comment_id)
        if not comment:
            raise NotFoundError(f"Comment {comment_id} not found")
        like = repo.get_like(user.id, comment_id)
        if like:
            db.delete(like)
            comment.likes_count = max(0, (comment.likes_count or 0) - 1)
            db.commit()
        return comment
