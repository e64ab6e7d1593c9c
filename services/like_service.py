from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging
import uuid

from domain.enums import NotificationType
from domain.models import Like, User
from repositories import LikeRepository, PostRepository
from services.notification_service import NotificationService
from app.exceptions import ConflictError, NotFoundError

logger = logging.getLogger("chefsire.likes")


class LikeService:
    @staticmethod
    def like_post(db: Session, user: User, post_id: uuid.UUID) -> Like:
        """
        Like a post, bump its counter and notify the author.

        Raises:
            NotFoundError: If the post does not exist
            ConflictError: If the user already liked the post
        """
        post = PostRepository(db).get_by_id(post_id)
        if not post:
            raise NotFoundError(f"Post {post_id} not found")
        repo = LikeRepository(db)
        if repo.get_pair(user.id, post_id):
            raise ConflictError("Post already liked", code="ALREADY_LIKED")

        try:
            like = repo.add(Like(user_id=user.id, post_id=post_id))
            post.likes_count = (post.likes_count or 0) + 1
            NotificationService.notify(
                db,
                user_id=post.user_id,
                actor_id=user.id,
                type=NotificationType.LIKE,
                title="New like",
                message=f"{user.display_name} liked your post",
                data={"post_id": str(post_id)},
            )
            db.commit()
            return like
        except IntegrityError:
            # Lost a race with a concurrent like from the same user
            db.rollback()
            raise ConflictError("Post already liked", code="ALREADY_LIKED")

    @staticmethod
    def unlike_post(db: Session, user: User, post_id: uuid.UUID) -> None:
        post = PostRepository(db).get_by_id(post_id)
        if not post:
            raise NotFoundError(f"Post {post_id} not found")
        like = LikeRepository(db).get_pair(user.id, post_id)
        if not like:
            raise NotFoundError("Post is not liked")
        db.delete(like)
        post.likes_count = max(0, (post.likes_count or 0) - 1)
        db.commit()

    @staticmethod
    def is_liked(db: Session, user_id: uuid.UUID, post_id: uuid.UUID) -> bool:
        return LikeRepository(db).get_pair(user_id, post_id) is not None
