from typing import List, Optional
from sqlalchemy.orm import Session
from datetime import datetime, timedelta
import logging
import uuid

from domain.models import Story, User, utcnow
from domain.schemas.post_schemas import BiteCreate
from repositories import FollowRepository, StoryRepository
from app.exceptions import ForbiddenError, NotFoundError

logger = logging.getLogger("chefsire.bites")


class BiteService:
    """Bites are stories: media posts that vanish once expires_at passes."""

    @staticmethod
    def create_bite(db: Session, user: User, payload: BiteCreate, now: Optional[datetime] = None) -> Story:
        now = now or utcnow()
        bite = Story(
            user_id=user.id,
            media_url=payload.media_url,
            caption=payload.caption,
            created_at=now,
            expires_at=now + timedelta(hours=payload.duration_hours),
        )
        bite = StoryRepository(db).create(bite)
        logger.info("User %s posted bite %s (expires %s)", user.id, bite.id, bite.expires_at)
        return bite

    @staticmethod
    def active_feed(db: Session, user_id: uuid.UUID, now: Optional[datetime] = None) -> List[Story]:
        """Unexpired bites from the user and everyone they follow"""
        author_ids = FollowRepository(db).following_ids(user_id) + [user_id]
        return StoryRepository(db).active_for_users(author_ids, now or utcnow())

    @staticmethod
    def active_for_user(db: Session, user_id: uuid.UUID, now: Optional[datetime] = None) -> List[Story]:
        return StoryRepository(db).active_for_users([user_id], now or utcnow())

    @staticmethod
    def delete_bite(db: Session, user: User, bite_id: uuid.UUID) -> None:
        repo = StoryRepository(db)
        bite = repo.get_by_id(bite_id)
        if not bite:
            raise NotFoundError(f"Bite {bite_id} not found")
        if bite.user_id != user.id:
            raise ForbiddenError("You can only delete your own bites", code="NOT_OWNER")
        repo.delete(bite_id)
