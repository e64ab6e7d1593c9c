from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
import logging
import uuid

from domain.enums import NotificationType
from domain.models import Notification
from repositories import NotificationRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("chefsire.notifications")


class NotificationService:
    @staticmethod
    def notify(
        db: Session,
        user_id: uuid.UUID,
        type: NotificationType,
        title: str,
        message: str,
        data: Optional[Dict[str, Any]] = None,
        actor_id: Optional[uuid.UUID] = None,
    ) -> Optional[Notification]:
        """
        Stage a notification in the caller's transaction.

        The row is committed together with the action that triggered it, so
        a failed like or order never leaves a dangling notification behind.
        Users are never notified about their own actions.

        Returns:
            The staged Notification, or None when actor and recipient match
        """
        if actor_id is not None and actor_id == user_id:
            return None
        notification = Notification(
            user_id=user_id,
            actor_id=actor_id,
            type=NotificationType(type).value,
            title=title,
            message=message,
            data=data or {},
        )
        db.add(notification)
        logger.debug("Queued %s notification for user %s", notification.type, user_id)
        return notification

    @staticmethod
    def list_for_user(
        db: Session, user_id: uuid.UUID, offset: int = 0, limit: int = 20, unread_only: bool = False
    ) -> List[Notification]:
        return NotificationRepository(db).for_user(user_id, offset, limit, unread_only)

    @staticmethod
    def unread_count(db: Session, user_id: uuid.UUID) -> int:
        return NotificationRepository(db).unread_count(user_id)

    @staticmethod
    def mark_read(db: Session, user_id: uuid.UUID, notification_id: uuid.UUID) -> Notification:
        repo = NotificationRepository(db)
        notification = repo.get_by_id(notification_id)
        # Someone else's notification looks the same as a missing one
        if not notification or notification.user_id != user_id:
            raise NotFoundError(f"Notification {notification_id} not found")
        notification.read = True
        return repo.update(notification)

    @staticmethod
    def mark_all_read(db: Session, user_id: uuid.UUID) -> int:
        updated = NotificationRepository(db).mark_all_read(user_id)
        db.commit()
        return updated
