"""
Activity Repository - Data access layer for suggestions, notifications and catering inquiries
"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import AiSuggestion, Notification, CateringInquiry


class SuggestionRepository(BaseRepository[AiSuggestion]):
    def __init__(self, db: Session):
        super().__init__(db, AiSuggestion)

    def active_since(self, user_id: UUID, since: datetime) -> List[AiSuggestion]:
        """Non-dismissed suggestions dated on or after ``since``, newest first"""
        return (
            self.db.query(AiSuggestion)
            .filter(
                AiSuggestion.user_id == user_id,
                AiSuggestion.date >= since,
                AiSuggestion.dismissed.is_(False),
            )
            .order_by(AiSuggestion.created_at.desc())
            .all()
        )

    def get_owned(self, suggestion_id: UUID, user_id: UUID) -> Optional[AiSuggestion]:
        return (
            self.db.query(AiSuggestion)
            .filter(AiSuggestion.id == suggestion_id, AiSuggestion.user_id == user_id)
            .first()
        )


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, db: Session):
        super().__init__(db, Notification)

    def for_user(
        self, user_id: UUID, offset: int = 0, limit: int = 20, unread_only: bool = False
    ) -> List[Notification]:
        q = self.db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            q = q.filter(Notification.read.is_(False))
        return (
            q.order_by(Notification.created_at.desc()).offset(offset).limit(limit).all()
        )

    def unread_count(self, user_id: UUID) -> int:
        return (
            self.db.query(func.count(Notification.id))
            .filter(Notification.user_id == user_id, Notification.read.is_(False))
            .scalar()
        )

    def mark_all_read(self, user_id: UUID) -> int:
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read.is_(False))
            .update({Notification.read: True}, synchronize_session=False)
        )


class CateringInquiryRepository(BaseRepository[CateringInquiry]):
    def __init__(self, db: Session):
        super().__init__(db, CateringInquiry)

    def for_user(self, user_id: UUID) -> List[CateringInquiry]:
        """Inquiries the user sent or received, newest first"""
        return (
            self.db.query(CateringInquiry)
            .filter(
                or_(
                    CateringInquiry.chef_id == user_id,
                    CateringInquiry.customer_id == user_id,
                )
            )
            .order_by(CateringInquiry.created_at.desc())
            .all()
        )
