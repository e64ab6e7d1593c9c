"""
Pantry Repository - Data access layer for pantry items and nutrition logs
"""

from datetime import date, datetime
from typing import List
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import PantryItem, NutritionLog


class PantryRepository(BaseRepository[PantryItem]):
    """Repository for pantry data access"""

    def __init__(self, db: Session):
        super().__init__(db, PantryItem)

    def get_by_user_id(self, user_id: UUID) -> List[PantryItem]:
        """Get all pantry items for a user sorted by name"""
        return (
            self.db.query(PantryItem)
            .filter(PantryItem.user_id == user_id)
            .order_by(func.lower(PantryItem.name))
            .all()
        )

    def get_expiring(self, user_id: UUID, after: date, until: date) -> List[PantryItem]:
        """Items expiring strictly after ``after`` and on or before ``until``, soonest first"""
        return (
            self.db.query(PantryItem)
            .filter(
                PantryItem.user_id == user_id,
                PantryItem.expiration_date.isnot(None),
                PantryItem.expiration_date > after,
                PantryItem.expiration_date <= until,
            )
            .order_by(PantryItem.expiration_date.asc(), func.lower(PantryItem.name))
            .all()
        )


class NutritionRepository(BaseRepository[NutritionLog]):
    """Repository for nutrition logs"""

    def __init__(self, db: Session):
        super().__init__(db, NutritionLog)

    def in_range(self, user_id: UUID, start: datetime, end: datetime) -> List[NutritionLog]:
        """Logs with start <= date < end, oldest first"""
        return (
            self.db.query(NutritionLog)
            .filter(
                NutritionLog.user_id == user_id,
                NutritionLog.date >= start,
                NutritionLog.date < end,
            )
            .order_by(NutritionLog.date.asc())
            .all()
        )
