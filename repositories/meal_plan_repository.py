"""
Meal Plan Repository - Data access layer for meal plans and their entries
"""

from typing import List
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import MealPlan, MealPlanEntry


class MealPlanRepository(BaseRepository[MealPlan]):
    """Repository for meal plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlan)

    def for_user(self, user_id: UUID) -> List[MealPlan]:
        return (
            self.db.query(MealPlan)
            .filter(MealPlan.user_id == user_id)
            .order_by(MealPlan.start_date.desc(), MealPlan.created_at.desc())
            .all()
        )


class MealPlanEntryRepository(BaseRepository[MealPlanEntry]):
    """Repository for individual planned meals"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlanEntry)

    def for_plan(self, plan_id: UUID) -> List[MealPlanEntry]:
        return (
            self.db.query(MealPlanEntry)
            .filter(MealPlanEntry.meal_plan_id == plan_id)
            .all()
        )
