from typing import List
from sqlalchemy.orm import Session
import logging
import uuid

from domain.enums import MealType
from domain.models import MealPlan, MealPlanEntry, User
from domain.schemas.planning_schemas import MealPlanCreate, MealPlanEntryCreate, MealPlanUpdate
from repositories import MealPlanEntryRepository, MealPlanRepository, RecipeRepository
from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError

logger = logging.getLogger("chefsire.meal_plans")

MEAL_ORDER = {m.value: i for i, m in enumerate(MealType)}


def sort_entries(entries: List[MealPlanEntry]) -> List[MealPlanEntry]:
    """Order entries by date, then breakfast/lunch/dinner/snack"""
    return sorted(entries, key=lambda e: (e.date, MEAL_ORDER.get(e.meal_type, len(MEAL_ORDER))))


class MealPlanService:
    @staticmethod
    def create_plan(db: Session, user: User, payload: MealPlanCreate) -> MealPlan:
        plan = MealPlanRepository(db).create(
            MealPlan(
                user_id=user.id,
                name=payload.name,
                start_date=payload.start_date,
                end_date=payload.end_date,
            )
        )
        logger.info("User %s created meal plan %s", user.id, plan.id)
        return plan

    @staticmethod
    def list_plans(db: Session, user_id: uuid.UUID) -> List[MealPlan]:
        return MealPlanRepository(db).for_user(user_id)

    @staticmethod
    def get_plan(db: Session, user: User, plan_id: uuid.UUID) -> MealPlan:
        plan = MealPlanRepository(db).get_by_id(plan_id)
        if not plan:
            raise NotFoundError(f"Meal plan {plan_id} not found")
        if plan.user_id != user.id:
            raise ForbiddenError("This meal plan belongs to another user", code="NOT_OWNER")
        return plan

    @staticmethod
    def update_plan(db: Session, user: User, plan_id: uuid.UUID, payload: MealPlanUpdate) -> MealPlan:
        plan = MealPlanService.get_plan(db, user, plan_id)
        changes = payload.model_dump(exclude_unset=True)
        start = changes.get("start_date", plan.start_date)
        end = changes.get("end_date", plan.end_date)
        if start > end:
            raise ServiceValidationError("start_date must be on or before end_date")
        outside = [e for e in plan.entries if not start <= e.date <= end]
        if outside:
            raise ServiceValidationError(
                "Plan entries fall outside the new date range",
                details={"entry_ids": [str(e.id) for e in outside]},
            )
        for key, value in changes.items():
            setattr(plan, key, value)
        return MealPlanRepository(db).update(plan)

    @staticmethod
    def delete_plan(db: Session, user: User, plan_id: uuid.UUID) -> None:
        plan = MealPlanService.get_plan(db, user, plan_id)
        db.delete(plan)
        db.commit()

    @staticmethod
    def add_entry(db: Session, user: User, plan_id: uuid.UUID, payload: MealPlanEntryCreate) -> MealPlanEntry:
        """
        Add a meal to a plan.

        Raises:
            ServiceValidationError: If the date is outside the plan range
            NotFoundError: If the plan or referenced recipe does not exist
        """
        plan = MealPlanService.get_plan(db, user, plan_id)
        if not plan.start_date <= payload.date <= plan.end_date:
            raise ServiceValidationError(
                f"Date {payload.date} is outside the plan ({plan.start_date} to {plan.end_date})"
            )
        if payload.recipe_id and not RecipeRepository(db).exists(payload.recipe_id):
            raise NotFoundError(f"Recipe {payload.recipe_id} not found")

        data = payload.model_dump()
        data["meal_type"] = payload.meal_type.value
        return MealPlanEntryRepository(db).create(MealPlanEntry(meal_plan_id=plan.id, **data))

    @staticmethod
    def remove_entry(db: Session, user: User, plan_id: uuid.UUID, entry_id: uuid.UUID) -> None:
        MealPlanService.get_plan(db, user, plan_id)
        repo = MealPlanEntryRepository(db)
        entry = repo.get_by_id(entry_id)
        if not entry or entry.meal_plan_id != plan_id:
            raise NotFoundError(f"Meal plan entry {entry_id} not found")
        repo.delete(entry_id)

    @staticmethod
    def entries(db: Session, plan: MealPlan) -> List[MealPlanEntry]:
        return sort_entries(MealPlanEntryRepository(db).for_plan(plan.id))
