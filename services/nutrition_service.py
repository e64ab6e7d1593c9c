from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from datetime import date, datetime, time, timedelta
from decimal import Decimal
import logging

from app.config import settings
from domain.models import NutritionLog, User, utcnow
from domain.schemas.planning_schemas import NutritionGoalsUpdate, NutritionLogCreate
from repositories import NutritionRepository, RecipeRepository, UserRepository
from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError

logger = logging.getLogger("chefsire.nutrition")

MACROS = ("calories", "protein", "carbs", "fat", "fiber")


def _require_premium(user: User) -> None:
    if not user.nutrition_premium:
        raise ForbiddenError(
            "Nutrition tracking requires premium. Start a free trial to continue.",
            code="PREMIUM_REQUIRED",
        )


def summarize(logs: List[NutritionLog]) -> Dict[str, float]:
    """Totals per macro, each log weighted by its servings"""
    totals = {m: Decimal("0") for m in MACROS}
    for log in logs:
        servings = Decimal(log.servings or 1)
        for m in MACROS:
            totals[m] += Decimal(getattr(log, m) or 0) * servings
    return {m: round(float(v), 2) for m, v in totals.items()}


class NutritionService:
    @staticmethod
    def start_trial(db: Session, user: User, now: Optional[datetime] = None) -> User:
        """
        Start the one-time nutrition premium trial.

        Raises:
            ServiceValidationError: If premium is active or a trial was used
        """
        now = now or utcnow()
        if user.nutrition_premium:
            raise ServiceValidationError("Nutrition premium is already active", code="ALREADY_PREMIUM")
        if user.nutrition_trial_ends_at is not None:
            raise ServiceValidationError("The free trial has already been used", code="TRIAL_USED")

        user.nutrition_premium = True
        user.nutrition_trial_ends_at = now + timedelta(days=settings.nutrition_trial_days)
        logger.info("User %s started nutrition trial until %s", user.id, user.nutrition_trial_ends_at)
        return UserRepository(db).update(user)

    @staticmethod
    def update_goals(db: Session, user: User, payload: NutritionGoalsUpdate) -> User:
        _require_premium(user)
        changes = payload.model_dump(exclude_unset=True)
        if "daily_calorie_goal" in changes:
            user.daily_calorie_goal = changes["daily_calorie_goal"]
        if "macro_goals" in changes:
            user.macro_goals = changes["macro_goals"]
        if "dietary_restrictions" in changes:
            user.dietary_restrictions = [r.strip() for r in changes["dietary_restrictions"] or [] if r.strip()]
        return UserRepository(db).update(user)

    @staticmethod
    def log_meal(db: Session, user: User, payload: NutritionLogCreate) -> NutritionLog:
        _require_premium(user)
        if payload.recipe_id and not RecipeRepository(db).exists(payload.recipe_id):
            raise NotFoundError(f"Recipe {payload.recipe_id} not found")
        if not payload.recipe_id and not payload.custom_food_name:
            raise ServiceValidationError("Provide a recipe or a custom food name")

        data = payload.model_dump(exclude={"date"})
        data["meal_type"] = payload.meal_type.value
        return NutritionRepository(db).create(
            NutritionLog(user_id=user.id, date=payload.date or utcnow(), **data)
        )

    @staticmethod
    def daily_summary(db: Session, user: User, day: Optional[date] = None) -> Dict[str, Any]:
        day = day or utcnow().date()
        start = datetime.combine(day, time.min)
        logs = NutritionRepository(db).in_range(user.id, start, start + timedelta(days=1))
        totals = summarize(logs)
        goal = user.daily_calorie_goal
        return {
            "date": day,
            "totals": totals,
            "daily_calorie_goal": goal,
            "macro_goals": user.macro_goals,
            "remaining_calories": round(goal - totals["calories"], 2) if goal else None,
            "logs": logs,
        }

    @staticmethod
    def logs_in_range(db: Session, user: User, start: date, end: date) -> List[NutritionLog]:
        """Logs from ``start`` through ``end`` inclusive"""
        if start > end:
            raise ServiceValidationError("start must be on or before end")
        return NutritionRepository(db).in_range(
            user.id,
            datetime.combine(start, time.min),
            datetime.combine(end + timedelta(days=1), time.min),
        )
