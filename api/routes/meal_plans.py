"""Meal plan routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_current_user
from domain.models import MealPlan, User, get_db_session
from domain.schemas.planning_schemas import (
    MealPlanCreate,
    MealPlanEntryCreate,
    MealPlanEntryResponse,
    MealPlanResponse,
    MealPlanUpdate,
)
from services.meal_plan_service import MealPlanService

router = APIRouter(prefix="/meal-plans", tags=["Meal Plans"])
logger = logging.getLogger("chefsire.api.meal_plans")


def _with_entries(db: Session, plan: MealPlan) -> MealPlanResponse:
    response = MealPlanResponse.model_validate(plan)
    response.entries = [
        MealPlanEntryResponse.model_validate(e) for e in MealPlanService.entries(db, plan)
    ]
    return response


@router.get("", response_model=List[MealPlanResponse])
def list_plans(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return [_with_entries(db, p) for p in MealPlanService.list_plans(db, user.id)]


@router.post("", response_model=MealPlanResponse, status_code=status.HTTP_201_CREATED)
def create_plan(
    payload: MealPlanCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return _with_entries(db, MealPlanService.create_plan(db, user, payload))


@router.get("/{plan_id}", response_model=MealPlanResponse)
def get_plan(plan_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    """A plan with its entries ordered by date, then breakfast through snack"""
    return _with_entries(db, MealPlanService.get_plan(db, user, plan_id))


@router.patch("/{plan_id}", response_model=MealPlanResponse)
def update_plan(
    plan_id: UUID,
    payload: MealPlanUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return _with_entries(db, MealPlanService.update_plan(db, user, plan_id, payload))


@router.delete("/{plan_id}")
def delete_plan(plan_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    MealPlanService.delete_plan(db, user, plan_id)
    return {"status": "ok", "deleted": str(plan_id)}


@router.post(
    "/{plan_id}/entries",
    response_model=MealPlanEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_entry(
    plan_id: UUID,
    payload: MealPlanEntryCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return MealPlanService.add_entry(db, user, plan_id, payload)


@router.delete("/{plan_id}/entries/{entry_id}")
def remove_entry(
    plan_id: UUID,
    entry_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    MealPlanService.remove_entry(db, user, plan_id, entry_id)
    return {"status": "ok", "removed": str(entry_id)}
