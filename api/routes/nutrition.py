"""Nutrition tracking routes (premium)"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from datetime import date
from typing import List, Optional

from api.dependencies import get_current_user
from domain.mappers import UserMapper
from domain.models import User, get_db_session
from domain.schemas.planning_schemas import (
    DailyNutritionSummary,
    NutritionGoalsUpdate,
    NutritionLogCreate,
    NutritionLogResponse,
)
from domain.schemas.user_schemas import UserMeResponse
from services.nutrition_service import NutritionService

router = APIRouter(prefix="/nutrition", tags=["Nutrition"])
logger = logging.getLogger("chefsire.api.nutrition")


@router.post("/trial", response_model=UserMeResponse)
def start_trial(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    """Start the one-time free premium trial"""
    return UserMapper.to_me(NutritionService.start_trial(db, user))


@router.put("/goals", response_model=UserMeResponse)
def update_goals(
    payload: NutritionGoalsUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return UserMapper.to_me(NutritionService.update_goals(db, user, payload))


@router.post("/log", response_model=NutritionLogResponse, status_code=status.HTTP_201_CREATED)
def log_meal(
    payload: NutritionLogCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return NutritionService.log_meal(db, user, payload)


@router.get("/daily", response_model=DailyNutritionSummary)
def daily_summary(
    day: Optional[date] = Query(None, alias="date", description="Defaults to today"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Totals weighted by servings, with goals and remaining calories"""
    summary = NutritionService.daily_summary(db, user, day)
    summary["logs"] = [NutritionLogResponse.model_validate(log) for log in summary["logs"]]
    return DailyNutritionSummary(**summary)


@router.get("/logs", response_model=List[NutritionLogResponse])
def logs_in_range(
    start: date = Query(...),
    end: date = Query(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return NutritionService.logs_in_range(db, user, start, end)
