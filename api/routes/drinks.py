"""Drink routes backed by TheCocktailDB, behind the age gate"""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
import logging
from typing import Optional

from app.config import settings
from api.dependencies import get_current_user, is_age_verified
from domain.models import User, get_db_session
from domain.schemas.activity_schemas import AgeVerifyRequest
from services.drink_service import DrinkService

router = APIRouter(prefix="/drinks", tags=["Drinks"])
logger = logging.getLogger("chefsire.api.drinks")

AGE_COOKIE_MAX_AGE = 60 * 60 * 24 * 30


@router.get("/search")
def search_drinks(
    q: Optional[str] = None,
    ingredient: Optional[str] = None,
    category: Optional[str] = None,
    alcoholic: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(12),
    age_verified: bool = Depends(is_age_verified),
):
    """
    Search drinks by one criterion.

    Precedence is ``q``, then ``ingredient``, ``category`` and ``alcoholic``.
    Alcoholic drinks are hidden unless the request is age-verified.
    """
    return DrinkService.search(
        q=q,
        ingredient=ingredient,
        category=category,
        alcoholic=alcoholic,
        page=page,
        page_size=page_size,
        age_verified=age_verified,
    )


@router.get("/meta")
def drink_meta():
    return DrinkService.meta()


@router.post("/age-verify")
def verify_age(payload: AgeVerifyRequest, response: Response):
    age = DrinkService.verify_age(payload.birth_date)
    response.set_cookie(
        settings.age_cookie_name,
        "1",
        max_age=AGE_COOKIE_MAX_AGE,
        samesite="lax",
        secure=settings.is_production(),
    )
    return {"verified": True, "age": age}


@router.post("/made")
def drink_made(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    """Record a drink made today and return the streak"""
    stats = DrinkService.record_drink_made(db, user)
    return {
        "total_drinks_made": stats.total_drinks_made,
        "current_streak": stats.current_streak,
        "longest_streak": stats.longest_streak,
        "last_drink_date": stats.last_drink_date,
    }


@router.get("/{drink_id}")
def get_drink(drink_id: str, age_verified: bool = Depends(is_age_verified)):
    return DrinkService.get_drink(drink_id, age_verified)
