"""Pantry management routes"""

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_current_user
from domain.models import User, get_db_session
from domain.schemas.planning_schemas import (
    PantryItemCreate,
    PantryItemResponse,
    PantryItemUpdate,
)
from services.pantry_service import PantryService

router = APIRouter(prefix="/pantry", tags=["Pantry"])
logger = logging.getLogger("chefsire.api.pantry")


@router.get("", response_model=List[PantryItemResponse])
def get_pantry(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    """Get the caller's pantry items sorted by name"""
    items = PantryService.get_pantry(db, user.id)
    return [PantryItemResponse.model_validate(i) for i in items]


@router.post("", response_model=PantryItemResponse, status_code=status.HTTP_201_CREATED)
def add_pantry_item(
    payload: PantryItemCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    p = PantryService.add_item(db, user, payload)
    return PantryItemResponse.model_validate(p)


@router.get("/expiring", response_model=List[PantryItemResponse])
def get_expiring_soon(
    days: int = Query(
        default=7,
        ge=1,
        le=30,
        description="Number of days ahead to check for expiring items",
    ),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """
    Get pantry items expiring within the specified number of days.

    Returns items ordered by expiry date (soonest first). Items without
    expiry dates, and items expiring today or earlier, are excluded.
    """
    items = PantryService.get_expiring_soon(db, user.id, days)
    return [PantryItemResponse.model_validate(i) for i in items]


@router.patch("/{pantry_item_id}", response_model=PantryItemResponse)
def update_pantry_item(
    pantry_item_id: UUID,
    update: PantryItemUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    updated_item = PantryService.update_item(db, user, pantry_item_id, update)
    return PantryItemResponse.model_validate(updated_item)


@router.delete("/{pantry_item_id}")
def delete_pantry_item(
    pantry_item_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Delete a specific pantry item"""
    PantryService.remove_item(db, user, pantry_item_id)
    return {"status": "ok", "removed": str(pantry_item_id)}
