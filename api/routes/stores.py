"""Store builder routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import Optional

from api.dependencies import get_current_user, get_optional_user
from domain.models import User, get_db_session
from domain.schemas.marketplace_schemas import (
    ProductResponse,
    StoreCreate,
    StoreLayoutUpdate,
    StoreResponse,
    StoreUpdate,
)
from services.store_service import StoreService

router = APIRouter(prefix="/stores", tags=["Stores"])
logger = logging.getLogger("chefsire.api.stores")


@router.post("", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
def create_store(
    payload: StoreCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return StoreService.create_store(db, user, payload)


@router.get("/mine", response_model=StoreResponse)
def my_store(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return StoreService.mine(db, user)


@router.get("/{handle}")
def get_store(
    handle: str,
    viewer: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db_session),
):
    """A published store with its owner's active products"""
    data = StoreService.get_by_handle(db, handle, viewer)
    return {
        "store": StoreResponse.model_validate(data["store"]),
        "products": [ProductResponse.model_validate(p) for p in data["products"]],
    }


@router.patch("/{store_id}", response_model=StoreResponse)
def update_store(
    store_id: UUID,
    payload: StoreUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return StoreService.update_store(db, user, store_id, payload)


@router.put("/{store_id}/layout", response_model=StoreResponse)
def update_layout(
    store_id: UUID,
    payload: StoreLayoutUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return StoreService.update_layout(db, user, store_id, payload.layout)


@router.post("/{store_id}/publish", response_model=StoreResponse)
def publish_store(store_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return StoreService.set_published(db, user, store_id, True)


@router.post("/{store_id}/unpublish", response_model=StoreResponse)
def unpublish_store(store_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return StoreService.set_published(db, user, store_id, False)
