"""Bites: short-lived stories"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_current_user
from domain.models import User, get_db_session
from domain.schemas.post_schemas import BiteCreate, BiteResponse
from services.bite_service import BiteService

router = APIRouter(prefix="/bites", tags=["Bites"])
logger = logging.getLogger("chefsire.api.bites")


@router.post("", response_model=BiteResponse, status_code=status.HTTP_201_CREATED)
def create_bite(
    payload: BiteCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return BiteService.create_bite(db, user, payload)


@router.get("/active/{user_id}", response_model=List[BiteResponse])
def active_bites(user_id: UUID, db: Session = Depends(get_db_session)):
    """Unexpired bites from the user and the people they follow"""
    return BiteService.active_feed(db, user_id)


@router.get("/user/{user_id}", response_model=List[BiteResponse])
def user_bites(user_id: UUID, db: Session = Depends(get_db_session)):
    return BiteService.active_for_user(db, user_id)


@router.delete("/{bite_id}")
def delete_bite(bite_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    BiteService.delete_bite(db, user, bite_id)
    return {"status": "ok", "deleted": str(bite_id)}
