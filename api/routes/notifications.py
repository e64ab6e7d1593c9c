"""Notification inbox routes"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_current_user
from domain.models import User, get_db_session
from domain.schemas.activity_schemas import NotificationResponse
from services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])
logger = logging.getLogger("chefsire.api.notifications")


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    unread_only: bool = False,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return NotificationService.list_for_user(db, user.id, offset, limit, unread_only)


@router.get("/unread-count")
def unread_count(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return {"count": NotificationService.unread_count(db, user.id)}


@router.post("/read-all")
def mark_all_read(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return {"updated": NotificationService.mark_all_read(db, user.id)}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return NotificationService.mark_read(db, user.id, notification_id)
