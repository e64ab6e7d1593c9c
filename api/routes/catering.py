"""Catering marketplace routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_current_user
from domain.mappers import UserMapper
from domain.models import User, get_db_session
from domain.schemas.activity_schemas import (
    CateringChefResponse,
    CateringEnableRequest,
    CateringInquiryCreate,
    CateringInquiryResponse,
    CateringInquiryStatusUpdate,
    CateringSettingsUpdate,
)
from services.catering_service import CateringService

router = APIRouter(prefix="/catering", tags=["Catering"])
logger = logging.getLogger("chefsire.api.catering")


@router.post("/enable")
def enable(
    payload: CateringEnableRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Chefs only: start taking catering inquiries"""
    return CateringService.status(CateringService.enable(db, user, payload))


@router.post("/disable")
def disable(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return CateringService.status(CateringService.disable(db, user))


@router.patch("/settings")
def update_settings(
    payload: CateringSettingsUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return CateringService.status(CateringService.update_settings(db, user, payload))


@router.get("/status")
def catering_status(user: User = Depends(get_current_user)):
    return CateringService.status(user)


@router.get("/chefs", response_model=List[CateringChefResponse])
def find_chefs(
    location: str = Query(..., min_length=1, description="Postal code"),
    radius: int = Query(25, ge=1, le=500),
    db: Session = Depends(get_db_session),
):
    return [
        CateringChefResponse(
            chef=UserMapper.to_public(listing["chef"]),
            location=listing["location"],
            radius_miles=listing["radius_miles"],
            bio=listing["bio"],
        )
        for listing in CateringService.find_chefs(db, location, radius)
    ]


@router.post(
    "/inquiries",
    response_model=CateringInquiryResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_inquiry(
    payload: CateringInquiryCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return CateringService.create_inquiry(db, user, payload)


@router.get("/inquiries")
def list_inquiries(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    """Inquiries the caller received as a chef and sent as a customer"""
    grouped = CateringService.inquiries(db, user)
    return {
        key: [CateringInquiryResponse.model_validate(i) for i in rows]
        for key, rows in grouped.items()
    }


@router.patch("/inquiries/{inquiry_id}", response_model=CateringInquiryResponse)
def update_inquiry_status(
    inquiry_id: UUID,
    payload: CateringInquiryStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return CateringService.update_inquiry_status(db, user, inquiry_id, payload.status)
