from typing import Any, Dict, List
from sqlalchemy.orm import Session
import logging
import uuid

from domain.enums import InquiryStatus, NotificationType
from domain.models import CateringInquiry, User
from domain.schemas.activity_schemas import (
    CateringEnableRequest,
    CateringInquiryCreate,
    CateringSettingsUpdate,
)
from repositories import CateringInquiryRepository, UserRepository
from services.notification_service import NotificationService
from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError

logger = logging.getLogger("chefsire.catering")


def chef_listing(chef: User) -> Dict[str, Any]:
    return {
        "chef": chef,
        "location": chef.catering_location,
        "radius_miles": chef.catering_radius,
        "bio": chef.catering_bio,
    }


class CateringService:
    @staticmethod
    def enable(db: Session, user: User, payload: CateringEnableRequest) -> User:
        if not user.is_chef:
            raise ForbiddenError("Only chefs can offer catering", code="NOT_A_CHEF")
        user.catering_enabled = True
        user.catering_available = True
        user.catering_location = payload.location
        user.catering_radius = payload.radius_miles
        user.catering_bio = payload.bio
        logger.info("Chef %s enabled catering around %s", user.id, payload.location)
        return UserRepository(db).update(user)

    @staticmethod
    def disable(db: Session, user: User) -> User:
        user.catering_enabled = False
        user.catering_available = False
        return UserRepository(db).update(user)

    @staticmethod
    def update_settings(db: Session, user: User, payload: CateringSettingsUpdate) -> User:
        if not user.catering_enabled:
            raise ServiceValidationError("Enable catering first", code="CATERING_DISABLED")
        fields = {
            "location": "catering_location",
            "radius_miles": "catering_radius",
            "bio": "catering_bio",
            "available": "catering_available",
        }
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(user, fields[key], value)
        return UserRepository(db).update(user)

    @staticmethod
    def status(user: User) -> Dict[str, Any]:
        return {
            "catering_enabled": user.catering_enabled,
            "catering_available": user.catering_available,
            "location": user.catering_location,
            "radius_miles": user.catering_radius,
            "bio": user.catering_bio,
            "is_chef": user.is_chef,
        }

    @staticmethod
    def find_chefs(db: Session, location: str, radius: int = 25, limit: int = 20) -> List[Dict[str, Any]]:
        """Available chefs in ``location`` willing to travel at least ``radius`` miles"""
        location = location.strip()
        if not location:
            raise ServiceValidationError("location is required")
        chefs = UserRepository(db).find_catering_chefs(location, radius)
        return [chef_listing(c) for c in chefs[:limit]]

    @staticmethod
    def create_inquiry(db: Session, customer: User, payload: CateringInquiryCreate) -> CateringInquiry:
        """
        Raises:
            NotFoundError: If the chef does not exist
            ServiceValidationError: For self-inquiries or chefs not taking catering
        """
        if payload.chef_id == customer.id:
            raise ServiceValidationError("You cannot send an inquiry to yourself")
        chef = UserRepository(db).get_by_id(payload.chef_id)
        if not chef:
            raise NotFoundError(f"Chef {payload.chef_id} not found")
        if not (chef.catering_enabled and chef.catering_available):
            raise ServiceValidationError("This chef is not accepting catering requests", code="CATERING_UNAVAILABLE")

        try:
            inquiry = CateringInquiryRepository(db).add(
                CateringInquiry(customer_id=customer.id, **payload.model_dump())
            )
            NotificationService.notify(
                db,
                user_id=chef.id,
                actor_id=customer.id,
                type=NotificationType.CATERING_INQUIRY,
                title="New catering inquiry",
                message=f"{customer.display_name} asked about catering on {payload.event_date}",
                data={"inquiry_id": str(inquiry.id)},
            )
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error creating catering inquiry for chef %s", chef.id)
            raise
        db.refresh(inquiry)
        return inquiry

    @staticmethod
    def inquiries(db: Session, user: User) -> Dict[str, List[CateringInquiry]]:
        rows = CateringInquiryRepository(db).for_user(user.id)
        return {
            "received": [i for i in rows if i.chef_id == user.id],
            "sent": [i for i in rows if i.customer_id == user.id],
        }

    @staticmethod
    def update_inquiry_status(
        db: Session, chef: User, inquiry_id: uuid.UUID, status: InquiryStatus
    ) -> CateringInquiry:
        repo = CateringInquiryRepository(db)
        inquiry = repo.get_by_id(inquiry_id)
        if not inquiry:
            raise NotFoundError(f"Inquiry {inquiry_id} not found")
        if inquiry.chef_id != chef.id:
            raise ForbiddenError("Only the chef can update this inquiry", code="NOT_OWNER")
        inquiry.status = InquiryStatus(status).value
        return repo.update(inquiry)
