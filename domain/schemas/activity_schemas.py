from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import date, datetime
from uuid import UUID

from domain.enums import InquiryStatus
from domain.schemas.user_schemas import UserPublicResponse


class SuggestionResponse(BaseModel):
    id: UUID
    user_id: UUID
    date: datetime
    suggestion_type: str
    recipe_id: Optional[UUID] = None
    title: str
    reason: Optional[str] = None
    confidence: float
    metadata: Dict[str, Any] = Field(default_factory=dict, validation_alias="extra")
    viewed: bool
    accepted: bool
    dismissed: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class NotificationResponse(BaseModel):
    id: UUID
    user_id: UUID
    actor_id: Optional[UUID] = None
    type: str
    title: str
    message: str
    data: Dict[str, Any]
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class CateringEnableRequest(BaseModel):
    location: str = Field(..., min_length=3, max_length=20, description="Postal code")
    radius_miles: int = Field(25, ge=1, le=500)
    bio: Optional[str] = Field(None, max_length=1000)

    model_config = {"str_strip_whitespace": True}


class CateringSettingsUpdate(BaseModel):
    location: Optional[str] = Field(None, min_length=3, max_length=20)
    radius_miles: Optional[int] = Field(None, ge=1, le=500)
    bio: Optional[str] = Field(None, max_length=1000)
    available: Optional[bool] = None

    model_config = {"str_strip_whitespace": True}


class CateringChefResponse(BaseModel):
    chef: UserPublicResponse
    location: Optional[str] = None
    radius_miles: Optional[int] = None
    bio: Optional[str] = None


class CateringInquiryCreate(BaseModel):
    chef_id: UUID
    event_date: date
    guest_count: Optional[int] = Field(None, ge=1, le=10000)
    event_type: Optional[str] = Field(None, max_length=100)
    cuisine_preferences: List[str] = Field(default_factory=list)
    budget: Optional[str] = Field(None, max_length=100)
    message: str = Field(..., min_length=1, max_length=2000)

    model_config = {"str_strip_whitespace": True}


class CateringInquiryStatusUpdate(BaseModel):
    status: InquiryStatus


class CateringInquiryResponse(BaseModel):
    id: UUID
    customer_id: UUID
    chef_id: UUID
    event_date: date
    guest_count: Optional[int] = None
    event_type: Optional[str] = None
    cuisine_preferences: List[str]
    budget: Optional[str] = None
    message: str
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AgeVerifyRequest(BaseModel):
    birth_date: date
