from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime
from uuid import UUID
import re

USERNAME_RE = re.compile(r"^[A-Za-z0-9_]{3,30}$")


class SignupRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    display_name: Optional[str] = Field(None, max_length=80)

    model_config = {"str_strip_whitespace": True}

    @field_validator("username")
    def validate_username(cls, v):
        if not USERNAME_RE.match(v):
            raise ValueError("username may only contain letters, digits and underscores")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    model_config = {"str_strip_whitespace": True}


class UserUpdateRequest(BaseModel):
    display_name: Optional[str] = Field(None, min_length=1, max_length=80)
    bio: Optional[str] = Field(None, max_length=500)
    avatar: Optional[str] = None
    specialty: Optional[str] = Field(None, max_length=100)
    is_private: Optional[bool] = None
    is_chef: Optional[bool] = None

    model_config = {"str_strip_whitespace": True}


class UserPublicResponse(BaseModel):
    id: UUID
    username: str
    display_name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    specialty: Optional[str] = None
    is_chef: bool
    is_private: bool
    posts_count: int
    followers_count: int
    following_count: int
    created_at: datetime

    model_config = {"from_attributes": True}


class UserMeResponse(UserPublicResponse):
    email: str
    subscription_tier: str
    subscription_status: str
    subscription_ends_at: Optional[datetime] = None
    nutrition_premium: bool
    nutrition_trial_ends_at: Optional[datetime] = None
    daily_calorie_goal: Optional[int] = None
    macro_goals: Optional[Dict[str, float]] = None
    dietary_restrictions: List[str] = []
    catering_enabled: bool
    catering_location: Optional[str] = None
    catering_radius: Optional[int] = None
    catering_available: bool


class AuthResponse(BaseModel):
    user: UserMeResponse
    token: str


class FollowStatusResponse(BaseModel):
    following: bool
    requested: bool


class FollowRequestResponse(BaseModel):
    id: UUID
    requester: UserPublicResponse
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
