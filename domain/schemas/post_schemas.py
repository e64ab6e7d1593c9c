from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from domain.schemas.user_schemas import UserPublicResponse


class RecipeCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    image_url: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    cook_time: Optional[int] = Field(None, ge=0)
    servings: Optional[int] = Field(None, ge=1)
    difficulty: Optional[str] = Field(None, max_length=20)
    calories: Optional[int] = Field(None, ge=0)
    protein: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    fat: Optional[float] = Field(None, ge=0)
    cuisine: Optional[str] = None
    meal_type: Optional[str] = None
    diet_tags: List[str] = Field(default_factory=list)

    model_config = {"str_strip_whitespace": True}

    @field_validator("ingredients", "instructions", "diet_tags")
    def drop_blank(cls, v):
        return [s.strip() for s in v if s and s.strip()]


class RecipeResponse(BaseModel):
    id: UUID
    post_id: UUID
    title: str
    image_url: Optional[str] = None
    ingredients: List[str]
    instructions: List[str]
    cook_time: Optional[int] = None
    servings: Optional[int] = None
    difficulty: Optional[str] = None
    calories: Optional[int] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    cuisine: Optional[str] = None
    meal_type: Optional[str] = None
    diet_tags: List[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class PostCreate(BaseModel):
    caption: Optional[str] = Field(None, max_length=2200)
    image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_recipe: bool = False
    recipe: Optional[RecipeCreate] = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("tags")
    def normalize_tags(cls, v):
        return [t.lower().strip().lstrip("#") for t in v if t and t.strip()]


class PostResponse(BaseModel):
    id: UUID
    user_id: UUID
    caption: Optional[str] = None
    image_url: Optional[str] = None
    tags: List[str]
    is_recipe: bool
    likes_count: int
    comments_count: int
    created_at: datetime
    user: Optional[UserPublicResponse] = None
    recipe: Optional[RecipeResponse] = None
    is_liked: bool = False

    model_config = {"from_attributes": True}


class TrendingRecipeResponse(BaseModel):
    recipe: RecipeResponse
    post: PostResponse
    score: int


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)
    parent_id: Optional[UUID] = None

    model_config = {"str_strip_whitespace": True}


class CommentResponse(BaseModel):
    id: UUID
    post_id: UUID
    user_id: UUID
    parent_id: Optional[UUID] = None
    content: str
    likes_count: int
    created_at: datetime
    user: Optional[UserPublicResponse] = None

    model_config = {"from_attributes": True}


class CommentThreadResponse(CommentResponse):
    replies: List["CommentThreadResponse"] = Field(default_factory=list)


class BiteCreate(BaseModel):
    media_url: str = Field(..., min_length=1)
    caption: Optional[str] = Field(None, max_length=500)
    duration_hours: int = Field(24, ge=1, le=48)

    model_config = {"str_strip_whitespace": True}


class BiteResponse(BaseModel):
    id: UUID
    user_id: UUID
    media_url: str
    caption: Optional[str] = None
    expires_at: datetime
    created_at: datetime
    user: Optional[UserPublicResponse] = None

    model_config = {"from_attributes": True}
