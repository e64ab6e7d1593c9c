from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Dict
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from domain.enums import MealType


# ---------------------------------------------------------------------------
# Meal plans
# ---------------------------------------------------------------------------


class MealPlanCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    start_date: date
    end_date: date

    model_config = {"str_strip_whitespace": True}

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self


class MealPlanUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    model_config = {"str_strip_whitespace": True}


class MealPlanEntryCreate(BaseModel):
    date: date
    meal_type: MealType
    recipe_id: Optional[UUID] = None
    custom_name: Optional[str] = Field(None, max_length=200)
    servings: int = Field(1, ge=1, le=50)
    notes: Optional[str] = None

    model_config = {"str_strip_whitespace": True}

    @model_validator(mode="after")
    def require_meal(self):
        if self.recipe_id is None and not self.custom_name:
            raise ValueError("either recipe_id or custom_name is required")
        return self


class MealPlanEntryResponse(BaseModel):
    id: UUID
    meal_plan_id: UUID
    recipe_id: Optional[UUID] = None
    custom_name: Optional[str] = None
    date: date
    meal_type: str
    servings: int
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class MealPlanResponse(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    start_date: date
    end_date: date
    created_at: datetime
    entries: List[MealPlanEntryResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Pantry
# ---------------------------------------------------------------------------


class PantryItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    category: Optional[str] = None
    quantity: Optional[Decimal] = Field(None, ge=0)
    unit: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = None
    expiration_date: Optional[date] = None
    notes: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


class PantryItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    category: Optional[str] = None
    quantity: Optional[Decimal] = Field(None, ge=0)
    unit: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = None
    expiration_date: Optional[date] = None
    notes: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


class PantryItemResponse(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    category: Optional[str] = None
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None
    location: Optional[str] = None
    expiration_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class PantryRecipeMatch(BaseModel):
    recipe_id: UUID
    post_id: UUID
    title: str
    image_url: Optional[str] = None
    match_score: int
    matched_ingredients: List[str]
    missing_ingredients: List[str]
    can_make: bool


# ---------------------------------------------------------------------------
# Nutrition
# ---------------------------------------------------------------------------


class MacroGoals(BaseModel):
    protein: float = Field(..., ge=0, le=1000)
    carbs: float = Field(..., ge=0, le=2000)
    fat: float = Field(..., ge=0, le=1000)


class NutritionGoalsUpdate(BaseModel):
    daily_calorie_goal: Optional[int] = Field(None, ge=800, le=10000)
    macro_goals: Optional[MacroGoals] = None
    dietary_restrictions: Optional[List[str]] = None


class NutritionLogCreate(BaseModel):
    meal_type: MealType
    date: Optional[datetime] = None
    recipe_id: Optional[UUID] = None
    custom_food_name: Optional[str] = Field(None, max_length=200)
    servings: Decimal = Field(Decimal("1"), gt=0, le=50)
    calories: int = Field(0, ge=0)
    protein: Decimal = Field(Decimal("0"), ge=0)
    carbs: Decimal = Field(Decimal("0"), ge=0)
    fat: Decimal = Field(Decimal("0"), ge=0)
    fiber: Decimal = Field(Decimal("0"), ge=0)

    model_config = {"str_strip_whitespace": True}


class NutritionLogResponse(BaseModel):
    id: UUID
    user_id: UUID
    date: datetime
    meal_type: str
    recipe_id: Optional[UUID] = None
    custom_food_name: Optional[str] = None
    servings: Decimal
    calories: int
    protein: Decimal
    carbs: Decimal
    fat: Decimal
    fiber: Decimal

    model_config = {"from_attributes": True}


class DailyNutritionSummary(BaseModel):
    date: date
    totals: Dict[str, float]
    daily_calorie_goal: Optional[int] = None
    macro_goals: Optional[Dict[str, float]] = None
    remaining_calories: Optional[float] = None
    logs: List[NutritionLogResponse]
