"""
Meal planning models.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow


class MealPlan(Base):
    """Named date range of planned meals"""

    __tablename__ = "meal_plans"
    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_meal_plans_range"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(Text, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="meal_plans")
    entries = relationship(
        "MealPlanEntry", back_populates="plan", cascade="all, delete-orphan"
    )


class MealPlanEntry(Base):
    """Individual meal in a meal plan"""

    __tablename__ = "meal_plan_entries"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    meal_plan_id = Column(
        Uuid, ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipe_id = Column(Uuid, ForeignKey("recipes.id", ondelete="SET NULL"))
    custom_name = Column(Text)
    date = Column(Date, nullable=False)
    meal_type = Column(String(20), nullable=False)  # breakfast, lunch, dinner, snack
    servings = Column(Integer, nullable=False, default=1)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    plan = relationship("MealPlan", back_populates="entries")
    recipe = relationship("Recipe")
