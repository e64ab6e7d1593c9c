"""
Pantry and nutrition tracking models.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow


class PantryItem(Base):
    """Ingredient a user has at home"""

    __tablename__ = "pantry_items"
    __table_args__ = (
        CheckConstraint("quantity IS NULL OR quantity >= 0", name="ck_pantry_qty_nonneg"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(Text, nullable=False)
    category = Column(Text)
    quantity = Column(Numeric(10, 2))
    unit = Column(String(20))
    location = Column(Text)  # fridge, freezer, pantry
    expiration_date = Column(Date)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="pantry_items")


class NutritionLog(Base):
    """A logged meal with per-serving nutrition values"""

    __tablename__ = "nutrition_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(DateTime, nullable=False, default=utcnow, index=True)
    meal_type = Column(String(20), nullable=False)
    recipe_id = Column(Uuid, ForeignKey("recipes.id", ondelete="SET NULL"))
    custom_food_name = Column(Text)
    servings = Column(Numeric(6, 2), nullable=False, default=1)
    calories = Column(Integer, nullable=False, default=0)
    protein = Column(Numeric(8, 2), nullable=False, default=0)
    carbs = Column(Numeric(8, 2), nullable=False, default=0)
    fat = Column(Numeric(8, 2), nullable=False, default=0)
    fiber = Column(Numeric(8, 2), nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
