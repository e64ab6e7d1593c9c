"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
    utcnow,
)
from domain.models.user import User, Follow, FollowRequest, UserDrinkStats
from domain.models.post import Post, Recipe, Like, Comment, CommentLike, Story
from domain.models.marketplace import Product, Order, Store, SubscriptionHistory
from domain.models.meal_plan import MealPlan, MealPlanEntry
from domain.models.pantry import PantryItem, NutritionLog
from domain.models.activity import AiSuggestion, Notification, CateringInquiry

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    "utcnow",
    # User models
    "User",
    "Follow",
    "FollowRequest",
    "UserDrinkStats",
    # Social models
    "Post",
    "Recipe",
    "Like",
    "Comment",
    "CommentLike",
    "Story",
    # Marketplace models
    "Product",
    "Order",
    "Store",
    "SubscriptionHistory",
    # Meal plan models
    "MealPlan",
    "MealPlanEntry",
    # Pantry and nutrition models
    "PantryItem",
    "NutritionLog",
    # Activity models
    "AiSuggestion",
    "Notification",
    "CateringInquiry",
]
