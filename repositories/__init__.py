"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import (
    UserRepository,
    FollowRepository,
    DrinkStatsRepository,
)
from repositories.post_repository import (
    PostRepository,
    RecipeRepository,
    LikeRepository,
    StoryRepository,
)
from repositories.comment_repository import CommentRepository
from repositories.marketplace_repository import (
    ProductRepository,
    OrderRepository,
    StoreRepository,
    SubscriptionHistoryRepository,
)
from repositories.meal_plan_repository import MealPlanRepository, MealPlanEntryRepository
from repositories.pantry_repository import PantryRepository, NutritionRepository
from repositories.activity_repository import (
    SuggestionRepository,
    NotificationRepository,
    CateringInquiryRepository,
)

__all__ = [
    "BaseRepository",
    "UserRepository",
    "FollowRepository",
    "DrinkStatsRepository",
    "PostRepository",
    "RecipeRepository",
    "LikeRepository",
    "StoryRepository",
    "CommentRepository",
    "ProductRepository",
    "OrderRepository",
    "StoreRepository",
    "SubscriptionHistoryRepository",
    "MealPlanRepository",
    "MealPlanEntryRepository",
    "PantryRepository",
    "NutritionRepository",
    "SuggestionRepository",
    "NotificationRepository",
    "CateringInquiryRepository",
]
