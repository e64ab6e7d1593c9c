"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.user_schemas import (
    SignupRequest,
    LoginRequest,
    UserUpdateRequest,
    UserPublicResponse,
    UserMeResponse,
    AuthResponse,
    FollowStatusResponse,
    FollowRequestResponse,
)
from domain.schemas.post_schemas import (
    PostCreate,
    PostResponse,
    RecipeCreate,
    RecipeResponse,
    TrendingRecipeResponse,
    CommentCreate,
    CommentResponse,
    CommentThreadResponse,
    BiteCreate,
    BiteResponse,
)
from domain.schemas.marketplace_schemas import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    SellerAnalyticsResponse,
    StoreCreate,
    StoreUpdate,
    StoreLayoutUpdate,
    StoreResponse,
    TierChangeRequest,
    CommissionRequest,
    SubscriptionHistoryResponse,
    CheckoutRequest,
    OrderStatusUpdate,
    OrderResponse,
)
from domain.schemas.planning_schemas import (
    MealPlanCreate,
    MealPlanUpdate,
    MealPlanEntryCreate,
    MealPlanEntryResponse,
    MealPlanResponse,
    PantryItemCreate,
    PantryItemUpdate,
    PantryItemResponse,
    PantryRecipeMatch,
    NutritionGoalsUpdate,
    NutritionLogCreate,
    NutritionLogResponse,
    DailyNutritionSummary,
)
from domain.schemas.activity_schemas import (
    SuggestionResponse,
    NotificationResponse,
    CateringEnableRequest,
    CateringSettingsUpdate,
    CateringChefResponse,
    CateringInquiryCreate,
    CateringInquiryStatusUpdate,
    CateringInquiryResponse,
    AgeVerifyRequest,
)

__all__ = [
    # User schemas
    "SignupRequest",
    "LoginRequest",
    "UserUpdateRequest",
    "UserPublicResponse",
    "UserMeResponse",
    "AuthResponse",
    "FollowStatusResponse",
    "FollowRequestResponse",
    # Post schemas
    "PostCreate",
    "PostResponse",
    "RecipeCreate",
    "RecipeResponse",
    "TrendingRecipeResponse",
    "CommentCreate",
    "CommentResponse",
    "CommentThreadResponse",
    "BiteCreate",
    "BiteResponse",
    # Marketplace schemas
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",
    "SellerAnalyticsResponse",
    "StoreCreate",
    "StoreUpdate",
    "StoreLayoutUpdate",
    "StoreResponse",
    "TierChangeRequest",
    "CommissionRequest",
    "SubscriptionHistoryResponse",
    "CheckoutRequest",
    "OrderStatusUpdate",
    "OrderResponse",
    # Planning schemas
    "MealPlanCreate",
    "MealPlanUpdate",
    "MealPlanEntryCreate",
    "MealPlanEntryResponse",
    "MealPlanResponse",
    "PantryItemCreate",
    "PantryItemUpdate",
    "PantryItemResponse",
    "PantryRecipeMatch",
    "NutritionGoalsUpdate",
    "NutritionLogCreate",
    "NutritionLogResponse",
    "DailyNutritionSummary",
    # Activity schemas
    "SuggestionResponse",
    "NotificationResponse",
    "CateringEnableRequest",
    "CateringSettingsUpdate",
    "CateringChefResponse",
    "CateringInquiryCreate",
    "CateringInquiryStatusUpdate",
    "CateringInquiryResponse",
    "AgeVerifyRequest",
]
