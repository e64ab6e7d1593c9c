"""
Domain enums for the ChefSire application.
Contains all enumeration types used across the domain models.
"""

import enum


class SubscriptionTier(str, enum.Enum):
    """Marketplace seller plans, lowest to highest"""

    FREE = "free"
    STARTER = "starter"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"
    PREMIUM_PLUS = "premium_plus"


class SubscriptionStatus(str, enum.Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class DeliveryMethod(str, enum.Enum):
    """How a marketplace order reaches the buyer"""

    SHIPPED = "shipped"
    PICKUP = "pickup"
    IN_STORE = "in_store"
    DIGITAL = "digital"


class ProductCategory(str, enum.Enum):
    SPICES = "spices"
    INGREDIENTS = "ingredients"
    COOKWARE = "cookware"
    COOKBOOKS = "cookbooks"
    SAUCES = "sauces"
    DIGITAL = "digital"
    COURSES = "courses"
    OTHER = "other"


# Categories sold as downloads; they always use the digital commission rate.
DIGITAL_CATEGORIES = frozenset(
    {ProductCategory.DIGITAL, ProductCategory.COOKBOOKS, ProductCategory.COURSES}
)


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class MealType(str, enum.Enum):
    """Meal slots, in the order they are served in a day"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class FollowRequestStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class InquiryStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    COMPLETED = "completed"


class SuggestionType(str, enum.Enum):
    MORNING_DRINK = "morning_drink"
    NUTRITION_GAP = "nutrition_gap"
    MOOD_BASED = "mood_based"


class NotificationType(str, enum.Enum):
    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"
    FOLLOW_REQUEST = "follow_request"
    ORDER = "order"
    CATERING_INQUIRY = "catering_inquiry"
    SUBSCRIPTION = "subscription"
